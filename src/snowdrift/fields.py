"""Grid containers and the field aggregate for the snow transport engine.

This module defines the data model shared by every backend:
- Field1D: Dense per-column or per-row array with bounds predicate
- Field2D: Dense row-major grid indexed as (i, j) with i along x and j along y
- Fields: The named set of grids for one simulation, sized and staggered consistently

Velocity grids are staggered: the faces surrounding cell (i, j) are
speed_x(i, j) [left], speed_x(i + 1, j) [right], speed_y(i, j) [bottom] and
speed_y(i, j + 1) [top]. Velocities are positive to the right and up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from .constants import AIR

if TYPE_CHECKING:
    from .types import Params


def _as_array(values: np.ndarray, dtype: np.dtype | None, copy: bool | None) -> np.ndarray:
    """Array conversion honoring the numpy copy keyword.

    Without copy=False the result never shares memory with the field, so a
    snapshot survives later steps and buffer swaps.

    Raises:
        ValueError: If copy is False and dtype requires a cast.
    """
    needs_cast = dtype is not None and np.dtype(dtype) != values.dtype
    if copy is False:
        if needs_cast:
            msg = f"Cannot convert {values.dtype} field to {np.dtype(dtype)} without copying"
            raise ValueError(msg)
        return values
    if needs_cast:
        return values.astype(dtype)
    return values.copy()


@dataclass
class Field1D:
    """Dense 1D array with contiguous float storage.

    Element access through ``f[i]`` does not range-check; callers guard with
    ``in_bounds`` first.

    Attributes:
        nx: Number of cells.
        data: Contiguous storage of length nx.
    """

    nx: int
    data: np.ndarray

    def __post_init__(self) -> None:
        if len(self.data) != self.nx:
            msg = f"Field1D data length {len(self.data)} does not match nx={self.nx}"
            raise ValueError(msg)

    @classmethod
    def filled(cls, nx: int, value: float = 0.0, dtype: np.dtype | type = np.float64) -> Field1D:
        """Create a field of size nx with every entry set to value."""
        return cls(nx=nx, data=np.full(nx, value, dtype=dtype))

    @classmethod
    def from_array(cls, values: np.ndarray | list[float], dtype: np.dtype | type = np.float64) -> Field1D:
        """Create a field holding a copy of a 1D sequence."""
        arr = np.array(values, dtype=dtype)
        if arr.ndim != 1:
            msg = f"Field1D values must be 1D, got {arr.ndim}D"
            raise ValueError(msg)
        return cls(nx=len(arr), data=arr)

    def __getitem__(self, i: int) -> float:
        return self.data[i]

    def __setitem__(self, i: int, value: float) -> None:
        self.data[i] = value

    def __len__(self) -> int:
        return self.nx

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert to a 1D array; copies unless copy is False."""
        return _as_array(self.data, dtype, copy)

    def in_bounds(self, i: int) -> bool:
        return 0 <= i < self.nx

    def resize(self, nx: int, fill: float = 0.0) -> None:
        """Resize to nx cells and reinitialize every entry to fill.

        Only used during setup; the simulation never changes shapes mid-run.
        """
        self.nx = nx
        self.data = np.full(nx, fill, dtype=self.data.dtype)

    def copy(self) -> Field1D:
        return Field1D(nx=self.nx, data=self.data.copy())


@dataclass
class Field2D:
    """Dense 2D grid with flat row-major storage.

    Cell (i, j) lives at ``data[j * nx + i]``: i is the column (x) and j the
    row (y). ``grid`` exposes the same storage as a (ny, nx) view indexed
    ``[j, i]``.

    Attributes:
        nx: Cells along x.
        ny: Cells along y.
        data: Contiguous storage of length nx * ny.
    """

    nx: int
    ny: int
    data: np.ndarray

    def __post_init__(self) -> None:
        if len(self.data) != self.nx * self.ny:
            msg = f"Field2D data length {len(self.data)} does not match nx*ny={self.nx * self.ny}"
            raise ValueError(msg)

    @classmethod
    def filled(cls, nx: int, ny: int, value: float = 0.0, dtype: np.dtype | type = np.float64) -> Field2D:
        """Create an nx by ny field with every entry set to value."""
        return cls(nx=nx, ny=ny, data=np.full(nx * ny, value, dtype=dtype))

    @classmethod
    def from_array(cls, values: np.ndarray, dtype: np.dtype | type = np.float64) -> Field2D:
        """Create a field from a (ny, nx) array indexed [j, i]."""
        arr = np.array(values, dtype=dtype)
        if arr.ndim != 2:
            msg = f"Field2D values must be 2D with shape (ny, nx), got {arr.ndim}D"
            raise ValueError(msg)
        ny, nx = arr.shape
        return cls(nx=nx, ny=ny, data=np.ascontiguousarray(arr).ravel())

    @property
    def shape(self) -> tuple[int, int]:
        """Logical (nx, ny) size."""
        return self.nx, self.ny

    @property
    def grid(self) -> np.ndarray:
        """(ny, nx) view sharing storage with data."""
        return self.data.reshape(self.ny, self.nx)

    def idx(self, i: int, j: int) -> int:
        return j * self.nx + i

    def __getitem__(self, key: tuple[int, int]) -> float:
        i, j = key
        return self.data[j * self.nx + i]

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        i, j = key
        self.data[j * self.nx + i] = value

    def __array__(self, dtype: np.dtype | None = None, copy: bool | None = None) -> np.ndarray:
        """Convert to a (ny, nx) array; copies unless copy is False."""
        return _as_array(self.grid, dtype, copy)

    def in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self.nx and 0 <= j < self.ny

    def resize(self, nx: int, ny: int, fill: float = 0.0) -> None:
        """Resize to nx by ny and reinitialize every entry to fill."""
        self.nx = nx
        self.ny = ny
        self.data = np.full(nx * ny, fill, dtype=self.data.dtype)

    def copy(self) -> Field2D:
        return Field2D(nx=self.nx, ny=self.ny, data=self.data.copy())


def _empty_mask() -> Field2D:
    return Field2D.filled(0, 0, AIR, dtype=np.uint8)


def _empty_grid() -> Field2D:
    return Field2D.filled(0, 0)


def _empty_line() -> Field1D:
    return Field1D.filled(0)


@dataclass
class Fields:
    """All grids for one snow transport simulation.

    Owned by the driver and passed by mutable reference into every step.

    Attributes:
        air_mask: 1 = air (snow may occupy), 0 = ground. Shape nx x ny.
        snow_density: Areal snow density [g/m^2]. Shape nx x ny.
        next_snow_density: Scratch buffer for the next step [g/m^2]. Shape nx x ny.
        snow_transport_speed_x: Face-centered horizontal velocity [m/s]. Shape (nx+1) x ny.
        snow_transport_speed_y: Face-centered vertical velocity [m/s]. Shape nx x (ny+1).
        snow_accumulation_mass: Ground-deposited mass per column [g].
        snow_accumulation_density: Reference density of settled snow per column [g/m^2].
        precipitation_source: Top-boundary inflow rate per column [g/m^2/s].
        windborn_horizontal_source_left: Inflow rate per row at x=0 [g/m^2/s].
        windborn_horizontal_source_right: Inflow rate per row at x=nx [g/m^2/s].
    """

    air_mask: Field2D = field(default_factory=_empty_mask)
    snow_density: Field2D = field(default_factory=_empty_grid)
    next_snow_density: Field2D = field(default_factory=_empty_grid)
    snow_transport_speed_x: Field2D = field(default_factory=_empty_grid)
    snow_transport_speed_y: Field2D = field(default_factory=_empty_grid)
    snow_accumulation_mass: Field1D = field(default_factory=_empty_line)
    snow_accumulation_density: Field1D = field(default_factory=_empty_line)
    precipitation_source: Field1D = field(default_factory=_empty_line)
    windborn_horizontal_source_left: Field1D = field(default_factory=_empty_line)
    windborn_horizontal_source_right: Field1D = field(default_factory=_empty_line)

    @classmethod
    def initialize(cls, params: Params, air_mask: Field2D | None = None) -> Fields:
        """Create the standard field set for params.

        Uses the usual setup:
        - Ground below params.ground_height unless an air mask is supplied
        - No snow in the domain and nothing accumulated yet
        - Uniform wind to the right and uniform settling downward
        - Uniform precipitation over the top row
        - Lateral sources at zero (refreshed every step by the driver)

        Args:
            params: Domain and physical parameters.
            air_mask: Optional nx x ny terrain mask. Defaults to flat ground at
                params.ground_height.

        Returns:
            Fields sized and staggered for params.nx by params.ny.
        """
        from .terrain import air_mask_from_ground_height

        nx, ny = params.nx, params.ny
        if air_mask is None:
            air_mask = air_mask_from_ground_height(params)
        elif air_mask.shape != (nx, ny):
            msg = f"air_mask shape {air_mask.shape} does not match grid ({nx}, {ny})"
            raise ValueError(msg)

        return cls(
            air_mask=air_mask,
            snow_density=Field2D.filled(nx, ny),
            next_snow_density=Field2D.filled(nx, ny),
            snow_transport_speed_x=Field2D.filled(nx + 1, ny, params.wind_speed),
            snow_transport_speed_y=Field2D.filled(nx, ny + 1, -params.settling_speed),
            snow_accumulation_mass=Field1D.filled(nx),
            snow_accumulation_density=Field1D.filled(nx, params.settled_snow_density),
            precipitation_source=Field1D.filled(nx, params.precipitation_rate),
            windborn_horizontal_source_left=Field1D.filled(ny),
            windborn_horizontal_source_right=Field1D.filled(ny),
        )

    def swap_density_buffers(self) -> None:
        """Exchange the current and next density buffers."""
        self.snow_density, self.next_snow_density = self.next_snow_density, self.snow_density

    def airborne_mass(self, params: Params) -> float:
        """Total snow mass held in air cells [g]."""
        air = self.air_mask.grid != 0
        return float(np.sum(self.snow_density.grid[air])) * params.dx * params.dy

    def total_mass(self, params: Params) -> float:
        """Airborne mass plus everything deposited on the ground [g]."""
        return self.airborne_mass(params) + float(np.sum(self.snow_accumulation_mass.data))
