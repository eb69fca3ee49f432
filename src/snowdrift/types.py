"""Validated domain and physical parameters for the snow transport engine.

This module defines:
- Params: Physical constants plus the grid and time discretization
- lround: Half-away-from-zero rounding used for every derived count
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator


def lround(value: float) -> int:
    """Round to the nearest integer, with halves rounded away from zero."""
    if value >= 0.0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


class Params(BaseModel):
    """Domain, discretization and physical parameters.

    Lengths are in meters, times in seconds. Cell counts are derived from the
    extent and cell size and are never stored separately.

    Attributes:
        wind_speed: Ambient horizontal wind, positive to the right [m/s].
        settling_speed: Downward settling speed of snow [m/s].
        precipitation_rate: Precipitation over the top boundary [g/m^2/s].
        ground_height: Flat ground level above y=0 [m].
        settled_snow_density: Reference density of settled snow [g/m^2].
        Lx: Physical width of the domain [m].
        Ly: Physical height of the domain [m].
        dx: Cell size along x [m].
        dy: Cell size along y [m].
        total_sim_time: Simulated time [s].
        time_step_duration: Explicit time step dt [s].
        steps_per_frame: Steps between recorded outputs [-].
    """

    model_config = ConfigDict(frozen=True)

    wind_speed: float = 4.9  # [m/s]
    settling_speed: float = 0.06  # [m/s]
    precipitation_rate: float = 0.1  # [g/m^2/s]
    ground_height: float = 25.0  # [m]
    settled_snow_density: float = 200000.0  # [g/m^2]

    Lx: float = 1000.0  # [m]
    Ly: float = 200.0  # [m]
    dx: float = 10.0  # [m]
    dy: float = 10.0  # [m]

    total_sim_time: float = 36000.0  # [s]
    time_step_duration: float = 0.2  # [s]
    steps_per_frame: int = 1

    @field_validator("Lx", "Ly", "dx", "dy", "time_step_duration")
    @classmethod
    def validate_positive(cls, v: float, info: ValidationInfo) -> float:
        """Extents, cell sizes and the time step must be strictly positive."""
        if not math.isfinite(v) or v <= 0.0:
            msg = f"{info.field_name} must be a positive finite number, got {v}"
            raise ValueError(msg)
        return v

    @field_validator("total_sim_time")
    @classmethod
    def validate_total_sim_time(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0.0:
            msg = f"total_sim_time must be a non-negative finite number, got {v}"
            raise ValueError(msg)
        return v

    @field_validator("steps_per_frame")
    @classmethod
    def validate_steps_per_frame(cls, v: int) -> int:
        if v < 1:
            msg = f"steps_per_frame must be >= 1, got {v}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_cell_counts(self) -> Params:
        """Ensure the grid has at least one cell along each axis."""
        if self.nx <= 0:
            msg = f"Lx={self.Lx} and dx={self.dx} give nx={self.nx}; need at least one cell"
            raise ValueError(msg)
        if self.ny <= 0:
            msg = f"Ly={self.Ly} and dy={self.dy} give ny={self.ny}; need at least one cell"
            raise ValueError(msg)
        return self

    @property
    def nx(self) -> int:
        """Number of cells along x."""
        return lround(self.Lx / self.dx)

    @property
    def ny(self) -> int:
        """Number of cells along y."""
        return lround(self.Ly / self.dy)

    @property
    def dt(self) -> float:
        return self.time_step_duration

    @property
    def total_time_steps(self) -> int:
        """Number of steps covering total_sim_time."""
        return lround(self.total_sim_time / self.time_step_duration)
