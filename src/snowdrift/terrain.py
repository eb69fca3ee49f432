"""Terrain builders producing air masks for the snow grid.

An air mask is an nx by ny Field2D of uint8 where 1 marks air (snow may
occupy the cell) and 0 marks ground. Heights are measured in meters above
y=0, the bottom of the domain.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import rasterio
from rasterio.errors import RasterioIOError

from .constants import AIR, GROUND
from .fields import Field2D
from .types import Params

logger = logging.getLogger(__name__)


def _clamp_height(height: float, params: Params) -> float:
    return min(max(height, 0.0), params.Ly)


def _cell_indices(params: Params) -> tuple[np.ndarray, np.ndarray]:
    """Return (i, j) index grids of shape (ny, nx)."""
    return np.meshgrid(np.arange(params.nx), np.arange(params.ny))


def _mask_from_ground(is_ground: np.ndarray) -> Field2D:
    return Field2D.from_array(np.where(is_ground, GROUND, AIR), dtype=np.uint8)


def air_mask_from_profile(params: Params, ground_heights: np.ndarray) -> Field2D:
    """Build an air mask from a ground height per column.

    A cell is ground when its center lies at or below the ground height of
    its column.

    Args:
        params: Domain parameters.
        ground_heights: Ground height per column [m], length nx.

    Returns:
        Air mask of shape nx by ny.

    Raises:
        ValueError: If ground_heights does not have one value per column.
    """
    heights = np.asarray(ground_heights, dtype=np.float64)
    if heights.shape != (params.nx,):
        msg = f"ground_heights must have shape ({params.nx},), got {heights.shape}"
        raise ValueError(msg)

    cell_center_y = (np.arange(params.ny, dtype=np.float64) + 0.5) * params.dy
    return _mask_from_ground(cell_center_y[:, None] <= heights[None, :])


def air_mask_from_ground_height(params: Params, ground_height: float | None = None) -> Field2D:
    """Flat ground where every cell center at or below ground_height is ground.

    Args:
        params: Domain parameters.
        ground_height: Ground level [m]. Defaults to params.ground_height.
    """
    height = params.ground_height if ground_height is None else ground_height
    return air_mask_from_profile(params, np.full(params.nx, height, dtype=np.float64))


def air_mask_flat(params: Params, distance_from_bottom: float) -> Field2D:
    """Flat ground covering every row up to int(distance_from_bottom / dy).

    The distance is clamped to [0, Ly].
    """
    distance = _clamp_height(distance_from_bottom, params)
    cells_from_bottom = int(distance / params.dy)
    _, j = _cell_indices(params)
    return _mask_from_ground(j <= cells_from_bottom)


def air_mask_slope_up(
    params: Params,
    distance_from_bottom_left: float,
    distance_from_top_right: float,
) -> Field2D:
    """Ground rising linearly from the bottom-left to the top-right.

    The ground starts distance_from_bottom_left above y=0 in the first column
    and reaches distance_from_top_right below y=Ly past the last column. Both
    distances are clamped to [0, Ly].
    """
    cells_from_bottom = int(_clamp_height(distance_from_bottom_left, params) / params.dy)
    cells_from_top = int(_clamp_height(distance_from_top_right, params) / params.dy)
    slope = (params.ny - cells_from_bottom - cells_from_top) / params.nx

    i, j = _cell_indices(params)
    return _mask_from_ground(j.astype(np.float64) <= cells_from_bottom + slope * i)


def air_mask_parabolic(
    params: Params,
    distance_from_bottom_center: float,
    distance_from_top_edge: float,
) -> Field2D:
    """Valley-shaped ground following a parabola centered at x = Lx / 2.

    The ground sits distance_from_bottom_center above y=0 at the center and
    rises to distance_from_top_edge below y=Ly at both edges. Both distances
    are clamped to [0, Ly]. A cell is ground when its center lies at or below
    the parabola.

    The edge height is therefore Ly - distance_from_top_edge, measured from
    the top like air_mask_slope_up. It is not distance_from_top_edge above
    y=0; pass Ly - h to get ground of height h at the edges.
    """
    bottom = _clamp_height(distance_from_bottom_center, params)
    edge_height = params.Ly - _clamp_height(distance_from_top_edge, params)

    vertex_x = 0.5 * params.Lx
    denom = vertex_x * vertex_x
    a = (edge_height - bottom) / denom if denom > 0.0 else 0.0

    x_center = (np.arange(params.nx, dtype=np.float64) + 0.5) * params.dx
    ground_y = a * (x_center - vertex_x) ** 2 + bottom
    return air_mask_from_profile(params, ground_y)


def ground_profile_from_dem(
    dem_path: str | Path,
    params: Params,
    row: int | None = None,
) -> np.ndarray:
    """Sample a terrain cross-section from a DEM raster.

    Reads one row of the first band, drops NoData and non-finite pixels,
    stretches the row across the domain width and linearly interpolates the
    elevation at every column center. Elevations are shifted so the lowest
    valid pixel sits at y=0.

    Args:
        dem_path: Path to the DEM raster file (e.g., GeoTIFF).
        params: Domain parameters; the profile has one value per column.
        row: Raster row to sample. Defaults to the middle row.

    Returns:
        Ground height per column [m], shape (nx,).

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ValueError: If the raster cannot be read, the row is out of range, or
            the row contains no valid pixels.
    """
    dem_path = Path(dem_path)

    if not dem_path.exists():
        raise FileNotFoundError(f"DEM file not found: {dem_path}")

    try:
        with rasterio.open(dem_path) as src:
            data = src.read(1)
            nodata = src.nodata
    except RasterioIOError as e:
        raise ValueError(f"Invalid raster file: {dem_path}") from e

    height, width = data.shape
    if row is None:
        row = height // 2
    if not 0 <= row < height:
        msg = f"row {row} is outside the raster (height {height})"
        raise ValueError(msg)

    profile = data[row].astype(np.float64)
    valid = np.isfinite(profile)
    if nodata is not None:
        valid &= profile != nodata

    if not np.any(valid):
        msg = f"Row {row} of {dem_path.name} contains no valid elevations"
        raise ValueError(msg)

    logger.debug(
        "Sampling DEM %s row %d: %d valid pixels out of %d",
        dem_path.name,
        row,
        int(np.count_nonzero(valid)),
        width,
    )

    source_x = (np.arange(width, dtype=np.float64) + 0.5) / width * params.Lx
    column_x = (np.arange(params.nx, dtype=np.float64) + 0.5) * params.dx
    elevations = np.interp(column_x, source_x[valid], profile[valid])

    return elevations - float(np.min(profile[valid]))


def air_mask_from_dem(
    dem_path: str | Path,
    params: Params,
    row: int | None = None,
    base_height: float = 0.0,
) -> Field2D:
    """Air mask for the terrain cross-section of a DEM raster.

    Args:
        dem_path: Path to the DEM raster file.
        params: Domain parameters.
        row: Raster row to sample. Defaults to the middle row.
        base_height: Height added under the lowest DEM point [m].
    """
    profile = ground_profile_from_dem(dem_path, params, row=row)
    return air_mask_from_profile(params, profile + base_height)
