"""Boundary-column model for lateral snow inflow.

Models the column of air just upwind of the domain's left edge as an
independent 1D vertical transport problem. Snow falls in at the top of the
column and settles downward, so the lateral inflow ramps in row by row as
snow reaches each height instead of jumping to a steady profile.

- step_snow_source(): Advance the column by one time step
- update_lateral_source(): Convert the column into the left-edge source term
"""

from __future__ import annotations

import logging
import sys

import numpy as np

from .fields import Field1D, Fields

logger = logging.getLogger(__name__)

EMPTY_COLUMN_WARNING: str = "Warning: step_snow_source received cell number/column_density.nx == 1\n"
NON_POSITIVE_DY_WARNING: str = "Warning: step_snow_source received dy <= 0\n"
NON_POSITIVE_DT_WARNING: str = "Warning: step_snow_source received dt <= 0\n"


def _emit_warning(message: str) -> None:
    sys.stderr.write(message)
    logger.debug("step_snow_source left column unchanged: %s", message.strip())


def step_snow_source(
    column_density: Field1D,
    settling_speed: float,
    precipitation_rate: float,
    dy: float,
    dt: float,
) -> Field1D:
    """Advance the upwind boundary column by one explicit time step.

    Index 0 is the bottom cell and the last index the top cell. Precipitation
    enters the top cell only; snow settles at -settling_speed using the
    donor-cell rule, leaving through the bottom face and never entering from
    outside the column.

    Degenerate input (an empty column, dy <= 0 or dt <= 0) is not an error:
    the input column is returned unchanged and a single warning line is
    written to stderr.

    Args:
        column_density: Areal snow density per row of the column [g/m^2].
        settling_speed: Downward settling speed [m/s].
        precipitation_rate: Precipitation into the top cell [g/m^2/s].
        dy: Cell height [m].
        dt: Time step [s].

    Returns:
        New column with the densities after the step, clamped at zero.
    """
    n = column_density.nx
    if n == 0:
        _emit_warning(EMPTY_COLUMN_WARNING)
        return column_density
    if dy <= 0.0:
        _emit_warning(NON_POSITIVE_DY_WARNING)
        return column_density
    if dt <= 0.0:
        _emit_warning(NON_POSITIVE_DT_WARNING)
        return column_density

    density = np.asarray(column_density.data, dtype=np.float64)
    velocity = -settling_speed
    top = n - 1

    if velocity == 0.0:
        next_density = density.copy()
        next_density[top] += dt * precipitation_rate
        return Field1D(nx=n, data=np.maximum(next_density, 0.0))

    # Faces 0..n; the donor is below an upward face and above a downward one.
    # Faces whose donor falls outside the column carry nothing.
    face_flux = np.zeros(n + 1, dtype=np.float64)
    if velocity > 0.0:
        face_flux[1:] = velocity * density
    else:
        face_flux[:-1] = velocity * density

    flux_bottom = face_flux[:-1]
    flux_top = face_flux[1:]
    next_density = density + (dt / dy) * (flux_bottom - flux_top)
    next_density[top] += dt * precipitation_rate

    return Field1D(nx=n, data=np.maximum(next_density, 0.0))


def update_lateral_source(
    fields: Fields,
    column_density: Field1D,
    wind_speed: float,
    dx: float,
) -> None:
    """Refresh windborn_horizontal_source_left from the boundary column.

    Sets source(j) = wind_speed * column_density(j) / dx for every row whose
    left edge cell is air. Rows over ground, rows past the end of the column,
    and every row when dx <= 0 get zero.

    Args:
        fields: Field set whose left source is overwritten in place.
        column_density: Boundary column density per row [g/m^2].
        wind_speed: Horizontal wind carrying the column into the domain [m/s].
        dx: Cell width [m].
    """
    source = fields.windborn_horizontal_source_left
    source.data[:] = 0.0
    if dx <= 0.0:
        return

    air_mask = fields.air_mask
    n_rows = min(source.nx, column_density.nx, air_mask.ny if air_mask.nx > 0 else 0)
    if n_rows == 0:
        return

    edge_is_air = air_mask.grid[:n_rows, 0] != 0
    rates = wind_speed * np.asarray(column_density.data[:n_rows], dtype=np.float64) / dx
    source.data[:n_rows] = np.where(edge_is_air, rates, 0.0)
