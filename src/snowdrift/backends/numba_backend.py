"""Numba-compiled backend.

The kernel works on the (ny, nx) grid views of the field storage and mirrors
the reference CPU backend cell for cell.
"""

# SIM108: Ternary operators disabled in Numba functions for clarity
# ruff: noqa: SIM108

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numba import njit

from snowdrift.constants import FLUX_THRESHOLD

from .base import Simulation, ensure_scratch_buffer

if TYPE_CHECKING:
    from snowdrift.fields import Fields
    from snowdrift.types import Params


@njit(cache=True)
def _face_flux_x(
    speed_x: np.ndarray,  # shape (ny, nx + 1)
    density: np.ndarray,  # shape (ny, nx)
    air_mask: np.ndarray,  # shape (ny, nx)
    face_i: int,
    j: int,
    threshold: float,
) -> float:
    """Upwind flux across vertical face (face_i, j)."""
    ny, nx = density.shape
    velocity = speed_x[j, face_i]
    if velocity == 0.0:
        return 0.0

    if velocity > 0.0:
        donor_i = face_i - 1
    else:
        donor_i = face_i

    if donor_i < 0 or donor_i >= nx or j < 0 or j >= ny:
        return 0.0
    if air_mask[j, donor_i] == 0:
        return 0.0

    flux = velocity * density[j, donor_i]
    if abs(flux) > threshold:
        return flux
    return 0.0


@njit(cache=True)
def _face_flux_y(
    speed_y: np.ndarray,  # shape (ny + 1, nx)
    density: np.ndarray,  # shape (ny, nx)
    air_mask: np.ndarray,  # shape (ny, nx)
    i: int,
    face_j: int,
    threshold: float,
) -> float:
    """Upwind flux across horizontal face (i, face_j)."""
    ny, nx = density.shape
    velocity = speed_y[face_j, i]
    if velocity == 0.0:
        return 0.0

    if velocity > 0.0:
        donor_j = face_j - 1
    else:
        donor_j = face_j

    if i < 0 or i >= nx or donor_j < 0 or donor_j >= ny:
        return 0.0
    if air_mask[donor_j, i] == 0:
        return 0.0

    flux = velocity * density[donor_j, i]
    if abs(flux) > threshold:
        return flux
    return 0.0


@njit(cache=True)
def _step_numba(
    air_mask: np.ndarray,  # shape (ny, nx)
    density: np.ndarray,  # shape (ny, nx), read only
    next_density: np.ndarray,  # shape (ny, nx), written here
    speed_x: np.ndarray,  # shape (ny, nx + 1)
    speed_y: np.ndarray,  # shape (ny + 1, nx)
    source_left: np.ndarray,  # shape (ny,)
    source_right: np.ndarray,  # shape (ny,)
    source_top: np.ndarray,  # shape (nx,)
    column_deposit: np.ndarray,  # shape (nx,), accumulated here
    dt: float,
    dx: float,
    dy: float,
    threshold: float,
) -> None:
    """Execute one donor-cell time step over the whole grid."""
    ny, nx = density.shape
    n_left = len(source_left)
    n_right = len(source_right)
    n_top = len(source_top)

    for j in range(ny):
        for i in range(nx):
            if air_mask[j, i] == 0:
                next_density[j, i] = 0.0
                continue

            left_source = 0.0
            if i == 0 and j < n_left and speed_x[j, 0] > 0.0:
                left_source = source_left[j]

            right_source = 0.0
            if i == nx - 1 and j < n_right and speed_x[j, nx] < 0.0:
                right_source = source_right[j]

            top_source = 0.0
            if j == ny - 1 and i < n_top and speed_y[ny, i] < 0.0:
                top_source = source_top[i]

            flux_left = _face_flux_x(speed_x, density, air_mask, i, j, threshold)
            flux_right = _face_flux_x(speed_x, density, air_mask, i + 1, j, threshold)
            flux_bottom = _face_flux_y(speed_y, density, air_mask, i, j, threshold)
            flux_top = _face_flux_y(speed_y, density, air_mask, i, j + 1, threshold)

            if flux_bottom < 0.0:
                if j == 0 or air_mask[j - 1, i] == 0:
                    column_deposit[i] += (-flux_bottom) * dt / dy * dx

            value = density[j, i]
            value += (dt / dx) * (flux_left - flux_right)
            value += (dt / dy) * (flux_bottom - flux_top)
            value += dt * (left_source + right_source + top_source)

            if value < 0.0:
                value = 0.0
            next_density[j, i] = value


class NumbaSimulation(Simulation):
    """Compiled donor-cell update; same semantics as CPUSimulation."""

    def step(self, fields: Fields, params: Params) -> None:
        ensure_scratch_buffer(fields)

        nx = fields.snow_density.nx
        column_deposit = np.zeros(nx, dtype=np.float64)

        _step_numba(
            np.ascontiguousarray(fields.air_mask.grid, dtype=np.uint8),
            np.ascontiguousarray(fields.snow_density.grid, dtype=np.float64),
            fields.next_snow_density.grid,
            np.ascontiguousarray(fields.snow_transport_speed_x.grid, dtype=np.float64),
            np.ascontiguousarray(fields.snow_transport_speed_y.grid, dtype=np.float64),
            np.ascontiguousarray(fields.windborn_horizontal_source_left.data, dtype=np.float64),
            np.ascontiguousarray(fields.windborn_horizontal_source_right.data, dtype=np.float64),
            np.ascontiguousarray(fields.precipitation_source.data, dtype=np.float64),
            column_deposit,
            float(params.dt),
            float(params.dx),
            float(params.dy),
            FLUX_THRESHOLD,
        )

        fields.swap_density_buffers()

        accumulation = fields.snow_accumulation_mass
        n = min(accumulation.nx, nx)
        accumulation.data[:n] += column_deposit[:n]
