"""Donor-cell (upwind) face flux for the staggered snow grid.

The flux across a face carries the density of the cell the wind blows *from*:
the lower-index cell for positive velocity, the higher-index cell for negative
velocity. Faces whose donor lies outside the grid or is ground carry nothing.
"""

from __future__ import annotations

from .constants import FLUX_THRESHOLD
from .fields import Fields


def _clamp_small(flux: float, threshold: float) -> float:
    return flux if abs(flux) > threshold else 0.0


def face_flux_x(fields: Fields, face_i: int, j: int, threshold: float = FLUX_THRESHOLD) -> float:
    """Upwind snow mass flux across the vertical face (face_i, j).

    Args:
        fields: Current field set.
        face_i: Face column index, 0..nx.
        j: Row index, 0..ny-1.
        threshold: Magnitudes at or below this are returned as 0.0.

    Returns:
        Signed flux [g/(m*s)], positive to the right.
    """
    velocity = float(fields.snow_transport_speed_x[face_i, j])
    if velocity == 0.0:
        return 0.0

    donor_i = face_i - 1 if velocity > 0.0 else face_i

    if not fields.snow_density.in_bounds(donor_i, j):
        return 0.0
    if not fields.air_mask[donor_i, j]:
        return 0.0

    return _clamp_small(velocity * float(fields.snow_density[donor_i, j]), threshold)


def face_flux_y(fields: Fields, i: int, face_j: int, threshold: float = FLUX_THRESHOLD) -> float:
    """Upwind snow mass flux across the horizontal face (i, face_j).

    Args:
        fields: Current field set.
        i: Column index, 0..nx-1.
        face_j: Face row index, 0..ny.
        threshold: Magnitudes at or below this are returned as 0.0.

    Returns:
        Signed flux [g/(m*s)], positive upward.
    """
    velocity = float(fields.snow_transport_speed_y[i, face_j])
    if velocity == 0.0:
        return 0.0

    donor_j = face_j - 1 if velocity > 0.0 else face_j

    if not fields.snow_density.in_bounds(i, donor_j):
        return 0.0
    if not fields.air_mask[i, donor_j]:
        return 0.0

    return _clamp_small(velocity * float(fields.snow_density[i, donor_j]), threshold)
