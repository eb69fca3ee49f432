"""Snowdrift numerical constants.

Fixed values shared by the reference and compiled transport kernels.
"""

# Face fluxes with magnitude at or below this are reported as exactly zero [g/(m*s)]
FLUX_THRESHOLD: float = 1e-5

# Courant number above which one step can advect snow past a neighbouring cell [-]
CFL_LIMIT: float = 1.0

# Air mask values
GROUND: int = 0
AIR: int = 1

__all__ = [
    "AIR",
    "CFL_LIMIT",
    "FLUX_THRESHOLD",
    "GROUND",
]
