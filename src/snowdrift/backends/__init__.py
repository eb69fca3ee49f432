"""Execution strategies for the snow transport step.

Public API: the Simulation interface plus the reference CPU and the
numba-compiled backends, both registered on import.
"""

from .base import Simulation, ensure_scratch_buffer
from .cpu import CPUSimulation
from .numba_backend import NumbaSimulation

__all__ = [
    "CPUSimulation",
    "NumbaSimulation",
    "Simulation",
    "ensure_scratch_buffer",
]

# Auto-register with the backend registry
from snowdrift.registry import register  # noqa: E402

register("cpu", CPUSimulation)
register("numba", NumbaSimulation)
