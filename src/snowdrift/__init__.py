"""Snowdrift snow transport modeling package.

Predicts snow accumulation on terrain by advecting windborne, settling snow
as an areal density across a staggered 2D cross-section grid with a
donor-cell explicit scheme, fed by precipitation and a 1D upwind boundary
column.
"""

import snowdrift.backends  # noqa: F401 - triggers auto-registration
from snowdrift.backends import CPUSimulation, NumbaSimulation, Simulation
from snowdrift.config import dump_params, load_params
from snowdrift.fields import Field1D, Field2D, Fields
from snowdrift.flux import face_flux_x, face_flux_y
from snowdrift.outputs import SimulationOutput
from snowdrift.registry import get_backend, list_backends
from snowdrift.run import check_cfl, run
from snowdrift.snow_source import step_snow_source, update_lateral_source
from snowdrift.types import Params

__all__ = [
    "CPUSimulation",
    "Field1D",
    "Field2D",
    "Fields",
    "NumbaSimulation",
    "Params",
    "Simulation",
    "SimulationOutput",
    "check_cfl",
    "dump_params",
    "face_flux_x",
    "face_flux_y",
    "get_backend",
    "list_backends",
    "load_params",
    "run",
    "step_snow_source",
    "update_lateral_source",
]
