"""Single-method interface shared by every execution strategy."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snowdrift.fields import Fields
    from snowdrift.types import Params

logger = logging.getLogger(__name__)


class Simulation(ABC):
    """Advances a field set by one explicit time step.

    Implementations hold no state. Every backend must reproduce the reference
    CPU result within floating-point tolerance for the same inputs.
    """

    @abstractmethod
    def step(self, fields: Fields, params: Params) -> None:
        """Advance fields.snow_density by params.dt and accumulate ground deposits."""


def ensure_scratch_buffer(fields: Fields) -> None:
    """Resize next_snow_density to match snow_density if their shapes differ.

    A correct driver never triggers this; it is a silent self-heal, logged
    but not reported to the caller.
    """
    current = fields.snow_density
    scratch = fields.next_snow_density
    if scratch.shape != current.shape:
        logger.warning(
            "next_snow_density shape %s does not match snow_density shape %s; resizing",
            scratch.shape,
            current.shape,
        )
        scratch.resize(current.nx, current.ny, 0.0)
