"""Structured output of a snow transport run.

- SimulationOutput: Recorded ground accumulation over time plus the final state
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class SimulationOutput:
    """Results of a snow transport run.

    Attributes:
        time: Simulated time at each record [s], shape (n_records,).
        accumulation_mass: Ground-deposited mass per column at each record [g],
            shape (n_records, nx).
        snow_density: Final airborne snow density [g/m^2], shape (ny, nx)
            indexed [j, i].
        column_density: Final boundary column density [g/m^2], shape (ny,).
        dx: Column width [m].
    """

    time: np.ndarray
    accumulation_mass: np.ndarray
    snow_density: np.ndarray
    column_density: np.ndarray
    dx: float

    @property
    def final_accumulation(self) -> np.ndarray:
        """Accumulated mass per column at the last record [g]."""
        if len(self.time) == 0:
            return np.zeros(self.accumulation_mass.shape[1], dtype=np.float64)
        return self.accumulation_mass[-1]

    @property
    def accumulation_total(self) -> np.ndarray:
        """Accumulated mass summed over all columns at each record [g]."""
        return self.accumulation_mass.sum(axis=1)

    @property
    def accumulation_areal_density(self) -> np.ndarray:
        """Accumulated mass per unit ground length at each record [g/m]."""
        return self.accumulation_mass / self.dx

    def __len__(self) -> int:
        """Return the number of records."""
        return len(self.time)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert accumulation records to a DataFrame indexed by time.

        Returns:
            DataFrame with one ``column_{i}`` per grid column and time [s] as index.
        """
        columns = [f"column_{i}" for i in range(self.accumulation_mass.shape[1])]
        df = pd.DataFrame(self.accumulation_mass, index=self.time, columns=columns)
        df.index.name = "time"
        return df
