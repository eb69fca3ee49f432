"""Tests for SimulationOutput."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import numpy as np
import pandas as pd
import pytest
from snowdrift import SimulationOutput


@pytest.fixture
def output() -> SimulationOutput:
    """Three records over a 2-column grid."""
    return SimulationOutput(
        time=np.array([1.0, 2.0, 3.0]),
        accumulation_mass=np.array([[0.0, 1.0], [2.0, 3.0], [4.0, 6.0]]),
        snow_density=np.zeros((2, 2)),
        column_density=np.array([0.5, 1.5]),
        dx=2.0,
    )


class TestSimulationOutput:
    """Tests for SimulationOutput accessors."""

    def test_len(self, output: SimulationOutput) -> None:
        """len returns the number of records."""
        assert len(output) == 3

    def test_final_accumulation(self, output: SimulationOutput) -> None:
        """final_accumulation returns the last record."""
        np.testing.assert_array_equal(output.final_accumulation, [4.0, 6.0])

    def test_final_accumulation_without_records(self) -> None:
        """final_accumulation is zeros when nothing was recorded."""
        output = SimulationOutput(
            time=np.empty(0),
            accumulation_mass=np.empty((0, 4)),
            snow_density=np.zeros((2, 4)),
            column_density=np.zeros(2),
            dx=1.0,
        )

        np.testing.assert_array_equal(output.final_accumulation, np.zeros(4))

    def test_accumulation_total(self, output: SimulationOutput) -> None:
        """accumulation_total sums each record over columns."""
        np.testing.assert_array_equal(output.accumulation_total, [1.0, 5.0, 10.0])

    def test_accumulation_areal_density(self, output: SimulationOutput) -> None:
        """accumulation_areal_density divides mass by column width."""
        np.testing.assert_allclose(output.accumulation_areal_density[-1], [2.0, 3.0])

    def test_frozen(self, output: SimulationOutput) -> None:
        """SimulationOutput cannot be modified."""
        with pytest.raises(FrozenInstanceError):
            output.dx = 5.0  # type: ignore[misc]


class TestToDataFrame:
    """Tests for DataFrame conversion."""

    def test_columns_and_index(self, output: SimulationOutput) -> None:
        """DataFrame has one column per grid column and a time index."""
        df = output.to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["column_0", "column_1"]
        assert df.index.name == "time"
        np.testing.assert_array_equal(df.index.to_numpy(), [1.0, 2.0, 3.0])

    def test_values(self, output: SimulationOutput) -> None:
        """DataFrame values match the recorded accumulation."""
        df = output.to_dataframe()

        assert df.loc[2.0, "column_1"] == 3.0
        np.testing.assert_array_equal(df.to_numpy(), output.accumulation_mass)
