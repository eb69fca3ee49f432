"""Tests for Params validation and derived discretization."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from snowdrift import Params
from snowdrift.types import lround


class TestLround:
    """Tests for half-away-from-zero rounding."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.49, 0), (0.5, 1), (1.5, 2), (2.5, 3), (-2.5, -3), (99.99, 100)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        """Halves round away from zero."""
        assert lround(value) == expected


class TestParams:
    """Tests for Params."""

    def test_defaults_give_reference_grid(self) -> None:
        """Default parameters give a 100 x 20 grid with 0.2 s steps."""
        params = Params()

        assert params.nx == 100
        assert params.ny == 20
        assert params.dt == 0.2
        assert params.total_time_steps == 180000

    def test_cell_counts_round_half_up(self) -> None:
        """Cell counts round L / d half up."""
        params = Params(Lx=25.0, Ly=35.0, dx=10.0, dy=10.0)

        assert params.nx == 3
        assert params.ny == 4

    def test_total_time_steps(self) -> None:
        """total_time_steps rounds total_sim_time / dt."""
        params = Params(total_sim_time=10.0, time_step_duration=0.3)

        assert params.total_time_steps == 33

    @pytest.mark.parametrize("name", ["Lx", "Ly", "dx", "dy", "time_step_duration"])
    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_rejects_non_positive(self, name: str, value: float) -> None:
        """Zero and negative lengths and time steps are rejected."""
        with pytest.raises(ValidationError, match=name):
            Params(**{name: value})

    def test_rejects_grid_without_cells(self) -> None:
        """A domain shorter than half a cell is rejected."""
        with pytest.raises(ValidationError, match="nx=0"):
            Params(Lx=1.0, dx=10.0)

    def test_rejects_negative_sim_time(self) -> None:
        """Negative total_sim_time is rejected."""
        with pytest.raises(ValidationError, match="total_sim_time"):
            Params(total_sim_time=-1.0)

    def test_rejects_zero_steps_per_frame(self) -> None:
        """steps_per_frame must be at least 1."""
        with pytest.raises(ValidationError, match="steps_per_frame"):
            Params(steps_per_frame=0)

    def test_accepts_negative_physical_values(self) -> None:
        """Physical rates and ground height may be negative."""
        params = Params(wind_speed=-3.0, settling_speed=-0.1, precipitation_rate=-1.0, ground_height=-5.0)

        assert params.wind_speed == -3.0

    def test_frozen(self) -> None:
        """Params cannot be modified after construction."""
        params = Params()

        with pytest.raises(ValidationError):
            params.dx = 5.0  # type: ignore[misc]
