"""Tests for the donor-cell face flux.

Tests verify donor selection by velocity sign, zero flux at domain edges and
over ground, and suppression of tiny fluxes.
"""

from __future__ import annotations

import numpy as np
import pytest
from snowdrift import Fields, Params, face_flux_x, face_flux_y


@pytest.fixture
def fields() -> Fields:
    """3 x 3 all-air grid with distinct densities and no wind."""
    params = Params(Lx=3.0, Ly=3.0, dx=1.0, dy=1.0, ground_height=-1.0, wind_speed=0.0, settling_speed=0.0)
    fields = Fields.initialize(params)
    fields.snow_density.grid[:] = np.array(
        [
            [1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0],
            [7.0, 8.0, 9.0],
        ]
    )
    return fields


class TestFaceFluxX:
    """Tests for flux across vertical faces."""

    def test_zero_velocity(self, fields: Fields) -> None:
        """Zero velocity gives zero flux."""
        assert face_flux_x(fields, 1, 1) == 0.0

    def test_positive_velocity_uses_left_cell(self, fields: Fields) -> None:
        """Rightward velocity takes density from the left cell."""
        fields.snow_transport_speed_x[1, 1] = 2.0

        # Donor is cell (0, 1) with density 4
        assert face_flux_x(fields, 1, 1) == pytest.approx(8.0)

    def test_negative_velocity_uses_right_cell(self, fields: Fields) -> None:
        """Leftward velocity takes density from the right cell."""
        fields.snow_transport_speed_x[1, 1] = -2.0

        # Donor is cell (1, 1) with density 5
        assert face_flux_x(fields, 1, 1) == pytest.approx(-10.0)

    def test_inflow_at_left_edge_is_zero(self, fields: Fields) -> None:
        """Inflow through the left edge has no donor and gives zero."""
        fields.snow_transport_speed_x[0, 1] = 1000.0

        assert face_flux_x(fields, 0, 1) == 0.0

    def test_inflow_at_right_edge_is_zero(self, fields: Fields) -> None:
        """Inflow through the right edge has no donor and gives zero."""
        fields.snow_transport_speed_x[3, 1] = -1000.0

        assert face_flux_x(fields, 3, 1) == 0.0

    def test_outflow_at_right_edge_carries_snow(self, fields: Fields) -> None:
        """Outflow through the right edge carries the edge cell's snow."""
        fields.snow_transport_speed_x[3, 0] = 1.0

        assert face_flux_x(fields, 3, 0) == pytest.approx(3.0)

    def test_ground_donor_is_zero(self, fields: Fields) -> None:
        """A ground donor gives zero flux."""
        fields.air_mask[0, 1] = 0
        fields.snow_transport_speed_x[1, 1] = 1000.0

        assert face_flux_x(fields, 1, 1) == 0.0


class TestFaceFluxY:
    """Tests for flux across horizontal faces."""

    def test_zero_velocity(self, fields: Fields) -> None:
        """Zero velocity gives zero flux."""
        assert face_flux_y(fields, 1, 1) == 0.0

    def test_positive_velocity_uses_cell_below(self, fields: Fields) -> None:
        """Upward velocity takes density from the cell below."""
        fields.snow_transport_speed_y[1, 1] = 0.5

        # Donor is cell (1, 0) with density 2
        assert face_flux_y(fields, 1, 1) == pytest.approx(1.0)

    def test_negative_velocity_uses_cell_above(self, fields: Fields) -> None:
        """Downward velocity takes density from the cell above."""
        fields.snow_transport_speed_y[1, 1] = -0.5

        # Donor is cell (1, 1) with density 5
        assert face_flux_y(fields, 1, 1) == pytest.approx(-2.5)

    def test_downward_flux_leaves_through_bottom_edge(self, fields: Fields) -> None:
        """Downward flux leaves through the bottom face of the lowest row."""
        fields.snow_transport_speed_y[2, 0] = -1.0

        assert face_flux_y(fields, 2, 0) == pytest.approx(-3.0)

    def test_upward_inflow_at_bottom_edge_is_zero(self, fields: Fields) -> None:
        """Upward inflow through the bottom edge gives zero."""
        fields.snow_transport_speed_y[2, 0] = 1000.0

        assert face_flux_y(fields, 2, 0) == 0.0

    def test_downward_inflow_at_top_edge_is_zero(self, fields: Fields) -> None:
        """Downward inflow through the top edge gives zero."""
        fields.snow_transport_speed_y[1, 3] = -1000.0

        assert face_flux_y(fields, 1, 3) == 0.0

    def test_ground_donor_is_zero(self, fields: Fields) -> None:
        """A ground donor gives zero flux."""
        fields.air_mask[1, 1] = 0
        fields.snow_transport_speed_y[1, 1] = -1000.0

        assert face_flux_y(fields, 1, 1) == 0.0


class TestFluxThreshold:
    """Tests for suppression of tiny fluxes."""

    def test_below_threshold_is_zero(self, fields: Fields) -> None:
        """Flux magnitudes below the threshold return zero."""
        fields.snow_density[0, 0] = 5e-3
        fields.snow_transport_speed_x[1, 0] = 1e-3

        assert face_flux_x(fields, 1, 0) == 0.0

    def test_at_threshold_is_zero(self, fields: Fields) -> None:
        """A flux exactly at the threshold returns zero."""
        fields.snow_density[0, 0] = 1e-5
        fields.snow_transport_speed_x[1, 0] = 1.0

        assert face_flux_x(fields, 1, 0) == 0.0

    def test_negative_below_threshold_is_zero(self, fields: Fields) -> None:
        """Negative fluxes below the threshold return zero."""
        fields.snow_density[1, 1] = 5e-6
        fields.snow_transport_speed_y[1, 1] = -1.0

        assert face_flux_y(fields, 1, 1) == 0.0

    def test_above_threshold_is_kept(self, fields: Fields) -> None:
        """Flux just above the threshold is returned unchanged."""
        fields.snow_density[0, 0] = 2e-5
        fields.snow_transport_speed_x[1, 0] = 1.0

        assert face_flux_x(fields, 1, 0) == pytest.approx(2e-5)
