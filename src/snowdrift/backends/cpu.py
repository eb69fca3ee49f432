"""Reference CPU backend.

Plain Python loops over the field accessors. Every other backend is checked
against this one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from snowdrift.flux import face_flux_x, face_flux_y

from .base import Simulation, ensure_scratch_buffer

if TYPE_CHECKING:
    from snowdrift.fields import Fields
    from snowdrift.types import Params


class CPUSimulation(Simulation):
    """Single-threaded donor-cell update reading the frozen current buffer."""

    def step(self, fields: Fields, params: Params) -> None:
        """Advance snow_density by one time step and accumulate ground deposits.

        Per air cell:
        1. Upwind fluxes through the left, right, bottom and top faces
        2. Boundary sources, each only where the boundary face carries inflow
        3. Ground deposition of any downward flux leaving through the bottom
           into ground or out of the domain
        4. Explicit update, clamped at zero

        Ground cells are set to zero. The buffers are swapped after the full
        pass and the per-column deposits are added to snow_accumulation_mass.

        Args:
            fields: Field set, mutated in place.
            params: Domain parameters (dx, dy and dt are used).
        """
        dt = params.dt
        dx = params.dx
        dy = params.dy

        ensure_scratch_buffer(fields)

        density_field = fields.snow_density
        next_density = fields.next_snow_density
        air_mask = fields.air_mask
        speed_x = fields.snow_transport_speed_x
        speed_y = fields.snow_transport_speed_y
        source_left = fields.windborn_horizontal_source_left
        source_right = fields.windborn_horizontal_source_right
        source_top = fields.precipitation_source

        nx, ny = density_field.nx, density_field.ny
        column_deposit = [0.0] * nx

        for j in range(ny):
            for i in range(nx):
                if not air_mask[i, j]:
                    next_density[i, j] = 0.0
                    continue

                # Sources only where the boundary face blows snow into the domain
                left_source = 0.0
                if i == 0 and source_left.in_bounds(j) and speed_x[0, j] > 0.0:
                    left_source = float(source_left[j])

                right_source = 0.0
                if i == nx - 1 and source_right.in_bounds(j) and speed_x[nx, j] < 0.0:
                    right_source = float(source_right[j])

                top_source = 0.0
                if j == ny - 1 and source_top.in_bounds(i) and speed_y[i, ny] < 0.0:
                    top_source = float(source_top[i])

                flux_left = face_flux_x(fields, i, j)
                flux_right = face_flux_x(fields, i + 1, j)
                flux_bottom = face_flux_y(fields, i, j)
                flux_top = face_flux_y(fields, i, j + 1)

                if flux_bottom < 0.0:
                    ground_below = j == 0 or not air_mask[i, j - 1]
                    if ground_below:
                        deposit_per_area = (-flux_bottom) * dt / dy
                        column_deposit[i] += deposit_per_area * dx

                density = float(density_field[i, j])
                density += (dt / dx) * (flux_left - flux_right)
                density += (dt / dy) * (flux_bottom - flux_top)
                density += dt * (left_source + right_source + top_source)

                next_density[i, j] = max(density, 0.0)

        fields.swap_density_buffers()

        accumulation = fields.snow_accumulation_mass
        for i, deposit in enumerate(column_deposit):
            if accumulation.in_bounds(i):
                accumulation[i] += deposit
