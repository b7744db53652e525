"""Asset upkeep stages for housing and vehicles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.assets import (
    apply_monthly_housing_costs,
    apply_monthly_vehicle_costs,
)

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class ApplyHousingCosts:
    """
    Settle the month's actual housing cost.

    Owned homes cost maintenance plus property tax (and may earn rental
    income); rentals cost rent. The difference to the rent already
    charged with the mandatory expenses is charged or refunded.
    """

    def execute(self, sim: Simulation) -> None:
        apply_monthly_housing_costs(sim.state, sim.catalog)


@event
class ApplyVehicleCosts:
    """Charge vehicle maintenance and fuel and roll for a breakdown."""

    def execute(self, sim: Simulation) -> None:
        total = apply_monthly_vehicle_costs(
            sim.state,
            sim.catalog,
            sim.rng,
            weeks_per_month=sim.config.weeks_per_month,
            repair_cost=sim.config.vehicle_repair_cost,
        )
        if total:
            self.get_logger().info(f"  Vehicle costs: {total:,.2f}")
