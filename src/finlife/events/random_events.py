"""Stochastic stages: unplanned expenses and generated notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.expenses import apply_weekly_random_expenses
from finlife.systems.random_events import (
    generate_monthly_major_events,
    generate_weekly_minor_events,
)

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class ApplyWeeklyRandomExpenses:
    """
    Roll the weekly expense table.

    Rule
    ----
        chance = base + stress / 100 · multiplier · 100
        amount = min + U(0, 1) · (max - min)
    """

    def execute(self, sim: Simulation) -> None:
        spent = apply_weekly_random_expenses(sim.state, sim.rng)
        if spent:
            self.get_logger().info(f"  Unplanned spending: {spent:,.2f}")


@event
class GenerateWeeklyMinorEvents:
    """Small expenses, volatility blips and stress-relief temptations."""

    def execute(self, sim: Simulation) -> None:
        generate_weekly_minor_events(sim.state, sim.rng)


@event
class GenerateMonthlyMajorEvents:
    """Performance feedback from the manager and emergency repairs."""

    def execute(self, sim: Simulation) -> None:
        generate_monthly_major_events(sim.state, sim.rng)
