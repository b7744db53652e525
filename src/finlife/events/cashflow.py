"""
Cash-flow stages: interest, salary, mandatory expenses and the monthly
history snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.cashflow import (
    accrue_weekly_interest,
    collect_monthly_income,
    pay_mandatory_expenses,
    record_monthly_history,
)

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class AccrueWeeklyInterest:
    """
    Credit savings interest and charge overdraft interest for the week.

    Rule
    ----
        V += V · r_s / 12 / w          if V > 0
        D -= |D| · r_o / 12 / w        if D < 0

    V: savings, D: checking, r_s: savings rate, r_o: overdraft rate,
    w: weeks per month
    """

    def execute(self, sim: Simulation) -> None:
        earned, charged = accrue_weekly_interest(
            sim.state,
            savings_rate=sim.config.savings_rate,
            overdraft_rate=sim.config.overdraft_rate,
            weeks_per_month=sim.config.weeks_per_month,
        )
        log = self.get_logger()
        if charged:
            log.info(f"  Overdraft interest charged: {charged:,.2f}")
        log.debug(f"  Savings interest earned: {earned:,.4f}")


@event
class CollectMonthlyIncome:
    """Credit the full monthly income to checking."""

    def execute(self, sim: Simulation) -> None:
        collect_monthly_income(sim.state)


@event
class PayMandatoryExpenses:
    """
    Debit rent, groceries, utilities and the scheduled debt service.

    Rule
    ----
        D -= rent + groceries + utilities + debt service
    """

    def execute(self, sim: Simulation) -> None:
        pay_mandatory_expenses(sim.state)


@event
class RecordMonthlyHistory:
    """Append the closing balance, happiness and stress to the histories."""

    def execute(self, sim: Simulation) -> None:
        record_monthly_history(sim.state)
