"""Debt stages: delinquency escalation, loan servicing and credit scoring."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.credit import update_credit_score
from finlife.systems.loans import process_loan_delinquency, service_loans

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class ProcessLoanDelinquency:
    """
    Escalate delinquent loans by one week.

    Each 30-day boundary crossed adds a late fee of max($35, 10 % of the
    instalment). At 90 days the collateral of a secured loan is seized.
    """

    def execute(self, sim: Simulation) -> None:
        repossessed = process_loan_delinquency(sim.state, sim.catalog)
        if repossessed:
            self.get_logger().warning(
                f"  Repossessed collateral of {[loan.id for loan in repossessed]}"
            )


@event
class ServiceLoans:
    """
    Split this month's instalments into interest and principal.

    Runs after the mandatory expenses. When checking sits below the
    delinquency limit the instalments bounce and every loan turns
    delinquent instead.
    """

    def execute(self, sim: Simulation) -> None:
        missed = service_loans(
            sim.state, delinquency_limit=sim.config.delinquency_limit
        )
        if missed:
            self.get_logger().info("  Loan payments missed this month")


@event
class UpdateCreditScore:
    """
    Recompute the credit score from scratch.

    Rule
    ----
        score = 650 + history + dti + savings + age, clamped to [300, 850]
    """

    def execute(self, sim: Simulation) -> None:
        score = update_credit_score(sim.state)
        self.get_logger().info(f"  Credit score: {score:.0f}")
