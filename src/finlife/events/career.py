"""Career and relationship stages of the monthly close."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.career import monthly_job_review
from finlife.systems.social import apply_reputation_effects, update_npc_relationships

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class MonthlyJobReview:
    """
    Score the month's job performance and apply promotion, salary-cut
    and layoff rules, in that order.
    """

    def execute(self, sim: Simulation) -> None:
        monthly_job_review(
            sim.state,
            sim.rng,
            minimum_wage=sim.config.minimum_wage,
            unemployment_benefit=sim.config.unemployment_benefit,
        )
        metrics = sim.state.job_metrics
        self.get_logger().info(
            f"  Performance {metrics.current_performance:.1f}, "
            f"layoff risk {metrics.risk_of_layoff:.1f}%"
        )


@event
class UpdateNpcRelationships:
    """
    Apply the monthly reputation drift.

    Must run after the job review: the boss reacts to this month's
    performance score.
    """

    def execute(self, sim: Simulation) -> None:
        update_npc_relationships(sim.state)


@event
class ApplyReputationEffects:
    """
    Feed the boss relationship back into salary and promotion eligibility.

    Must run after ``update_npc_relationships``.
    """

    def execute(self, sim: Simulation) -> None:
        apply_reputation_effects(sim.state)
