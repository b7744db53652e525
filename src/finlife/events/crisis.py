"""Crisis evaluation stage of the monthly close."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.crisis import evaluate_crisis

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class EvaluateCrisis:
    """
    Classify the player and act on the classification.

    ``red_zone`` runs the Red Zone processing and offers bankruptcy once
    the crisis is old enough, ``game_over`` ends the game, a yellow
    warning emits a notice, and a recovered player leaves the Red Zone.
    The level is stored on the simulation for the turn report.
    """

    def execute(self, sim: Simulation) -> None:
        level = evaluate_crisis(
            sim.state,
            red_zone_penalty=sim.config.red_zone_penalty,
            bankruptcy_offer_days=sim.config.bankruptcy_offer_days,
            game_over_months=sim.config.game_over_months,
        )
        sim.crisis_level = level

        log = self.get_logger()
        if level == "active":
            log.info("  Status: active")
        else:
            log.warning(
                f"  Status: {level} (negative net worth months: "
                f"{sim.state.negative_net_worth_months})"
            )
