# src/finlife/systems/social.py
"""NPC reputation drift and its feedback into salary."""

from __future__ import annotations

from finlife import logging
from finlife.state import PlayerState, clamp

log = logging.getLogger(__name__)

DECAY_AFTER_DAYS = 30
DECAY_PER_MONTH = -0.5
BOSS_ID = "karen"
RIVAL_ID = "emma"


def update_npc_relationships(state: PlayerState) -> None:
    """
    Apply the monthly reputation drift to every NPC.

    Relationships without an interaction in the last 30 days fade by 0.5.
    The boss follows job performance (+2 above 75, -3 below 30) and the
    rival follows the player's standing (+1 with prospects above 70 and
    income above $4,000, -1 with prospects below 40).
    """
    performance = state.job_metrics.current_performance

    for npc in state.npc_relationships:
        delta = 0.0
        if (state.current_date - npc.last_interaction).days > DECAY_AFTER_DAYS:
            delta += DECAY_PER_MONTH

        if npc.npc_id == BOSS_ID:
            if performance > 75:
                delta += 2
            elif performance < 30:
                delta -= 3
        elif npc.npc_id == RIVAL_ID:
            if state.prospects > 70 and state.income > 4000:
                delta += 1
            elif state.prospects < 40:
                delta -= 1

        npc.reputation = clamp(npc.reputation + delta, -100.0, 100.0)


def apply_reputation_effects(state: PlayerState) -> float:
    """
    Feed the boss relationship back into the salary.

    Above 70 the salary grows by 5 % and promotion eligibility by 10;
    below 0 both shrink by the same amounts.

    Returns
    -------
    float
        Income change applied this month.
    """
    bonus = 0.0
    for npc in state.npc_relationships:
        if npc.npc_id != BOSS_ID:
            continue
        if npc.reputation > 70:
            bonus += state.income * 0.05
            state.job_metrics.promotion_eligibility += 10
        elif npc.reputation < 0:
            bonus -= state.income * 0.05
            state.job_metrics.promotion_eligibility -= 10

    if bonus:
        state.income += bonus
        log.info(f"Reputation effect on income: {bonus:+,.2f}")
    return bonus
