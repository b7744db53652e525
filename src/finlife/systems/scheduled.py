# src/finlife/systems/scheduled.py
"""Deferred consequences of player decisions."""

from __future__ import annotations

from finlife import logging
from finlife.state import PlayerState, ScheduledEffect, clamp

log = logging.getLogger(__name__)

DELAYED_METRICS = frozenset({"income", "prospects", "happiness", "stress", "balance"})


def process_scheduled_decision_effects(
    state: PlayerState, current_turn: int
) -> list[ScheduledEffect]:
    """
    Apply and discard every effect whose trigger turn has arrived.

    Reputation changes are clamped to ``[-100, 100]`` and count as an
    interaction with that NPC. Metric ``income`` replaces the salary;
    ``prospects``, ``happiness``, ``stress`` and ``balance`` are added.

    Returns
    -------
    list[ScheduledEffect]
        The effects applied, in scheduling order.
    """
    due = [e for e in state.scheduled_effects if e.trigger_turn <= current_turn]
    if not due:
        return []

    for effect in due:
        for rep in effect.impact.reputation:
            npc = state.find_npc(rep.npc_id)
            if npc is None:
                log.warning(f"Scheduled effect {effect.id}: unknown NPC '{rep.npc_id}'")
                continue
            npc.reputation = clamp(npc.reputation + rep.change, -100.0, 100.0)
            npc.last_interaction = state.current_date
            npc.total_interactions += 1

        for key, value in effect.impact.metrics.items():
            if key == "income":
                state.income = value
            elif key == "prospects":
                state.adjust_prospects(value)
            elif key == "happiness":
                state.adjust_happiness(value)
            elif key == "stress":
                state.adjust_stress(value)
            elif key == "balance":
                state.balance_debit += value
                state.record_transaction(effect.description, value, "Decisions")
            else:
                raise KeyError(f"Unknown scheduled metric '{key}' in {effect.id}")

        log.info(f"Applied scheduled effect {effect.id} ({effect.triggered_by})")

    state.scheduled_effects = [
        e for e in state.scheduled_effects if e.trigger_turn > current_turn
    ]
    return due
