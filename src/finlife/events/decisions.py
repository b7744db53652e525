"""Deferred decision effects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from finlife.core.decorators import event
from finlife.systems.scheduled import process_scheduled_decision_effects

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@event
class ApplyScheduledEffects:
    """Apply and discard scheduled effects whose trigger turn has arrived."""

    def execute(self, sim: Simulation) -> None:
        applied = process_scheduled_decision_effects(sim.state, sim.turn.turn_number)
        if applied:
            self.get_logger().info(f"  Applied {len(applied)} scheduled effect(s)")
