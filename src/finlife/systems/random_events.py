# src/finlife/systems/random_events.py
"""
Probability-gated notifications.

Each generator draws one uniform number in ``[0, 100)`` and compares it
against cumulative thresholds, so several outcomes can fire from the
same draw (a low roll triggers every branch whose threshold it is under).
"""

from __future__ import annotations

from finlife import logging
from finlife.state import EventAction, Impact, PlayerState
from finlife.typing import Rng

log = logging.getLogger(__name__)

# (title, amount)
MINOR_EXPENSES: tuple[tuple[str, float], ...] = (
    ("Car maintenance", 150.0),
    ("Coffee habit", 25.0),
    ("Phone repair", 100.0),
    ("Medical co-pay", 50.0),
    ("Food delivery urge", 35.0),
)

# (title, cost, stress relief)
STRESS_RELIEFS: tuple[tuple[str, float, float], ...] = (
    ("Gaming spree", 80.0, 15.0),
    ("Dining out", 60.0, 10.0),
    ("Movie + popcorn", 40.0, 8.0),
    ("Shopping therapy", 120.0, 20.0),
)

# (title, message, cost)
MONTHLY_CRISES: tuple[tuple[str, str, float], ...] = (
    ("Car breakdown!", "Your car needs emergency repair: $400", 400.0),
    ("Roof leak!", "Your apartment has water damage. Emergency repair: $300", 300.0),
    ("Device broken!", "You need a new phone for work. Cost: $600", 600.0),
)

MINOR_EXPENSE_THRESHOLD = 30
VOLATILITY_THRESHOLD = 45
TEMPTATION_THRESHOLD = 55
TEMPTATION_MIN_STRESS = 70
VOLATILITY_RANGE = 0.1

PERFORMANCE_THRESHOLD = 20
CRISIS_THRESHOLD = 25
PERFORMANCE_BONUS = 500.0


def _pick(rng: Rng, n: int) -> int:
    return int(rng.integers(0, n))


def generate_weekly_minor_events(state: PlayerState, rng: Rng) -> None:
    """
    Weekly roll for small surprises.

    - roll < 30: a small unplanned expense
    - roll < 45 and investments held: one holding moves by up to +/-5 %
    - roll < 55 and stress > 70: a stress-relief temptation with two actions
    """
    roll = float(rng.random()) * 100

    if roll < MINOR_EXPENSE_THRESHOLD:
        title, amount = MINOR_EXPENSES[_pick(rng, len(MINOR_EXPENSES))]
        state.balance_debit -= amount
        state.record_transaction(title, -amount, "Unexpected")
        state.add_event(
            "financial",
            title,
            f"Unexpected expense: -${amount:,.0f}",
            impact=Impact(balance=-amount),
        )

    if roll < VOLATILITY_THRESHOLD and state.investments:
        inv = state.investments[_pick(rng, len(state.investments))]
        change = (float(rng.random()) - 0.5) * VOLATILITY_RANGE
        old_value = inv.total_value
        inv.revalue(inv.share_price * (1 + change))
        direction = "up" if change > 0 else "down"
        state.add_event(
            "financial",
            f"{inv.symbol} volatility",
            f"{inv.symbol} moved {direction} {abs(change) * 100:.1f}%. "
            f"Value now: ${inv.total_value:,.2f}",
            impact=Impact(balance=inv.total_value - old_value),
        )

    if roll < TEMPTATION_THRESHOLD and state.stress > TEMPTATION_MIN_STRESS:
        title, cost, relief = STRESS_RELIEFS[_pick(rng, len(STRESS_RELIEFS))]
        state.add_event(
            "opportunity",
            title,
            f"Temptation! Spend ${cost:,.0f} to relieve stress by {relief:.0f}%?",
            actions=[
                EventAction(
                    id="accept_stress_relief",
                    label=f"Yes, spend ${cost:,.0f}",
                    impact=Impact(balance=-cost, stress=-relief),
                ),
                EventAction(
                    id="decline_stress_relief",
                    label="No, save the money",
                    impact=Impact(stress=-5),
                ),
            ],
        )


def generate_monthly_major_events(state: PlayerState, rng: Rng) -> None:
    """
    Monthly roll for career feedback and emergencies.

    - roll < 20: performance above 80 offers a $500 bonus; below 40 the
      manager issues a warning (+15 stress)
    - roll < 25: an emergency repair costing $300 to $600 (+20 stress)
    """
    roll = float(rng.random()) * 100
    performance = state.job_metrics.current_performance

    if roll < PERFORMANCE_THRESHOLD:
        if performance > 80:
            state.add_event(
                "career",
                "Excellent Performance",
                "Your manager noticed your excellent work this month!",
                actions=[
                    EventAction(
                        id="accept_bonus",
                        label=f"Accept ${PERFORMANCE_BONUS:,.0f} bonus",
                        impact=Impact(balance=PERFORMANCE_BONUS, happiness=10),
                    )
                ],
            )
        elif performance < 40:
            state.adjust_stress(15)
            state.add_event(
                "career",
                "Performance Warning",
                "Your manager is concerned about your performance. "
                "Improve or face consequences.",
                impact=Impact(stress=15),
            )

    if roll < CRISIS_THRESHOLD:
        title, message, cost = MONTHLY_CRISES[_pick(rng, len(MONTHLY_CRISES))]
        state.balance_debit -= cost
        state.adjust_stress(20)
        state.record_transaction(title, -cost, "Emergency")
        state.add_event(
            "crisis", title, message, impact=Impact(balance=-cost, stress=20)
        )
        log.info(f"Crisis: {title} (-{cost:,.0f})")
