# src/finlife/systems/expenses.py
"""Small unplanned weekly spending drawn from a fixed table."""

from __future__ import annotations

from dataclasses import dataclass

from finlife import logging
from finlife.state import PlayerState
from finlife.typing import Rng

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class WeeklyExpense:
    """
    One row of the weekly expense table.

    ``base_chance`` is a percentage. ``stress_multiplier`` scales how much
    the player's stress raises that chance.
    """

    category: str
    description: str
    base_chance: float
    min_amount: float
    max_amount: float
    stress_multiplier: float = 0.0


WEEKLY_EXPENSE_TABLE: tuple[WeeklyExpense, ...] = (
    WeeklyExpense("Food & Drink", "Coffee/lunch out", 30, 3, 8),
    WeeklyExpense("Entertainment", "Movie, game, entertainment", 15, 15, 50),
    WeeklyExpense("Household", "Broken item, replacement needed", 8, 20, 120, 0.5),
    WeeklyExpense("Health", "Doctor visit, medicine", 5, 50, 200, 0.3),
    WeeklyExpense("Urgent Repair", "Car/phone emergency repair", 3, 100, 500, 1.0),
)

_TREATS = frozenset({"Food & Drink", "Entertainment"})


def trigger_chance(expense: WeeklyExpense, stress: float) -> float:
    """Chance in percent that *expense* fires at the given stress level."""
    return expense.base_chance + stress / 100 * expense.stress_multiplier * 100


def apply_weekly_random_expenses(
    state: PlayerState,
    rng: Rng,
    table: tuple[WeeklyExpense, ...] = WEEKLY_EXPENSE_TABLE,
) -> float:
    """
    Roll every row of *table* and pay for the ones that fire.

    Treats (food, entertainment) add 2 happiness; an urgent repair adds
    5 stress and costs 3 happiness.

    Returns
    -------
    float
        Total amount spent.
    """
    spent = 0.0
    for expense in table:
        if float(rng.random()) * 100 >= trigger_chance(expense, state.stress):
            continue

        span = expense.max_amount - expense.min_amount
        amount = round(expense.min_amount + float(rng.random()) * span, 2)
        state.balance_debit -= amount
        state.record_transaction(expense.description, -amount, expense.category)
        spent += amount

        if expense.category in _TREATS:
            state.adjust_happiness(2)
        elif expense.category == "Urgent Repair":
            state.adjust_stress(5)
            state.adjust_happiness(-3)

        log.debug(f"  {expense.category}: -{amount:,.2f}")

    return spent
