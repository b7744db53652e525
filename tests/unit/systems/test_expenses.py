# tests/unit/systems/test_expenses.py
from __future__ import annotations

import pytest

from finlife.systems.expenses import (
    WEEKLY_EXPENSE_TABLE,
    apply_weekly_random_expenses,
    trigger_chance,
)
from tests.helpers.factories import mock_player
from tests.helpers.fixed_rng import FixedRNG

MISS = 0.99


def _row(category: str):
    return next(e for e in WEEKLY_EXPENSE_TABLE if e.category == category)


def test_trigger_chance_scales_with_stress() -> None:
    assert trigger_chance(_row("Food & Drink"), stress=100) == 30
    assert trigger_chance(_row("Household"), stress=50) == pytest.approx(33.0)
    assert trigger_chance(_row("Urgent Repair"), stress=100) == pytest.approx(103.0)


def test_nothing_fires() -> None:
    state = mock_player()
    rng = FixedRNG([MISS] * 5)

    assert apply_weekly_random_expenses(state, rng) == 0.0
    assert rng.remaining == 0
    assert state.balance_debit == 500.0


def test_treat_costs_money_and_lifts_mood() -> None:
    state = mock_player()
    # food fires (amount draw 0.5), the other four rows miss
    rng = FixedRNG([0.0, 0.5, MISS, MISS, MISS, MISS])

    spent = apply_weekly_random_expenses(state, rng)

    assert spent == pytest.approx(5.5)
    assert state.balance_debit == pytest.approx(494.5)
    assert state.happiness == 62.0
    assert state.transactions[-1].category == "Food & Drink"
    assert rng.remaining == 0


def test_urgent_repair_adds_stress() -> None:
    state = mock_player()
    rng = FixedRNG([MISS, MISS, MISS, MISS, 0.0, 0.5])

    spent = apply_weekly_random_expenses(state, rng)

    assert spent == pytest.approx(300.0)
    assert state.stress == 35.0
    assert state.happiness == 57.0


def test_high_stress_makes_household_expense_fire() -> None:
    calm = mock_player(stress=0.0)
    tense = mock_player(stress=90.0)
    rolls = [MISS, MISS, 0.5, 0.0, MISS, MISS]

    apply_weekly_random_expenses(calm, FixedRNG([MISS, MISS, 0.5, MISS, MISS]))
    apply_weekly_random_expenses(tense, FixedRNG(rolls))

    assert calm.transactions == []
    assert [tx.category for tx in tense.transactions] == ["Household"]
