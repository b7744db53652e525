"""Unit tests for PlayerState helpers and the initial player."""

from datetime import date

import pytest

from finlife.config import Config
from finlife.state import CurrentHousing, clamp, create_initial_player
from tests.helpers.factories import (
    START,
    attach_loan,
    mock_loan,
    mock_player,
    mock_vehicle,
)


def test_clamp():
    assert clamp(120, 0, 100) == 100
    assert clamp(-5, 0, 100) == 0
    assert clamp(42, 0, 100) == 42


def test_new_id_is_sequential_across_prefixes():
    state = mock_player()
    assert state.new_id("loan") == "loan-0001"
    assert state.new_id("evt") == "evt-0002"
    assert state.id_counter == 2


@pytest.mark.parametrize(
    "method, attr, start, delta, expected",
    [
        ("adjust_happiness", "happiness", 95.0, 10, 100.0),
        ("adjust_stress", "stress", 5.0, -10, 0.0),
        ("adjust_prospects", "prospects", 50.0, 5, 55.0),
        ("adjust_credit_score", "credit_score", 320.0, -50, 300.0),
        ("adjust_credit_score", "credit_score", 840.0, 50, 850.0),
    ],
)
def test_adjust_helpers_clamp(method, attr, start, delta, expected):
    state = mock_player(**{attr: start})
    getattr(state, method)(delta)
    assert getattr(state, attr) == expected


def test_add_event_is_dated_today_and_unread():
    state = mock_player(current_date=date(2024, 2, 5))
    ev = state.add_event("system", "Hello", "World")

    assert ev.date == date(2024, 2, 5)
    assert not ev.is_read
    assert state.game_events == [ev]
    assert state.find_event(ev.id) is ev


def test_record_transaction_kind_from_sign_and_rounding():
    state = mock_player()
    credit = state.record_transaction("Refund", 10.004, "Misc")
    debit = state.record_transaction("Lunch", -12.345, "Food")
    transfer = state.record_transaction("Move", -5.0, "Misc", "transfer")

    assert credit.kind == "income"
    assert credit.amount == 10.0
    assert debit.kind == "expense"
    assert debit.amount == pytest.approx(-12.35, abs=0.011)
    assert transfer.kind == "transfer"


def test_monthly_debt_payment_falls_back_to_expense_line():
    state = mock_player(total_monthly_debt_payment=0.0)
    assert state.monthly_debt_payment == 600.0


def test_add_debt_payment_mirrors_into_expenses_and_never_negative():
    state = mock_player()
    state.add_debt_payment(150.0)
    assert state.total_monthly_debt_payment == 750.0
    assert state.expenses.loan_payment == 750.0

    state.add_debt_payment(-10_000.0)
    assert state.total_monthly_debt_payment == 0.0


def test_remove_loan_unlinks_collateral():
    state = mock_player(current_vehicle=mock_vehicle(is_financed=True))
    loan = attach_loan(state, mock_loan(collateral_id="vehicle_reliable"))
    state.current_vehicle.loan_id = loan.id

    state.remove_loan(loan)

    assert state.loans == []
    assert state.current_vehicle.loan_id is None
    assert not state.current_vehicle.is_financed
    assert state.total_monthly_debt_payment == pytest.approx(600.0)


def test_remove_loan_unlinks_mortgage():
    state = mock_player()
    loan = attach_loan(state, mock_loan(type="asset_mortgage"))
    state.current_housing = CurrentHousing(
        "owned_starter", 3, True, START, loan.id, 120_000.0
    )

    state.remove_loan(loan)
    assert state.current_housing.loan_id is None


def test_derived_totals():
    state = mock_player()
    state.loans.append(mock_loan(remaining_balance=1000.0))
    state.loans.append(mock_loan(id="loan-9002", remaining_balance=500.0))
    assert state.total_debt == 1500.0
    assert state.portfolio_value == 0.0


def test_expenses_total():
    assert mock_player().expenses.total == 1200 + 1100 + 600 + 200


def test_create_initial_player_uses_config():
    cfg = Config(start_date=date(2024, 1, 1), player_name="Ada", income=4000.0)
    state = create_initial_player(cfg, housing_tier=2)

    assert state.name == "Ada"
    assert state.income == 4000.0
    assert state.current_date == state.start_date == date(2024, 1, 1)
    assert state.balance_debit == 500.0
    assert state.current_housing.housing_id == "rental_1bed"
    assert state.current_housing.tier == 2
    assert not state.current_housing.is_owned
    assert [n.npc_id for n in state.npc_relationships] == ["karen", "sam", "emma"]
    assert state.debt_to_income_ratio == pytest.approx(600 / 4000)
    assert state.balance_history == [500.0]
    assert state.job_metrics.monthly_performance_history == [75.0]
    assert state.game_status == "active"
