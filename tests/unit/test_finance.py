"""Unit tests for loan pricing, amortisation and net worth."""

from datetime import date

import pytest

from finlife.finance import (
    calculate_loan_rate,
    calculate_monthly_payment,
    calculate_net_worth,
    pay_early_on_loan,
)
from tests.helpers.factories import START, mock_investment, mock_loan, mock_player


@pytest.mark.parametrize(
    "score, loan_type, expected",
    [
        (760, "personal_loan", 0.04),
        (750, "personal_loan", 0.04),
        (720, "personal_loan", 0.06),
        (650, "personal_loan", 0.09),
        (600, "personal_loan", 0.14),
        (599, "personal_loan", 0.22),
        (760, "asset_mortgage", 0.02),
        (580, "payday_loan", 0.55),
    ],
)
def test_calculate_loan_rate(score, loan_type, expected):
    assert calculate_loan_rate(score, loan_type) == pytest.approx(expected)


def test_monthly_payment_standard_amortisation():
    assert calculate_monthly_payment(100_000, 0.06, 360) == pytest.approx(
        599.55, abs=0.01
    )


def test_monthly_payment_zero_rate_is_straight_line():
    assert calculate_monthly_payment(12_000, 0.0, 12) == pytest.approx(1000.0)


@pytest.mark.parametrize("principal, months", [(0, 12), (-10, 12), (1000, 0)])
def test_monthly_payment_degenerate_inputs(principal, months):
    assert calculate_monthly_payment(principal, 0.05, months) == 0.0


def test_net_worth_counts_cash_holdings_and_debt():
    state = mock_player(balance_debit=500.0, balance_virtual=10.0)
    state.investments.append(mock_investment())  # 1000
    state.loans.append(mock_loan(remaining_balance=2000.0))

    assert calculate_net_worth(state) == pytest.approx(500 + 10 + 1000 - 2000)


def test_net_worth_of_default_player():
    assert calculate_net_worth(mock_player()) == pytest.approx(510.0)


def test_pay_early_splits_interest_and_principal():
    loan = mock_loan(
        remaining_balance=10_000.0, annual_interest_rate=0.12, monthly_payment=500.0
    )
    result = pay_early_on_loan(loan, 900.0, START)

    # interest 100, principal portion 400, extra 400
    assert result.new_balance == pytest.approx(9200.0)
    assert result.months_saved == 2
    assert result.interest_saved == pytest.approx(200.0)
    assert result.stress_reduction == 1
    assert result.amount_paid == 900.0


def test_pay_early_does_not_mutate_loan():
    loan = mock_loan()
    pay_early_on_loan(loan, loan.monthly_payment * 2, START)
    assert loan.remaining_balance == 10_000.0


def test_pay_early_never_goes_negative():
    loan = mock_loan(
        remaining_balance=300.0, annual_interest_rate=0.0, monthly_payment=200.0
    )
    result = pay_early_on_loan(loan, 1000.0, START)
    assert result.new_balance == 0.0


def test_pay_early_interest_only_loan_counts_months_to_maturity():
    loan = mock_loan(
        remaining_balance=10_000.0,
        annual_interest_rate=0.12,
        monthly_payment=100.0,
        maturity_date=date(2024, 7, 1),
    )
    result = pay_early_on_loan(loan, 100.0, START)

    assert result.months_saved == 6
    assert result.stress_reduction == 1
