"""
Financial primitives.

Pure helpers for loan pricing and amortisation and net worth. None of
them mutate the state they are given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from finlife.calendar import months_between

if TYPE_CHECKING:
    from finlife.state import Loan, LoanType, PlayerState

# (minimum credit score, base annual rate), best tier first
CREDIT_RATE_TIERS: tuple[tuple[int, float], ...] = (
    (750, 0.04),
    (700, 0.06),
    (650, 0.09),
    (600, 0.14),
)
SUBPRIME_RATE = 0.22

LOAN_TYPE_MODIFIERS: dict[str, float] = {
    "asset_mortgage": 0.5,
    "personal_loan": 1.0,
    "payday_loan": 2.5,
}


def calculate_loan_rate(credit_score: float, loan_type: LoanType) -> float:
    """
    Annual interest rate offered for *loan_type* at *credit_score*.

    Examples
    --------
    >>> calculate_loan_rate(760, "asset_mortgage")
    0.02
    >>> calculate_loan_rate(580, "payday_loan")
    0.55
    """
    base = next(
        (rate for floor, rate in CREDIT_RATE_TIERS if credit_score >= floor),
        SUBPRIME_RATE,
    )
    # rounding keeps tier products exact (0.22 * 2.5 -> 0.55)
    return round(base * LOAN_TYPE_MODIFIERS.get(loan_type, 1.0), 10)


def calculate_monthly_payment(
    principal: float, annual_rate: float, months_remaining: int
) -> float:
    """
    Fixed-rate amortising payment.

    Returns 0 for a non-positive principal or term, and a straight-line
    ``principal / months_remaining`` when the rate is zero.
    """
    if principal <= 0 or months_remaining <= 0:
        return 0.0
    if annual_rate == 0:
        return principal / months_remaining

    r = annual_rate / 12
    growth = (1 + r) ** months_remaining
    return principal * r * growth / (growth - 1)


def calculate_net_worth(state: PlayerState) -> float:
    """Liquid assets plus portfolio value minus outstanding loan balances."""
    assets = state.balance_debit + state.balance_virtual + state.portfolio_value
    return assets - state.total_debt


@dataclass(slots=True, frozen=True)
class EarlyPayment:
    amount_paid: float
    new_balance: float
    interest_saved: float
    months_saved: int
    stress_reduction: int


def pay_early_on_loan(loan: Loan, amount_paid: float, as_of: date) -> EarlyPayment:
    """
    Evaluate paying *amount_paid* towards *loan* on *as_of*.

    The regular instalment is split into interest (at the current monthly
    rate) and principal; anything above the instalment goes straight to
    principal. Months saved is the total principal reduction expressed in
    regular principal portions.
    """
    monthly_interest = loan.remaining_balance * (loan.annual_interest_rate / 12)
    principal_portion = max(0.0, loan.monthly_payment - monthly_interest)

    extra = max(0.0, amount_paid - loan.monthly_payment)
    total_principal = principal_portion + extra

    new_balance = max(0.0, loan.remaining_balance - total_principal)
    if principal_portion > 0:
        months_saved = math.ceil(total_principal / principal_portion)
    else:
        months_saved = months_between(as_of, loan.maturity_date)

    return EarlyPayment(
        amount_paid=amount_paid,
        new_balance=new_balance,
        interest_saved=monthly_interest * months_saved,
        months_saved=months_saved,
        stress_reduction=math.ceil(months_saved / 6),
    )
