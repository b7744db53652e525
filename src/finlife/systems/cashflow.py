# src/finlife/systems/cashflow.py
"""
Cash movements that happen on a fixed schedule: weekly interest, the
monthly salary, mandatory expenses and the monthly history snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

from finlife import logging
from finlife.state import PlayerState

log = logging.getLogger(__name__)


def accrue_weekly_interest(
    state: PlayerState,
    *,
    savings_rate: float = 0.02,
    overdraft_rate: float = 0.05,
    weeks_per_month: float = 4.33,
) -> tuple[float, float]:
    """
    Credit savings interest and charge overdraft interest for one week.

    Annual rates are prorated as ``rate / 12 / weeks_per_month``.

    Returns
    -------
    tuple[float, float]
        ``(interest_earned, overdraft_charge)``.
    """
    earned = 0.0
    charged = 0.0

    if state.balance_virtual > 0:
        earned = state.balance_virtual * savings_rate / 12 / weeks_per_month
        state.balance_virtual += earned

    if state.balance_debit < 0:
        charged = abs(state.balance_debit) * overdraft_rate / 12 / weeks_per_month
        state.balance_debit -= charged
        state.record_transaction("Overdraft Interest", -charged, "Fees")

    return earned, charged


def collect_monthly_income(state: PlayerState) -> float:
    """Credit the full monthly income to checking."""
    state.balance_debit += state.income
    state.record_transaction("Monthly Salary", state.income, "Income")
    log.info(f"Salary of {state.income:,.2f} credited")
    return state.income


def pay_mandatory_expenses(state: PlayerState) -> float:
    """
    Debit rent, groceries, utilities and the scheduled debt service.

    The debt service is ``total_monthly_debt_payment``, falling back to
    ``expenses.loan_payment`` when the former is zero.
    """
    items = {
        "Rent": state.expenses.rent,
        "Groceries": state.expenses.groceries,
        "Utilities": state.expenses.utilities,
        "Loan Payment": state.monthly_debt_payment,
    }
    total = sum(items.values())
    state.balance_debit -= total
    for title, amount in items.items():
        if amount:
            state.record_transaction(title, -amount, "Expenses")
    log.info(f"Mandatory expenses of {total:,.2f} debited")
    return total


def record_monthly_history(state: PlayerState) -> None:
    """Append the closing balance, happiness and stress."""
    state.balance_history.append(state.balance_debit)
    state.happiness_history.append(state.happiness)
    state.stress_history.append(state.stress)


@dataclass(slots=True, frozen=True)
class ExpenseLine:
    category: str
    amount: float
    percentage: int


@dataclass(slots=True, frozen=True)
class FinancialOverview:
    income: float
    total_expenses: float
    net_after_expenses: float
    breakdown: tuple[ExpenseLine, ...]


def calculate_financial_overview(state: PlayerState) -> FinancialOverview:
    """Project next month's income against the recurring expenses."""
    amounts = (
        ("Housing", state.expenses.rent),
        ("Food", state.expenses.groceries),
        ("Loan Payment", state.expenses.loan_payment),
        ("Utilities", state.expenses.utilities),
    )
    total = sum(amount for _, amount in amounts)
    breakdown = tuple(
        ExpenseLine(
            category=category,
            amount=amount,
            percentage=round(amount / total * 100) if total > 0 else 0,
        )
        for category, amount in amounts
    )
    return FinancialOverview(
        income=state.income,
        total_expenses=total,
        net_after_expenses=state.income - total,
        breakdown=breakdown,
    )
