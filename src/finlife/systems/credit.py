# src/finlife/systems/credit.py
"""Monthly credit score recomputation."""

from __future__ import annotations

from finlife import logging
from finlife.state import PlayerState, clamp

log = logging.getLogger(__name__)

BASE_SCORE = 650.0


def update_credit_score(state: PlayerState) -> float:
    """
    Recompute the credit score from scratch.

    Components
    ----------
    - payment history: +50 with no delinquent loan, else -50 per delinquent loan
    - debt-to-income: +50 / +20 / 0 / -30 for < 0.2 / < 0.4 / < 0.6 / >= 0.6
    - savings vs three months of debt service: +30 if > 1, +15 if > 0.5
    - account age: +20 beyond five years, +10 beyond two

    Also stores the debt-to-income ratio. Returns the new score, clamped
    to [300, 850].
    """
    score = BASE_SCORE

    delinquent = sum(1 for loan in state.loans if loan.is_delinquent)
    score += 50 if delinquent == 0 else -50 * delinquent

    dti = state.total_monthly_debt_payment / (state.income or 1)
    if dti < 0.2:
        score += 50
    elif dti < 0.4:
        score += 20
    elif dti < 0.6:
        pass
    else:
        score -= 30

    savings_ratio = state.balance_virtual / (state.total_monthly_debt_payment * 3 or 1)
    if savings_ratio > 1:
        score += 30
    elif savings_ratio > 0.5:
        score += 15

    account_age_years = (state.current_date - state.start_date).days / 365
    if account_age_years > 5:
        score += 20
    elif account_age_years > 2:
        score += 10

    state.credit_score = clamp(score, 300.0, 850.0)
    log.debug(f"  credit score {state.credit_score:.0f} (dti={dti:.2f})")
    state.debt_to_income_ratio = dti
    return state.credit_score
