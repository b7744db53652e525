# tests/helpers/invariants.py
"""
High-level invariants that must hold after *every* turn or action.
They deliberately stay coarse-grained so they remain valid even when the
micro-rules evolve.
"""

from __future__ import annotations

import math

from finlife.finance import calculate_net_worth
from finlife.state import PlayerState


def assert_state_invariants(state: PlayerState) -> None:  # noqa: C901  (flat, long)
    """
    Raise ``AssertionError`` if *any* fundamental relationship of the
    player state is violated.
    """

    # Bounded metrics
    # ---------------
    assert 0.0 <= state.happiness <= 100.0
    assert 0.0 <= state.stress <= 100.0
    assert 0.0 <= state.prospects <= 100.0
    assert 300.0 <= state.credit_score <= 850.0
    assert 0.0 <= state.job_metrics.current_performance <= 100.0
    for npc in state.npc_relationships:
        assert -100.0 <= npc.reputation <= 100.0

    # Cash & net worth
    # ----------------
    assert math.isfinite(state.balance_debit)
    assert math.isfinite(state.balance_virtual)
    expected = (
        state.balance_debit
        + state.balance_virtual
        + sum(inv.total_value for inv in state.investments)
        - sum(loan.remaining_balance for loan in state.loans)
    )
    assert math.isclose(calculate_net_worth(state), expected, abs_tol=1e-6)

    # Holdings
    # --------
    for inv in state.investments:
        assert inv.shares_owned > 0
        assert inv.share_price > 0
        assert math.isclose(
            inv.total_value, inv.share_price * inv.shares_owned, rel_tol=1e-9
        )

    # Loans
    # -----
    for loan in state.loans:
        assert loan.remaining_balance >= 0
        assert loan.days_delinquent >= 0
        assert loan.days_delinquent == 0 or loan.is_delinquent
    assert state.total_monthly_debt_payment >= 0
    assert state.expenses.loan_payment >= 0
    assert state.expenses.rent >= 0

    # Logs & history
    # --------------
    assert len(state.job_metrics.monthly_performance_history) <= 12
    assert (
        len(state.balance_history)
        == len(state.happiness_history)
        == len(state.stress_history)
    )
    event_ids = [e.id for e in state.game_events]
    assert len(event_ids) == len(set(event_ids))

    # Lifecycle
    # ---------
    assert state.game_status in ("active", "red_zone", "game_over")
    assert state.negative_net_worth_months >= 0
    if state.game_status == "red_zone":
        assert state.red_zone_start_date is not None
