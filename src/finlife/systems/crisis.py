# src/finlife/systems/crisis.py
"""
Crisis classification, the Red Zone lifecycle and bankruptcy.

Classification is evaluated once per monthly close:

    active          net worth > 0 and checking > -500
    yellow_warning  checking < -500 and net worth > 0 (never persisted)
    red_zone        checking < -1000, or -10,000 < net worth < 0
    game_over       net worth < 0 for ``game_over_months`` evaluations

The first matching row wins. A deeply insolvent player (net worth at or
below -10,000) who has not yet reached the game-over count is red_zone.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from finlife import logging
from finlife.finance import calculate_net_worth
from finlife.state import EventAction, GameEvent, Impact, PlayerState
from finlife.systems.loans import discharge_debt, restructure_loans

log = logging.getLogger(__name__)

CrisisLevel = Literal["active", "yellow_warning", "red_zone", "game_over"]
BankruptcyOption = Literal["chapter_7", "chapter_13", "settlement"]

WARNING_BALANCE = -500.0
RED_ZONE_BALANCE = -1000.0
RED_ZONE_NET_WORTH_FLOOR = -10_000.0


def check_game_status(state: PlayerState, *, game_over_months: int = 3) -> CrisisLevel:
    """
    Classify the player and update the negative-net-worth counter.

    The counter increments on every call with a negative net worth and
    resets otherwise, so the game-over rule counts consecutive months.
    """
    net_worth = calculate_net_worth(state)
    balance = state.balance_debit

    if net_worth < 0:
        state.negative_net_worth_months += 1
    else:
        state.negative_net_worth_months = 0

    if net_worth > 0 and balance > WARNING_BALANCE:
        return "active"
    if balance < WARNING_BALANCE and net_worth > 0:
        return "yellow_warning"
    if balance < RED_ZONE_BALANCE or RED_ZONE_NET_WORTH_FLOOR < net_worth < 0:
        return "red_zone"
    if net_worth < 0:
        if state.negative_net_worth_months >= game_over_months:
            return "game_over"
        return "red_zone"
    return "active"


def process_red_zone(state: PlayerState, *, penalty: float = 50.0) -> None:
    """
    One month inside the Red Zone.

    On entry the start date is recorded and a crisis event is emitted.
    Every month charges the overdraft *penalty* and pins stress at 100
    and happiness at 0, then checks whether the player has recovered.
    """
    if state.red_zone_start_date is None:
        state.red_zone_start_date = state.current_date
        state.game_status = "red_zone"
        state.add_event(
            "crisis",
            "FINANCIAL CRISIS - RED ZONE ACTIVATED",
            "Your finances are in critical condition. You have 3 months to "
            "recover or face bankruptcy.",
            impact=Impact(stress=30, happiness=-50),
        )
        log.warning("Entered the red zone")

    state.balance_debit -= penalty
    state.record_transaction("Red Zone Overdraft Penalty", -penalty, "Fees")
    state.stress = 100.0
    state.happiness = 0.0

    exit_red_zone_if_recovered(state)


def exit_red_zone_if_recovered(state: PlayerState) -> bool:
    """Leave the Red Zone once net worth and checking are both positive."""
    if state.red_zone_start_date is None:
        return False
    if calculate_net_worth(state) <= 0 or state.balance_debit <= 0:
        return False

    state.red_zone_start_date = None
    state.game_status = "active"
    _close_bankruptcy_offer(state)
    state.adjust_stress(-30)
    state.adjust_happiness(20)
    state.add_event(
        "system",
        "RED ZONE EXITED",
        "You've stabilized your finances! Crisis averted. Keep up your new "
        "spending habits.",
        impact=Impact(happiness=20, stress=-30),
    )
    log.info("Left the red zone")
    return True


@dataclass(slots=True, frozen=True)
class BankruptcyTerms:
    """
    Effects of one bankruptcy option.

    ``wipe_fraction`` of the total debt is forgiven and ``repay_fraction``
    is paid out of checking; both portions are discharged against loans.
    """

    option: BankruptcyOption
    title: str
    description: str
    wipe_fraction: float
    repay_fraction: float = 0.0
    balance_change: float = 0.0
    credit_change: float = 0.0
    stress_change: float = 0.0
    prospects_change: float = 0.0
    liquidate: bool = False
    restructure_months: int | None = None


BANKRUPTCY_TERMS: dict[str, BankruptcyTerms] = {
    "chapter_7": BankruptcyTerms(
        option="chapter_7",
        title="Chapter 7: Liquidation",
        description="Wipe most debts. Lose most assets. Credit destroyed for 7 years.",
        wipe_fraction=1.0,
        balance_change=-1000.0,
        credit_change=-400.0,
        stress_change=-50.0,
        prospects_change=-20.0,
        liquidate=True,
    ),
    "chapter_13": BankruptcyTerms(
        option="chapter_13",
        title="Chapter 13: Reorganization",
        description="Restructure debts into a 5 year repayment plan. Keep assets.",
        wipe_fraction=0.2,
        credit_change=-100.0,
        stress_change=-40.0,
        prospects_change=-10.0,
        restructure_months=60,
    ),
    "settlement": BankruptcyTerms(
        option="settlement",
        title="Creditor Settlement",
        description="Negotiate with creditors. Pay 70% of debt, rest forgiven.",
        wipe_fraction=0.3,
        repay_fraction=0.7,
        credit_change=-80.0,
        stress_change=-30.0,
    ),
}


def _split_debt(terms: BankruptcyTerms, total: float) -> tuple[float, float]:
    """Return ``(forgiven, repaid)`` for *total* outstanding debt."""
    repaid = float(math.floor(total * terms.repay_fraction))
    if terms.wipe_fraction + terms.repay_fraction >= 1:
        return total - repaid, repaid
    return float(math.floor(total * terms.wipe_fraction)), repaid


def offer_bankruptcy_recovery(state: PlayerState) -> GameEvent | None:
    """
    Present the three bankruptcy options as an actionable crisis event.

    Nothing is offered while a previous offer is still unanswered.
    """
    pending = state.find_event(state.pending_bankruptcy_event_id)
    if pending is not None and not pending.is_read:
        return None

    total = state.total_debt
    actions = []
    for terms in BANKRUPTCY_TERMS.values():
        forgiven, repaid = _split_debt(terms, total)
        actions.append(
            EventAction(
                id=terms.option,
                label=terms.title,
                description=f"{terms.description} (${forgiven:,.0f} forgiven)",
                impact=Impact(
                    balance=terms.balance_change - repaid,
                    stress=terms.stress_change,
                ),
            )
        )

    ev = state.add_event(
        "crisis",
        "Bankruptcy Protection Available",
        "Due to severe financial hardship, you're eligible for bankruptcy "
        "protection.",
        actions=actions,
    )
    state.pending_bankruptcy_event_id = ev.id
    log.warning(f"Bankruptcy protection offered ({ev.id})")
    return ev


def _close_bankruptcy_offer(state: PlayerState) -> None:
    pending = state.find_event(state.pending_bankruptcy_event_id)
    if pending is not None:
        pending.is_read = True
    state.pending_bankruptcy_event_id = None


def apply_bankruptcy(state: PlayerState, option: BankruptcyOption) -> float:
    """
    Execute a bankruptcy option.

    Debt is discharged against loans in collection order, the scheduled
    debt service is recomputed from the surviving loans and the Red Zone
    is cleared.

    Returns
    -------
    float
        Total debt discharged (forgiven plus repaid).

    Raises
    ------
    KeyError
        If *option* is not a known bankruptcy option.
    """
    terms = BANKRUPTCY_TERMS[option]
    forgiven, repaid = _split_debt(terms, state.total_debt)

    state.adjust_credit_score(terms.credit_change)
    state.adjust_stress(terms.stress_change)
    state.adjust_prospects(terms.prospects_change)

    cash_change = terms.balance_change - repaid
    if cash_change:
        state.balance_debit += cash_change
        state.record_transaction(terms.title, cash_change, "Bankruptcy")

    discharged = discharge_debt(state, forgiven + repaid)

    if terms.restructure_months:
        restructure_loans(state, terms.restructure_months)
    if terms.liquidate:
        state.investments.clear()
        state.current_vehicle = None

    state.total_monthly_debt_payment = sum(loan.monthly_payment for loan in state.loans)
    state.expenses.loan_payment = state.total_monthly_debt_payment

    state.bankruptcy_attempts += 1
    state.red_zone_start_date = None
    state.game_status = "active"
    _close_bankruptcy_offer(state)

    forgiven_note = f" ${forgiven:,.0f} in debt forgiven." if forgiven > 0 else ""
    state.add_event(
        "system",
        terms.title,
        f"Your financial situation has been addressed.{forgiven_note} "
        "Credit score impacted.",
    )
    log.warning(f"Bankruptcy executed: {option}, {discharged:,.2f} discharged")
    return discharged


def evaluate_crisis(
    state: PlayerState,
    *,
    red_zone_penalty: float = 50.0,
    bankruptcy_offer_days: int = 90,
    game_over_months: int = 3,
) -> CrisisLevel:
    """
    Classify the player and act on the result.

    red_zone runs the monthly Red Zone processing and offers bankruptcy
    once the crisis is *bankruptcy_offer_days* old; game_over ends the
    game; a yellow warning emits a notice. Outside the Red Zone a player
    who has recovered leaves it.
    """
    level = check_game_status(state, game_over_months=game_over_months)

    if level == "red_zone":
        process_red_zone(state, penalty=red_zone_penalty)
        start = state.red_zone_start_date
        days_in_crisis = (state.current_date - start).days if start else 0
        if start is not None and days_in_crisis >= bankruptcy_offer_days:
            offer_bankruptcy_recovery(state)
    elif level == "game_over":
        if state.game_status != "game_over":
            state.game_status = "game_over"
            state.add_event(
                "system",
                "GAME OVER",
                "Your financial situation became unrecoverable. You are bankrupt.",
            )
            log.warning("Game over")
    else:
        if level == "yellow_warning":
            state.add_event(
                "financial",
                "Overdraft Warning",
                "Your checking account is below -$500. "
                "Cut spending before this becomes a crisis.",
            )
        exit_red_zone_if_recovered(state)

    return level
