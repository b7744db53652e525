# src/finlife/systems/loans.py
"""
Loan book: origination, monthly servicing, delinquency escalation,
repossession and debt discharge.
"""

from __future__ import annotations

from finlife import logging
from finlife.calendar import add_months
from finlife.catalogs import Catalog
from finlife.finance import calculate_loan_rate, calculate_monthly_payment
from finlife.state import CurrentHousing, Impact, Loan, LoanType, PlayerState

log = logging.getLogger(__name__)

LATE_FEE_FLOOR = 35.0
LATE_FEE_RATE = 0.10
LATE_FEE_PERIOD_DAYS = 30
REPOSSESSION_DAYS = 90

_EPS = 0.005


def late_fee(loan: Loan) -> float:
    """Fee charged each time a delinquency crosses another 30 days."""
    return max(LATE_FEE_FLOOR, loan.monthly_payment * LATE_FEE_RATE)


def originate_loan(
    state: PlayerState,
    loan_type: LoanType,
    principal: float,
    *,
    months: int,
    collateral_id: str | None = None,
) -> Loan:
    """
    Create a loan priced at the player's credit tier and start charging it.

    The instalment is added to ``total_monthly_debt_payment``.
    """
    rate = calculate_loan_rate(state.credit_score, loan_type)
    loan = Loan(
        id=state.new_id("loan"),
        type=loan_type,
        original_amount=principal,
        remaining_balance=principal,
        annual_interest_rate=rate,
        monthly_payment=calculate_monthly_payment(principal, rate, months),
        start_date=state.current_date,
        maturity_date=add_months(state.current_date, months),
        collateral_id=collateral_id,
    )
    state.loans.append(loan)
    state.add_debt_payment(loan.monthly_payment)
    log.info(
        f"Originated {loan_type} {loan.id}: {principal:,.2f} at {rate:.2%}, "
        f"{loan.monthly_payment:,.2f}/mo"
    )
    return loan


def service_loans(state: PlayerState, *, delinquency_limit: float = -500.0) -> bool:
    """
    Apply this month's instalments, which were debited with the expenses.

    If checking sits below *delinquency_limit* the instalments bounce:
    they are returned to checking and every loan is flagged delinquent.
    Otherwise each instalment is split into interest and principal,
    delinquency is cured, and loans that reach zero are closed.

    Returns
    -------
    bool
        True if the month's payments were missed.
    """
    if not state.loans:
        return False

    if state.balance_debit < delinquency_limit:
        bounced = sum(loan.monthly_payment for loan in state.loans)
        state.balance_debit += bounced
        state.record_transaction("Returned Loan Payment", bounced, "Loans", "transfer")
        newly = [loan for loan in state.loans if not loan.is_delinquent]
        for loan in newly:
            loan.is_delinquent = True
        if newly:
            state.add_event(
                "financial",
                "Missed Loan Payment",
                f"{len(newly)} loan payment(s) bounced. Late fees start after "
                f"{LATE_FEE_PERIOD_DAYS} days.",
            )
        log.warning(f"Loan payments missed ({bounced:,.2f} returned)")
        return True

    for loan in list(state.loans):
        loan.is_delinquent = False
        loan.days_delinquent = 0

        interest = loan.remaining_balance * loan.annual_interest_rate / 12
        principal = min(
            max(0.0, loan.monthly_payment - interest), loan.remaining_balance
        )
        loan.remaining_balance -= principal
        state.interest_paid_total += min(interest, loan.monthly_payment)

        if loan.remaining_balance <= _EPS:
            loan.remaining_balance = 0.0
            state.remove_loan(loan)
            state.add_event(
                "financial", "Loan Paid Off", f"Your {loan.type} {loan.id} is paid off."
            )
    return False


def process_loan_delinquency(state: PlayerState, catalog: Catalog) -> list[Loan]:
    """
    Escalate every delinquent loan by one week.

    Rule
    ----
    - ``days_delinquent += 7``
    - crossing a multiple of 30 days adds ``max(35, 10% of payment)``
    - at 90+ days a secured loan's collateral is repossessed

    Returns
    -------
    list[Loan]
        Loans whose collateral was repossessed this week.
    """
    repossessed = []
    for loan in list(state.loans):
        if not loan.is_delinquent:
            continue

        before = loan.days_delinquent
        loan.days_delinquent += 7

        period = LATE_FEE_PERIOD_DAYS
        if loan.days_delinquent // period > before // period:
            fee = late_fee(loan)
            loan.remaining_balance += fee
            state.add_event(
                "financial",
                "Late Fee Charged",
                f"{loan.days_delinquent} days late on {loan.id}: ${fee:,.2f} added.",
            )
            log.info(f"Late fee {fee:,.2f} on {loan.id}")

        if loan.days_delinquent >= REPOSSESSION_DAYS and loan.collateral_id:
            repossess_collateral(state, loan, catalog)
            repossessed.append(loan)

    return repossessed


def repossess_collateral(state: PlayerState, loan: Loan, catalog: Catalog) -> float:
    """
    Seize the asset securing *loan* and credit its resale value.

    A financed vehicle is taken away; a mortgaged home is foreclosed and
    the player moves into the cheapest rental. Whatever the resale value
    does not cover stays on the loan as unsecured debt.

    Returns
    -------
    float
        Amount credited against the loan.
    """
    recovered = 0.0
    title = ""
    housing = state.current_housing
    vehicle = state.current_vehicle

    if housing.is_owned and housing.loan_id == loan.id:
        tier = catalog.find_housing(housing.housing_id)
        recovered = housing.current_resale_value or (tier.resale_value if tier else 0.0)
        fallback = catalog.cheapest_rental()
        state.current_housing = CurrentHousing(
            housing_id=fallback.id, tier=fallback.tier, is_owned=False
        )
        state.expenses.rent = fallback.monthly_rent
        title = "Home Foreclosed"
    elif vehicle is not None and vehicle.loan_id == loan.id:
        tier = catalog.find_vehicle(vehicle.vehicle_id)
        recovered = vehicle.current_resale_value or (tier.resale_value if tier else 0.0)
        state.current_vehicle = None
        title = "Vehicle Repossessed"

    loan.collateral_id = None
    if not title:
        return 0.0

    applied = min(recovered, loan.remaining_balance)
    loan.remaining_balance -= applied
    if loan.remaining_balance <= _EPS:
        loan.remaining_balance = 0.0
        state.remove_loan(loan)

    state.adjust_stress(20)
    state.adjust_happiness(-15)
    state.add_event(
        "crisis",
        title,
        f"After {loan.days_delinquent} days of missed payments the lender seized "
        f"your collateral. ${applied:,.2f} was credited against the debt.",
        impact=Impact(stress=20, happiness=-15),
    )
    log.warning(f"{title}: {loan.id}, {applied:,.2f} recovered")
    return applied


def discharge_debt(state: PlayerState, amount: float) -> float:
    """
    Wipe up to *amount* of debt across loans in collection order.

    Loans brought to zero are removed. Returns the amount discharged.
    """
    remaining = amount
    for loan in list(state.loans):
        if remaining <= 0:
            break
        wipe = min(loan.remaining_balance, remaining)
        loan.remaining_balance -= wipe
        remaining -= wipe
        if loan.remaining_balance <= _EPS:
            loan.remaining_balance = 0.0
            state.remove_loan(loan)
    return amount - max(0.0, remaining)


def restructure_loans(state: PlayerState, months: int) -> None:
    """Re-amortise every remaining loan over *months* from today."""
    for loan in state.loans:
        loan.monthly_payment = calculate_monthly_payment(
            loan.remaining_balance, loan.annual_interest_rate, months
        )
        loan.maturity_date = add_months(state.current_date, months)
        loan.is_delinquent = False
        loan.days_delinquent = 0
