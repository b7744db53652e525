"""
Player-initiated operations.

Every action validates its preconditions against the current state
before touching it. A rejected action returns :class:`Failure` and
leaves the state exactly as it was; an accepted one mutates the state
and returns :class:`Success`, optionally carrying an operation-specific
value. Actions never raise for a rejected request.

Examples
--------
>>> result = buy_investment(state, catalog, "VTSAX", 1)
>>> if result.ok:
...     print(result.value.symbol)
... else:
...     print(result.message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from finlife import logging
from finlife.calendar import calculate_turn_info
from finlife.catalogs import Catalog
from finlife.finance import EarlyPayment, pay_early_on_loan
from finlife.state import (
    CurrentHousing,
    CurrentVehicle,
    DelayedImpact,
    Impact,
    Investment,
    PlayerState,
    ScheduledEffect,
)
from finlife.systems.assets import (
    housing_cost,
    housing_sale_value,
    sell_current_housing,
    sell_current_vehicle,
    vehicle_sale_value,
)
from finlife.systems.crisis import BANKRUPTCY_TERMS, apply_bankruptcy
from finlife.systems.loans import originate_loan
from finlife.systems.scheduled import DELAYED_METRICS
from finlife.typing import Rng

log = logging.getLogger(__name__)

PaymentMethod = Literal["cash", "loan"]
DelayedTrigger = Literal["next_week", "next_month"]

TRIGGER_OFFSETS: dict[str, int] = {"next_week": 1, "next_month": 4}

_EPS = 1e-9


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class Success:
    """Accepted action. ``value`` carries the operation's payload."""

    message: str
    value: Any = None
    ok: Literal[True] = True


@dataclass(slots=True, frozen=True)
class Failure:
    """Rejected action; the state was not modified."""

    message: str
    ok: Literal[False] = False


ActionResult = Union[Success, Failure]


@dataclass(slots=True, frozen=True)
class Sale:
    proceeds: float
    gain_loss: float


@dataclass(slots=True, frozen=True)
class Toast:
    """Short summary of a decision's immediate effects."""

    kind: Literal["success", "neutral"]
    message: str
    duration: int = 3000


@dataclass(slots=True, frozen=True)
class PlayerDecision:
    """
    A choice made by the player.

    ``immediate`` is applied at once; ``delayed`` is scheduled for the
    turn selected by ``delayed_trigger``.
    """

    action_id: str
    immediate: Impact = field(default_factory=Impact)
    delayed: DelayedImpact | None = None
    delayed_trigger: DelayedTrigger | None = None


def _apply_impact(state: PlayerState, impact: Impact, title: str) -> None:
    if impact.balance:
        state.balance_debit += impact.balance
        state.record_transaction(title, impact.balance, "Decisions")
    if impact.happiness:
        state.adjust_happiness(impact.happiness)
    if impact.stress:
        state.adjust_stress(impact.stress)
    if impact.income:
        state.income = max(0.0, state.income + impact.income)


# ---------------------------------------------------------------------------
# Career
# ---------------------------------------------------------------------------
def apply_for_job(
    state: PlayerState,
    catalog: Catalog,
    rng: Rng,
    job_id: str,
    *,
    max_stress: float = 80.0,
) -> ActionResult:
    """
    Apply for a listed job.

    Rejected when stress is above *max_stress*, when the credit score or
    housing tier is below the listing's requirement, or when the roll
    against the listing's success chance fails. A hire replaces the
    income; tenure resets only if the title changes.
    """
    job = catalog.find_job(job_id)
    if job is None:
        return Failure(f"Job '{job_id}' not found")
    if state.stress > max_stress:
        return Failure(
            f"Too stressed to apply ({state.stress:.0f}/100). "
            f"Stress must be {max_stress:.0f} or lower."
        )
    if state.credit_score < job.required_credit_score:
        return Failure(
            f"Credit score too low ({state.credit_score:.0f}). "
            f"Need {job.required_credit_score:.0f}+"
        )
    if state.current_housing.tier < job.required_housing_tier:
        return Failure(f"Upgrade housing to Tier {job.required_housing_tier} first")

    roll = float(rng.random()) * 100
    if roll >= job.success_chance:
        return Failure("Application rejected. Better luck next time!")

    metrics = state.job_metrics
    if metrics.current_job_title != job.title:
        metrics.months_at_current_job = 0
    metrics.current_job_title = job.title
    metrics.job_id = job.id
    metrics.job_difficulty = job.difficulty
    metrics.promotion_eligibility = 0.0
    metrics.risk_of_layoff = 5.0
    state.income = job.salary

    state.add_event(
        "career",
        "New Job",
        f"You joined {job.company} as {job.title} at ${job.salary:,.0f}/mo.",
    )
    log.info(f"Hired as {job.title} ({job.id})")
    return Success(f"Congratulations! You're now a {job.title}", value=job)


# ---------------------------------------------------------------------------
# Investments
# ---------------------------------------------------------------------------
def buy_investment(
    state: PlayerState, catalog: Catalog, symbol: str, shares: float
) -> ActionResult:
    """
    Buy *shares* of a listed security at its catalog price.

    Savings are drained first, checking covers the rest. Every purchase
    opens a new holding. High-risk buys add stress and prospects;
    low-risk buys relax the player a little.
    """
    item = catalog.find_security(symbol)
    if item is None:
        return Failure(f"Security '{symbol}' not found")
    if shares <= 0:
        return Failure("Share count must be positive")

    cost = item.share_price * shares
    available = state.balance_virtual + state.balance_debit
    if cost > available:
        return Failure(f"Insufficient funds. Need ${cost:,.2f}, have ${available:,.2f}")

    from_savings = min(max(0.0, state.balance_virtual), cost)
    state.balance_virtual -= from_savings
    state.balance_debit -= cost - from_savings

    investment = Investment(
        id=state.new_id("inv"),
        symbol=item.symbol,
        name=item.name,
        type=item.type,
        share_price=item.share_price,
        shares_owned=shares,
        total_value=cost,
        purchase_price=item.share_price,
        purchase_date=state.current_date,
        last_price_update=state.current_date,
        volatility=item.volatility,
        risk_level=item.risk_level,
        expected_return=item.expected_return,
        dividend_yield=item.dividend_yield,
    )
    state.investments.append(investment)
    state.record_transaction(f"Buy {item.symbol}", -cost, "Investments", "transfer")

    if item.risk_level == "high":
        state.adjust_stress(10)
        state.adjust_prospects(5)
    elif item.risk_level == "low":
        state.adjust_stress(-3)
        state.adjust_happiness(2)

    return Success(f"Purchased {shares:g} shares of {item.name}", value=investment)


def sell_investment(
    state: PlayerState, investment_id: str, shares: float
) -> ActionResult:
    """
    Sell *shares* of a holding at its current price into checking.

    A holding sold down to zero shares is removed. A gain lifts
    happiness; a loss (or break-even) adds stress.
    """
    inv = state.find_investment(investment_id)
    if inv is None:
        return Failure(f"Investment '{investment_id}' not found")
    if shares <= 0:
        return Failure("Share count must be positive")
    if shares > inv.shares_owned:
        return Failure("Cannot sell more shares than owned")

    proceeds = inv.share_price * shares
    gain_loss = proceeds - inv.purchase_price * shares

    remaining = inv.shares_owned - shares
    if remaining <= _EPS:
        state.investments.remove(inv)
    else:
        inv.shares_owned = remaining
        inv.revalue(inv.share_price)

    state.balance_debit += proceeds
    state.record_transaction(f"Sell {inv.symbol}", proceeds, "Investments", "transfer")

    if gain_loss > 0:
        state.adjust_happiness(5)
        state.adjust_stress(-3)
    else:
        state.adjust_happiness(-5)
        state.adjust_stress(5)

    label = "Gain" if gain_loss > 0 else "Loss"
    return Success(
        f"Sold {shares:g} shares for ${proceeds:,.2f}. {label}: ${abs(gain_loss):,.2f}",
        value=Sale(proceeds=proceeds, gain_loss=gain_loss),
    )


# ---------------------------------------------------------------------------
# Housing and vehicles
# ---------------------------------------------------------------------------
def upgrade_housing(
    state: PlayerState,
    catalog: Catalog,
    housing_id: str,
    *,
    down_payment_rate: float = 0.2,
    mortgage_months: int = 360,
) -> ActionResult:
    """
    Move to another housing tier.

    An owned home is sold first and its mortgage settled from the
    proceeds. Buying requires the down payment from checking (counting
    those net proceeds) and originates a mortgage on the remainder.
    """
    tier = catalog.find_housing(housing_id)
    if tier is None:
        return Failure(f"Housing '{housing_id}' not found")
    if tier.id == state.current_housing.housing_id:
        return Failure(f"You already live in {tier.name}")

    proceeds = housing_sale_value(state, catalog)
    down_payment = (tier.purchase_price or 0.0) * down_payment_rate
    available = state.balance_debit + proceeds
    if tier.is_purchase and available < down_payment:
        return Failure(
            f"Insufficient funds for down payment. Need ${down_payment:,.2f}, "
            f"have ${available:,.2f}"
        )

    if state.current_housing.is_owned:
        sell_current_housing(state, catalog)

    if tier.is_purchase:
        price = tier.purchase_price or 0.0
        state.balance_debit -= down_payment
        state.record_transaction(
            f"Down payment: {tier.name}", -down_payment, "Housing", "transfer"
        )
        loan_id = None
        if price - down_payment > 0:
            loan = originate_loan(
                state,
                "asset_mortgage",
                price - down_payment,
                months=mortgage_months,
                collateral_id=tier.id,
            )
            loan_id = loan.id
        state.current_housing = CurrentHousing(
            housing_id=tier.id,
            tier=tier.tier,
            is_owned=True,
            purchase_date=state.current_date,
            loan_id=loan_id,
            current_resale_value=tier.resale_value or price,
        )
    else:
        state.current_housing = CurrentHousing(
            housing_id=tier.id, tier=tier.tier, is_owned=False
        )

    state.adjust_happiness(tier.happiness_bonus)
    state.adjust_stress(-tier.stress_reduction)
    state.expenses.rent = housing_cost(tier, state.current_housing)

    log.info(f"Moved to {tier.id}")
    return Success(f"Moved to {tier.name}!", value=state.current_housing)


def set_housing_rented_out(
    state: PlayerState, catalog: Catalog, rented_out: bool
) -> ActionResult:
    """Sublet (or stop subletting) an owned home whose tier allows it."""
    housing = state.current_housing
    if not housing.is_owned:
        return Failure("Only owned homes can be rented out")
    tier = catalog.find_housing(housing.housing_id)
    if tier is None or not tier.can_rent:
        return Failure("This home cannot be rented out")

    housing.is_rented_out = rented_out
    if rented_out:
        return Success(
            f"{tier.name} is now rented out for ${tier.rental_income:,.0f}/mo"
        )
    return Success(f"{tier.name} is no longer rented out")


def purchase_vehicle(
    state: PlayerState,
    catalog: Catalog,
    vehicle_id: str,
    method: PaymentMethod = "cash",
    *,
    down_payment_rate: float = 0.2,
    auto_loan_months: int = 60,
    min_credit: float = 550.0,
) -> ActionResult:
    """
    Buy a vehicle outright or with an auto loan.

    ``cash`` pays the full price from checking. ``loan`` needs a credit
    score of at least *min_credit*, pays the down payment and finances
    the rest with a secured personal loan. A current vehicle is traded
    in first: it is sold at its resale value and its loan settled.
    """
    tier = catalog.find_vehicle(vehicle_id)
    if tier is None:
        return Failure(f"Vehicle '{vehicle_id}' not found")
    if method not in ("cash", "loan"):
        return Failure(f"Unknown payment method '{method}'")
    current = state.current_vehicle
    if current is not None and current.vehicle_id == tier.id:
        return Failure(f"You already own a {tier.name}")

    available = state.balance_debit + vehicle_sale_value(state, catalog)
    if method == "cash":
        upfront = tier.purchase_price
        if available < upfront:
            return Failure(
                f"Insufficient funds. Need ${upfront:,.2f}, have ${available:,.2f}"
            )
    else:
        if state.credit_score < min_credit:
            return Failure(
                f"Credit score too low for auto loan ({state.credit_score:.0f}). "
                f"Need {min_credit:.0f}+"
            )
        upfront = tier.purchase_price * down_payment_rate
        if available < upfront:
            return Failure(
                f"Insufficient funds for down payment. Need ${upfront:,.2f}, "
                f"have ${available:,.2f}"
            )

    if state.current_vehicle is not None:
        sell_current_vehicle(state, catalog)

    state.balance_debit -= upfront
    state.record_transaction(
        f"Purchase: {tier.name}", -upfront, "Transport", "transfer"
    )

    loan = None
    if method == "loan" and tier.purchase_price - upfront > 0:
        loan = originate_loan(
            state,
            "personal_loan",
            tier.purchase_price - upfront,
            months=auto_loan_months,
            collateral_id=tier.id,
        )

    state.current_vehicle = CurrentVehicle(
        vehicle_id=tier.id,
        tier=tier.tier,
        is_financed=loan is not None,
        purchase_date=state.current_date,
        loan_id=loan.id if loan else None,
        current_resale_value=tier.resale_value,
    )
    state.adjust_happiness(tier.happiness_bonus)
    state.adjust_stress(-tier.stress_reduction)

    if loan is not None:
        return Success(f"Financed {tier.name} with auto loan!", value=loan)
    return Success(f"Purchased {tier.name}!")


# ---------------------------------------------------------------------------
# Loans
# ---------------------------------------------------------------------------
def make_early_payment(state: PlayerState, loan_id: str, amount: float) -> ActionResult:
    """
    Pay at least one instalment towards a loan ahead of schedule.

    The largest accepted amount is the payoff (balance plus one month of
    interest). Stress drops by the computed relief; a loan paid down to
    zero is closed.
    """
    loan = state.find_loan(loan_id)
    if loan is None:
        return Failure(f"Loan '{loan_id}' not found")

    payoff = loan.remaining_balance * (1 + loan.annual_interest_rate / 12)
    minimum = min(loan.monthly_payment, payoff)
    if amount < minimum:
        return Failure(
            f"Early payment must be at least the monthly payment of ${minimum:,.2f}"
        )
    if amount > payoff + 0.005:
        return Failure(f"Payment exceeds the payoff amount of ${payoff:,.2f}")
    if amount > state.balance_debit:
        return Failure(
            f"Insufficient funds. Need ${amount:,.2f}, have ${state.balance_debit:,.2f}"
        )

    result: EarlyPayment = pay_early_on_loan(loan, amount, state.current_date)
    principal_paid = loan.remaining_balance - result.new_balance

    state.balance_debit -= amount
    state.interest_paid_total += max(0.0, amount - principal_paid)
    state.record_transaction(f"Early payment: {loan.id}", -amount, "Loans", "transfer")
    loan.remaining_balance = result.new_balance
    state.adjust_stress(-result.stress_reduction)

    if loan.remaining_balance <= 0.005:
        loan.remaining_balance = 0.0
        state.remove_loan(loan)
        return Success(f"Loan {loan.id} paid off!", value=result)
    return Success(
        f"Paid ${amount:,.2f}. About {result.months_saved} month(s) and "
        f"${result.interest_saved:,.2f} in interest saved.",
        value=result,
    )


def execute_bankruptcy(state: PlayerState, option: str) -> ActionResult:
    """
    Exercise one of the bankruptcy options while in a financial crisis.

    ``"none"`` declines a pending offer without other effects.
    """
    in_crisis = (
        state.red_zone_start_date is not None
        or state.pending_bankruptcy_event_id is not None
    )
    if option == "none":
        pending = state.find_event(state.pending_bankruptcy_event_id)
        if pending is None:
            return Failure("No bankruptcy offer to decline")
        pending.is_read = True
        state.pending_bankruptcy_event_id = None
        return Success("Bankruptcy protection declined")
    if option not in BANKRUPTCY_TERMS:
        return Failure(f"Unknown bankruptcy option '{option}'")
    if not in_crisis:
        return Failure(
            "Bankruptcy protection is only available during a financial crisis"
        )

    discharged = apply_bankruptcy(state, option)  # type: ignore[arg-type]
    title = BANKRUPTCY_TERMS[option].title
    return Success(f"{title}: ${discharged:,.2f} of debt discharged", value=discharged)


# ---------------------------------------------------------------------------
# Decisions and notifications
# ---------------------------------------------------------------------------
def execute_player_decision(
    state: PlayerState, decision: PlayerDecision
) -> ActionResult:
    """
    Apply a decision's immediate impact and schedule its delayed one.

    The delayed impact fires on the current turn plus one
    (``next_week``) or plus four (``next_month``). The result carries a
    :class:`Toast` summarising the immediate changes.
    """
    if decision.delayed is not None:
        if decision.delayed_trigger not in TRIGGER_OFFSETS:
            return Failure(f"Unknown delayed trigger '{decision.delayed_trigger}'")
        unknown = set(decision.delayed.metrics) - DELAYED_METRICS
        if unknown:
            return Failure(f"Unknown delayed metric(s): {sorted(unknown)}")

    immediate = decision.immediate
    _apply_impact(state, immediate, f"Decision: {decision.action_id}")

    if decision.delayed is not None and decision.delayed_trigger is not None:
        turn = calculate_turn_info(state.current_date, state.start_date).turn_number
        state.scheduled_effects.append(
            ScheduledEffect(
                id=state.new_id("eff"),
                description=f"Effect from {decision.action_id}",
                trigger_turn=turn + TRIGGER_OFFSETS[decision.delayed_trigger],
                triggered_by=decision.action_id,
                impact=decision.delayed,
            )
        )

    parts = []
    if immediate.happiness:
        parts.append(f"{immediate.happiness:+g} Happiness")
    if immediate.stress:
        parts.append(f"{immediate.stress:+g} Stress")
    if immediate.balance > 0:
        parts.append(f"+${immediate.balance:g}")
    elif immediate.balance < 0:
        parts.append(f"-${abs(immediate.balance):g}")

    kind: Literal["success", "neutral"] = (
        "success" if immediate.happiness > 0 or immediate.stress < 0 else "neutral"
    )
    toast = Toast(kind=kind, message=" • ".join(parts))
    return Success(toast.message, value=toast)


def resolve_event_action(
    state: PlayerState, event_id: str, action_id: str
) -> ActionResult:
    """
    Choose one of an event's actions and apply its impact.

    The event is marked read and cannot be resolved again. Actions of a
    bankruptcy offer execute the matching bankruptcy option.
    """
    ev = state.find_event(event_id)
    if ev is None:
        return Failure(f"Event '{event_id}' not found")
    if ev.is_read:
        return Failure("Event already resolved")
    action = ev.find_action(action_id)
    if action is None:
        return Failure(f"Action '{action_id}' not available for this event")

    if ev.id == state.pending_bankruptcy_event_id:
        return execute_bankruptcy(state, action.id)

    _apply_impact(state, action.impact, action.label)
    ev.is_read = True
    return Success(action.label, value=action.impact)


def mark_event_read(state: PlayerState, event_id: str) -> ActionResult:
    ev = state.find_event(event_id)
    if ev is None:
        return Failure(f"Event '{event_id}' not found")
    ev.is_read = True
    return Success("Marked as read")
