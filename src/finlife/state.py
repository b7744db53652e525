"""
Player state and the entities it owns.

The whole simulation operates on a single :class:`PlayerState` value that
is passed explicitly into every system function. Nothing in the engine
keeps a module-level reference to it.

Entities (loans, holdings, events, ...) are mutable dataclasses owned
exclusively by the state. Catalog entries, by contrast, are immutable and
live in :mod:`finlife.catalogs`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from finlife.config import Config

LoanType = Literal["asset_mortgage", "personal_loan", "payday_loan"]
AssetType = Literal["stock", "etf", "bond", "crypto", "real_estate"]
RiskLevel = Literal["low", "medium", "high"]
EventType = Literal["career", "financial", "social", "crisis", "opportunity", "system"]
GameStatus = Literal["active", "red_zone", "game_over"]
TransactionKind = Literal["income", "expense", "transfer"]

DEFAULT_NPCS: tuple[tuple[str, str, float], ...] = (
    ("karen", "Karen (Boss)", 50.0),
    ("sam", "Sam (Friend)", 75.0),
    ("emma", "Emma (Rival)", 25.0),
)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into ``[low, high]``."""
    return max(low, min(high, value))


@dataclass(slots=True)
class Expenses:
    """Recurring monthly outflows."""

    rent: float
    groceries: float
    loan_payment: float
    utilities: float

    @property
    def total(self) -> float:
        return self.rent + self.groceries + self.loan_payment + self.utilities


@dataclass(slots=True)
class Loan:
    """
    A fixed-rate instalment loan.

    ``remaining_balance`` only decreases, except when late fees are added.
    Secured loans carry the id of their collateral (a housing or vehicle
    catalog id) in ``collateral_id``.
    """

    id: str
    type: LoanType
    original_amount: float
    remaining_balance: float
    annual_interest_rate: float
    monthly_payment: float
    start_date: date
    maturity_date: date
    collateral_id: str | None = None
    is_delinquent: bool = False
    days_delinquent: int = 0


@dataclass(slots=True)
class Investment:
    """A holding of one security, bought in a single purchase."""

    id: str
    symbol: str
    name: str
    type: AssetType
    share_price: float
    shares_owned: float
    total_value: float
    purchase_price: float
    purchase_date: date
    last_price_update: date
    volatility: float
    risk_level: RiskLevel = "medium"
    expected_return: float = 0.0
    dividend_yield: float | None = None

    def revalue(self, share_price: float) -> None:
        """Set a new share price and keep ``total_value`` consistent."""
        self.share_price = share_price
        self.total_value = share_price * self.shares_owned


@dataclass(slots=True)
class JobMetrics:
    """Performance tracking for the current job."""

    current_job_title: str
    current_performance: float = 75.0
    monthly_performance_history: list[float] = field(default_factory=list)
    months_at_current_job: int = 0
    promotion_eligibility: float = 0.0
    risk_of_layoff: float = 10.0
    last_review_date: date | None = None
    job_id: str | None = None
    job_difficulty: float = 50.0


@dataclass(slots=True)
class NPCRelationship:
    npc_id: str
    name: str
    reputation: float
    last_interaction: date
    total_interactions: int = 0


@dataclass(slots=True)
class Impact:
    """Delta applied to the player by an event or one of its actions."""

    balance: float = 0.0
    stress: float = 0.0
    happiness: float = 0.0
    income: float = 0.0

    def is_empty(self) -> bool:
        return not (self.balance or self.stress or self.happiness or self.income)


@dataclass(slots=True)
class EventAction:
    id: str
    label: str
    description: str = ""
    impact: Impact = field(default_factory=Impact)


@dataclass(slots=True)
class GameEvent:
    """
    Notification appended to the player's event log.

    ``impact`` records what was applied when the event was created; it is
    informational. Only ``is_read`` changes after creation.
    """

    id: str
    event_type: EventType
    title: str
    message: str
    date: date
    is_read: bool = False
    actions: list[EventAction] = field(default_factory=list)
    impact: Impact | None = None

    def find_action(self, action_id: str) -> EventAction | None:
        return next((a for a in self.actions if a.id == action_id), None)


@dataclass(slots=True)
class ReputationChange:
    npc_id: str
    change: float


@dataclass(slots=True)
class DelayedImpact:
    """
    Deferred consequence of a player decision.

    ``metrics`` keys are ``income`` (replaces the salary) and ``prospects``,
    ``happiness``, ``stress`` or ``balance`` (added to the current value).
    """

    reputation: list[ReputationChange] = field(default_factory=list)
    metrics: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class ScheduledEffect:
    id: str
    description: str
    trigger_turn: int
    triggered_by: str
    impact: DelayedImpact


@dataclass(slots=True)
class CurrentHousing:
    housing_id: str
    tier: int
    is_owned: bool
    purchase_date: date | None = None
    loan_id: str | None = None
    current_resale_value: float | None = None
    is_rented_out: bool = False


@dataclass(slots=True)
class CurrentVehicle:
    vehicle_id: str
    tier: int
    is_financed: bool
    purchase_date: date
    loan_id: str | None = None
    current_resale_value: float | None = None
    mileage: float = 0.0


@dataclass(slots=True)
class Transaction:
    """One cash movement; ``amount`` is signed (negative for outflows)."""

    id: str
    date: date
    title: str
    amount: float
    kind: TransactionKind
    category: str


@dataclass(slots=True)
class PlayerState:
    """
    Root aggregate of the simulation.

    Wellbeing metrics live in ``[0, 100]`` and the credit score in
    ``[300, 850]``; use the ``adjust_*`` helpers to keep them there.
    """

    id: str
    name: str
    created_at: date
    start_date: date
    current_date: date

    # cash positions and recurring flows
    balance_debit: float
    balance_virtual: float
    income: float
    expenses: Expenses

    # wellbeing
    happiness: float
    stress: float
    prospects: float

    # credit
    credit_score: float
    debt_to_income_ratio: float
    total_monthly_debt_payment: float

    job_metrics: JobMetrics
    current_housing: CurrentHousing
    current_vehicle: CurrentVehicle | None = None

    interest_paid_total: float = 0.0
    education_level: int = 0

    loans: list[Loan] = field(default_factory=list)
    investments: list[Investment] = field(default_factory=list)
    npc_relationships: list[NPCRelationship] = field(default_factory=list)
    game_events: list[GameEvent] = field(default_factory=list)
    scheduled_effects: list[ScheduledEffect] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    happiness_history: list[float] = field(default_factory=list)
    stress_history: list[float] = field(default_factory=list)
    balance_history: list[float] = field(default_factory=list)

    game_status: GameStatus = "active"
    negative_net_worth_months: int = 0
    red_zone_start_date: date | None = None
    bankruptcy_attempts: int = 0
    pending_bankruptcy_event_id: str | None = None

    id_counter: int = 0

    # identifiers
    # ---------------------------------------------------------------------
    def new_id(self, prefix: str) -> str:
        """Return a fresh, deterministic entity id such as ``loan-0007``."""
        self.id_counter += 1
        return f"{prefix}-{self.id_counter:04d}"

    # bounded metrics
    # ---------------------------------------------------------------------
    def adjust_happiness(self, delta: float) -> None:
        self.happiness = clamp(self.happiness + delta, 0.0, 100.0)

    def adjust_stress(self, delta: float) -> None:
        self.stress = clamp(self.stress + delta, 0.0, 100.0)

    def adjust_prospects(self, delta: float) -> None:
        self.prospects = clamp(self.prospects + delta, 0.0, 100.0)

    def adjust_credit_score(self, delta: float) -> None:
        self.credit_score = clamp(self.credit_score + delta, 300.0, 850.0)

    # logs
    # ---------------------------------------------------------------------
    def add_event(
        self,
        event_type: EventType,
        title: str,
        message: str,
        *,
        actions: list[EventAction] | None = None,
        impact: Impact | None = None,
    ) -> GameEvent:
        """Append a GameEvent dated today and return it."""
        ev = GameEvent(
            id=self.new_id("evt"),
            event_type=event_type,
            title=title,
            message=message,
            date=self.current_date,
            actions=actions or [],
            impact=impact,
        )
        self.game_events.append(ev)
        return ev

    def record_transaction(
        self,
        title: str,
        amount: float,
        category: str,
        kind: TransactionKind | None = None,
    ) -> Transaction:
        """Append a ledger entry; ``kind`` defaults from the sign of *amount*."""
        if kind is None:
            kind = "income" if amount >= 0 else "expense"
        tx = Transaction(
            id=self.new_id("tx"),
            date=self.current_date,
            title=title,
            amount=round(amount, 2),
            kind=kind,
            category=category,
        )
        self.transactions.append(tx)
        return tx

    # lookups
    # ---------------------------------------------------------------------
    def find_loan(self, loan_id: str | None) -> Loan | None:
        return next((loan for loan in self.loans if loan.id == loan_id), None)

    def find_investment(self, investment_id: str) -> Investment | None:
        return next((i for i in self.investments if i.id == investment_id), None)

    def find_npc(self, npc_id: str) -> NPCRelationship | None:
        return next((n for n in self.npc_relationships if n.npc_id == npc_id), None)

    def find_event(self, event_id: str | None) -> GameEvent | None:
        return next((e for e in self.game_events if e.id == event_id), None)

    # derived figures
    # ---------------------------------------------------------------------
    @property
    def portfolio_value(self) -> float:
        return sum(inv.total_value for inv in self.investments)

    @property
    def total_debt(self) -> float:
        return sum(loan.remaining_balance for loan in self.loans)

    @property
    def monthly_debt_payment(self) -> float:
        """Scheduled debt service charged at the monthly close."""
        return self.total_monthly_debt_payment or self.expenses.loan_payment

    def add_debt_payment(self, delta: float) -> None:
        """Shift the scheduled debt service and mirror it into expenses."""
        self.total_monthly_debt_payment = max(
            0.0, self.total_monthly_debt_payment + delta
        )
        self.expenses.loan_payment = self.total_monthly_debt_payment

    def remove_loan(self, loan: Loan) -> None:
        """Drop a loan and stop charging its instalment."""
        self.loans.remove(loan)
        self.add_debt_payment(-loan.monthly_payment)
        if self.current_housing.loan_id == loan.id:
            self.current_housing.loan_id = None
        if self.current_vehicle is not None and self.current_vehicle.loan_id == loan.id:
            self.current_vehicle.loan_id = None
            self.current_vehicle.is_financed = False


def create_initial_player(config: Config, housing_tier: int) -> PlayerState:
    """
    Build a fresh player from the starting values in *config*.

    Parameters
    ----------
    config : Config
        Validated simulation configuration.
    housing_tier : int
        Tier of the configured starting housing (looked up by the caller).
    """
    start = config.start_date
    debt_payment = config.loan_payment
    state = PlayerState(
        id="player-1",
        name=config.player_name,
        created_at=start,
        start_date=start,
        current_date=start,
        balance_debit=config.balance_debit,
        balance_virtual=config.balance_virtual,
        income=config.income,
        expenses=Expenses(
            rent=config.rent,
            groceries=config.groceries,
            loan_payment=debt_payment,
            utilities=config.utilities,
        ),
        happiness=config.happiness,
        stress=config.stress,
        prospects=config.prospects,
        credit_score=config.credit_score,
        debt_to_income_ratio=debt_payment / config.income if config.income else 0.0,
        total_monthly_debt_payment=debt_payment,
        education_level=config.education_level,
        job_metrics=JobMetrics(
            current_job_title=config.job_title,
            current_performance=75.0,
            monthly_performance_history=[75.0],
            months_at_current_job=3,
            risk_of_layoff=10.0,
        ),
        current_housing=CurrentHousing(
            housing_id=config.starting_housing,
            tier=housing_tier,
            is_owned=False,
        ),
        npc_relationships=[
            NPCRelationship(npc_id, name, reputation, last_interaction=start)
            for npc_id, name, reputation in DEFAULT_NPCS
        ],
        happiness_history=[config.happiness],
        stress_history=[config.stress],
        balance_history=[config.balance_debit],
    )
    return state
