# src/finlife/simulation.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping

# noinspection PyPackageRequirements
import yaml

# noinspection PyPackageRequirements
from numpy.random import Generator, default_rng

import finlife.events  # noqa: F401 - needed to register events
from finlife import actions
from finlife.actions import ActionResult, Failure, PlayerDecision
from finlife.calendar import GameTurn, advance, calculate_turn_info
from finlife.catalogs import Catalog
from finlife.config import Config, ConfigValidator
from finlife.core.default_pipeline import create_default_pipelines, load_pipelines
from finlife.core.event import Event
from finlife.core.pipeline import Pipeline
from finlife.finance import calculate_net_worth
from finlife.logging import DEEP_DEBUG, getLogger
from finlife.persistence import StateStore
from finlife.state import GameEvent, PlayerState, Transaction, create_initial_player
from finlife.systems.cashflow import FinancialOverview, calculate_financial_overview
from finlife.systems.crisis import CrisisLevel

__all__ = ["Simulation", "TurnReport"]

log = getLogger(__name__)


# helpers
# ---------------------------------------------------------------------------
def _read_yaml(obj: str | Path | Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a plain dict – {} if *obj* is None."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    p = Path(obj)
    with p.open("rt", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"config root must be mapping, got {type(data)!r}")
    return dict(data)


def _package_defaults() -> Dict[str, Any]:
    """Load finlife/defaults.yml"""
    txt = resources.files("finlife").joinpath("defaults.yml").read_text()
    return yaml.safe_load(txt) or {}


def _level(name: str) -> int:
    import logging

    name = name.upper()
    return DEEP_DEBUG if name == "DEEP_DEBUG" else int(getattr(logging, name))


@dataclass(slots=True, frozen=True)
class TurnReport:
    """What one call to :meth:`Simulation.next_turn` produced."""

    turn: GameTurn
    events: list[GameEvent]
    transactions: list[Transaction]
    crisis_level: CrisisLevel | None = None

    @property
    def net_cash_flow(self) -> float:
        """Sum of this turn's transactions, transfers excluded."""
        return sum(tx.amount for tx in self.transactions if tx.kind != "transfer")


# Simulation
# ---------------------------------------------------------------------
@dataclass(slots=True)
class Simulation:
    """
    Facade that drives one player's life turn by turn.

    One call to `next_turn` advances the clock by a week, runs the
    ``weekly`` pipeline and, on monthly-close turns, the ``monthly_close``
    pipeline. Player actions are exposed as methods that delegate to
    :mod:`finlife.actions`.
    """

    # core state
    state: PlayerState
    rng: Generator

    # configuration
    config: Config
    catalog: Catalog

    # turn pipelines, keyed "weekly" / "monthly_close"
    pipelines: dict[str, Pipeline]

    # persistence collaborator
    store: StateStore | None = None

    # position of the current turn
    turn: GameTurn = field(init=False)
    crisis_level: CrisisLevel | None = None

    def __post_init__(self) -> None:
        self.turn = calculate_turn_info(self.state.current_date, self.state.start_date)

    # Constructor
    # ---------------------------------------------------------------------
    @classmethod
    def init(
        cls,
        config: str | Path | Mapping[str, Any] | None = None,
        *,
        state: PlayerState | None = None,
        store: StateStore | None = None,
        **overrides: Any,  # anything here wins last
    ) -> "Simulation":
        """
        Build a Simulation.

        Order of precedence (later overrides earlier):

            1. package defaults  (finlife/defaults.yml)
            2. *config*  (Path / str / Mapping / None)
            3. explicit keyword arguments (**overrides)

        The player is *state* when given, otherwise whatever *store*
        loads, otherwise a fresh player built from the configuration.
        """
        # 1 + 2 + 3 → one merged dict
        cfg_dict: Dict[str, Any] = _package_defaults()
        cfg_dict.update(_read_yaml(config))
        cfg_dict.update(overrides)

        ConfigValidator.validate_config(cfg_dict)

        pipeline_path = cfg_dict.get("pipeline_path")
        if pipeline_path is not None:
            ConfigValidator.validate_pipeline_path(pipeline_path)
            ConfigValidator.validate_pipeline_yaml(pipeline_path)

        # Random-seed handling
        seed_val = cfg_dict.pop("seed", None)
        rng: Generator = (
            seed_val if isinstance(seed_val, Generator) else default_rng(seed_val)
        )

        if isinstance(cfg_dict.get("start_date"), str):
            cfg_dict["start_date"] = date.fromisoformat(cfg_dict["start_date"])
        cfg = Config.from_dict(cfg_dict)

        catalog = Catalog.load(cfg_dict.get("catalog_path"))
        pipelines = (
            load_pipelines(pipeline_path)
            if pipeline_path is not None
            else create_default_pipelines()
        )

        if "logging" in cfg_dict:
            cls._configure_logging(cfg_dict["logging"])

        if state is None and store is not None:
            state = store.load()
        if state is None:
            housing = catalog.find_housing(cfg.starting_housing)
            if housing is None:
                raise ValueError(
                    f"Config parameter 'starting_housing' references unknown "
                    f"housing '{cfg.starting_housing}'"
                )
            if housing.is_purchase:
                raise ValueError(
                    f"Config parameter 'starting_housing' must be a rental, "
                    f"got '{cfg.starting_housing}'"
                )
            state = create_initial_player(cfg, housing.tier)
            log.info(f"New player '{state.name}' starting {state.start_date}")
        else:
            log.info(f"Resuming player '{state.name}' at {state.current_date}")

        return cls(
            state=state,
            rng=rng,
            config=cfg,
            catalog=catalog,
            pipelines=pipelines,
            store=store,
        )

    @staticmethod
    def _configure_logging(log_config: Dict[str, Any]) -> None:
        """
        Configure logging levels for finlife loggers.

        Parameters
        ----------
        log_config : dict
            Logging configuration with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - events: dict[str, str] (per-stage overrides)
        """
        import logging

        default_level = log_config.get("default_level", "INFO")
        logging.getLogger("finlife").setLevel(_level(default_level))

        event_levels = log_config.get("events") or {}
        for event_name, level in event_levels.items():
            logger_name = f"finlife.events.{event_name}"
            logging.getLogger(logger_name).setLevel(_level(level))

    # public API
    # ---------------------------------------------------------------------
    def next_turn(self) -> TurnReport:
        """
        Advance the player's life by one week.

        After game over the clock still moves but no stage runs.

        Returns
        -------
        TurnReport
            The turn position, the events and transactions created during
            the turn and, on a monthly close, the crisis classification.
        """
        state = self.state
        n_events = len(state.game_events)
        n_transactions = len(state.transactions)

        state.current_date = advance(state.current_date)
        self.turn = calculate_turn_info(state.current_date, state.start_date)
        self.crisis_level = None

        if state.game_status == "game_over":
            log.info(f"Turn {self.turn.turn_number}: game over, clock only")
        else:
            log.info(
                f"--- Turn {self.turn.turn_number} "
                f"(week {self.turn.week_number}, {self.turn.turn_type}) ---"
            )
            self.pipelines["weekly"].execute(self)
            if self.turn.is_monthly_close:
                self.pipelines["monthly_close"].execute(self)
            if state.game_status == "game_over":
                log.warning("GAME OVER")

        report = TurnReport(
            turn=self.turn,
            events=state.game_events[n_events:],
            transactions=state.transactions[n_transactions:],
            crisis_level=self.crisis_level,
        )
        if self.store is not None:
            self.store.save(state)
        return report

    def run(self, n_turns: int) -> list[TurnReport]:
        """Call :meth:`next_turn` *n_turns* times."""
        return [self.next_turn() for _ in range(int(n_turns))]

    @property
    def net_worth(self) -> float:
        return calculate_net_worth(self.state)

    @property
    def is_game_over(self) -> bool:
        return self.state.game_status == "game_over"

    def financial_overview(self) -> FinancialOverview:
        return calculate_financial_overview(self.state)

    def get_event(self, name: str) -> Event:
        """
        Get a stage instance from either pipeline by name.

        Raises
        ------
        KeyError
            If no pipeline holds a stage called *name*.

        Examples
        --------
        >>> sim = Simulation.init()
        >>> stage = sim.get_event("service_loans")
        """
        for pipeline in self.pipelines.values():
            for event in pipeline.events:
                if event.name == name:
                    return event
        available = [n for p in self.pipelines.values() for n in p.names]
        raise KeyError(f"Event '{name}' not found in pipelines. Available: {available}")

    # player actions
    # ---------------------------------------------------------------------
    def _finish(self, result: ActionResult) -> ActionResult:
        if result.ok and self.store is not None:
            self.store.save(self.state)
        return result

    def _game_over(self) -> Failure | None:
        if self.is_game_over:
            return Failure("Game over. No further actions are possible.")
        return None

    def apply_for_job(self, job_id: str) -> ActionResult:
        return self._game_over() or self._finish(
            actions.apply_for_job(
                self.state,
                self.catalog,
                self.rng,
                job_id,
                max_stress=self.config.max_job_stress,
            )
        )

    def buy_investment(self, symbol: str, shares: float) -> ActionResult:
        return self._game_over() or self._finish(
            actions.buy_investment(self.state, self.catalog, symbol, shares)
        )

    def sell_investment(self, investment_id: str, shares: float) -> ActionResult:
        return self._game_over() or self._finish(
            actions.sell_investment(self.state, investment_id, shares)
        )

    def upgrade_housing(self, housing_id: str) -> ActionResult:
        return self._game_over() or self._finish(
            actions.upgrade_housing(
                self.state,
                self.catalog,
                housing_id,
                down_payment_rate=self.config.down_payment_rate,
                mortgage_months=self.config.mortgage_months,
            )
        )

    def set_housing_rented_out(self, rented_out: bool) -> ActionResult:
        return self._game_over() or self._finish(
            actions.set_housing_rented_out(self.state, self.catalog, rented_out)
        )

    def purchase_vehicle(
        self, vehicle_id: str, method: actions.PaymentMethod = "cash"
    ) -> ActionResult:
        return self._game_over() or self._finish(
            actions.purchase_vehicle(
                self.state,
                self.catalog,
                vehicle_id,
                method,
                down_payment_rate=self.config.down_payment_rate,
                auto_loan_months=self.config.auto_loan_months,
                min_credit=self.config.auto_loan_min_credit,
            )
        )

    def make_early_payment(self, loan_id: str, amount: float) -> ActionResult:
        return self._game_over() or self._finish(
            actions.make_early_payment(self.state, loan_id, amount)
        )

    def execute_player_decision(self, decision: PlayerDecision) -> ActionResult:
        return self._game_over() or self._finish(
            actions.execute_player_decision(self.state, decision)
        )

    def execute_bankruptcy(self, option: str) -> ActionResult:
        return self._game_over() or self._finish(
            actions.execute_bankruptcy(self.state, option)
        )

    def resolve_event_action(self, event_id: str, action_id: str) -> ActionResult:
        return self._game_over() or self._finish(
            actions.resolve_event_action(self.state, event_id, action_id)
        )

    def mark_event_read(self, event_id: str) -> ActionResult:
        return self._finish(actions.mark_event_read(self.state, event_id))
