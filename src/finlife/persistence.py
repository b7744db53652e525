"""
Saving and restoring a :class:`~finlife.state.PlayerState`.

The engine only needs something with ``load()`` and ``save(state)``
(:class:`StateStore`). :class:`JsonStateStore` is the bundled
implementation: one JSON document per player with ISO-8601 dates.

Loading is strict. A snapshot missing a field raises ``KeyError`` and a
malformed date raises ``ValueError``; nothing is silently defaulted.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Protocol

from finlife import logging
from finlife.state import (
    CurrentHousing,
    CurrentVehicle,
    DelayedImpact,
    EventAction,
    Expenses,
    GameEvent,
    Impact,
    Investment,
    JobMetrics,
    Loan,
    NPCRelationship,
    PlayerState,
    ReputationChange,
    ScheduledEffect,
    Transaction,
)

__all__ = ["JsonStateStore", "StateStore", "state_from_dict", "state_to_dict"]

log = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class StateStore(Protocol):
    """Persistence collaborator used by :class:`~finlife.simulation.Simulation`."""

    def load(self) -> PlayerState | None: ...

    def save(self, state: PlayerState) -> None: ...


# serialisation
# ---------------------------------------------------------------------------
def _encode(obj: Any) -> Any:
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {k: _encode(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_encode(v) for v in obj]
    return obj


def state_to_dict(state: PlayerState) -> dict[str, Any]:
    """Return a JSON-ready dict; dates become ISO-8601 strings."""
    return _encode(asdict(state))


def _date(raw: str) -> date:
    return date.fromisoformat(raw)


def _opt_date(raw: str | None) -> date | None:
    return None if raw is None else date.fromisoformat(raw)


def _impact(d: dict[str, Any]) -> Impact:
    return Impact(
        balance=d["balance"],
        stress=d["stress"],
        happiness=d["happiness"],
        income=d["income"],
    )


def _loan(d: dict[str, Any]) -> Loan:
    return Loan(
        **{
            **d,
            "start_date": _date(d["start_date"]),
            "maturity_date": _date(d["maturity_date"]),
        }
    )


def _investment(d: dict[str, Any]) -> Investment:
    return Investment(
        **{
            **d,
            "purchase_date": _date(d["purchase_date"]),
            "last_price_update": _date(d["last_price_update"]),
        }
    )


def _job_metrics(d: dict[str, Any]) -> JobMetrics:
    return JobMetrics(
        **{
            **d,
            "monthly_performance_history": list(d["monthly_performance_history"]),
            "last_review_date": _opt_date(d["last_review_date"]),
        }
    )


def _event(d: dict[str, Any]) -> GameEvent:
    return GameEvent(
        id=d["id"],
        event_type=d["event_type"],
        title=d["title"],
        message=d["message"],
        date=_date(d["date"]),
        is_read=d["is_read"],
        actions=[
            EventAction(
                id=a["id"],
                label=a["label"],
                description=a["description"],
                impact=_impact(a["impact"]),
            )
            for a in d["actions"]
        ],
        impact=None if d["impact"] is None else _impact(d["impact"]),
    )


def _scheduled(d: dict[str, Any]) -> ScheduledEffect:
    impact = d["impact"]
    return ScheduledEffect(
        id=d["id"],
        description=d["description"],
        trigger_turn=d["trigger_turn"],
        triggered_by=d["triggered_by"],
        impact=DelayedImpact(
            reputation=[ReputationChange(**r) for r in impact["reputation"]],
            metrics=dict(impact["metrics"]),
        ),
    )


def _housing(d: dict[str, Any]) -> CurrentHousing:
    return CurrentHousing(**{**d, "purchase_date": _opt_date(d["purchase_date"])})


def _vehicle(d: dict[str, Any] | None) -> CurrentVehicle | None:
    if d is None:
        return None
    return CurrentVehicle(**{**d, "purchase_date": _date(d["purchase_date"])})


def state_from_dict(data: dict[str, Any]) -> PlayerState:
    """
    Rebuild a PlayerState from :func:`state_to_dict` output.

    Raises
    ------
    KeyError
        If a required field is missing.
    ValueError
        If a date cannot be parsed.
    """
    return PlayerState(
        id=data["id"],
        name=data["name"],
        created_at=_date(data["created_at"]),
        start_date=_date(data["start_date"]),
        current_date=_date(data["current_date"]),
        balance_debit=data["balance_debit"],
        balance_virtual=data["balance_virtual"],
        income=data["income"],
        expenses=Expenses(**data["expenses"]),
        happiness=data["happiness"],
        stress=data["stress"],
        prospects=data["prospects"],
        credit_score=data["credit_score"],
        debt_to_income_ratio=data["debt_to_income_ratio"],
        total_monthly_debt_payment=data["total_monthly_debt_payment"],
        job_metrics=_job_metrics(data["job_metrics"]),
        current_housing=_housing(data["current_housing"]),
        current_vehicle=_vehicle(data["current_vehicle"]),
        interest_paid_total=data["interest_paid_total"],
        education_level=data["education_level"],
        loans=[_loan(d) for d in data["loans"]],
        investments=[_investment(d) for d in data["investments"]],
        npc_relationships=[
            NPCRelationship(**{**d, "last_interaction": _date(d["last_interaction"])})
            for d in data["npc_relationships"]
        ],
        game_events=[_event(d) for d in data["game_events"]],
        scheduled_effects=[_scheduled(d) for d in data["scheduled_effects"]],
        transactions=[
            Transaction(**{**d, "date": _date(d["date"])}) for d in data["transactions"]
        ],
        happiness_history=list(data["happiness_history"]),
        stress_history=list(data["stress_history"]),
        balance_history=list(data["balance_history"]),
        game_status=data["game_status"],
        negative_net_worth_months=data["negative_net_worth_months"],
        red_zone_start_date=_opt_date(data["red_zone_start_date"]),
        bankruptcy_attempts=data["bankruptcy_attempts"],
        pending_bankruptcy_event_id=data["pending_bankruptcy_event_id"],
        id_counter=data["id_counter"],
    )


# JSON store
# ---------------------------------------------------------------------------
class JsonStateStore:
    """
    Keep one player snapshot in a JSON file.

    Parameters
    ----------
    path : str or Path
        Snapshot file. Parent directories are created on save.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> PlayerState | None:
        """Return the stored state, or None when no snapshot exists yet."""
        if not self.path.exists():
            return None
        with self.path.open("rt", encoding="utf-8") as fh:
            payload = json.load(fh)
        if not isinstance(payload, dict) or "state" not in payload:
            raise ValueError(f"'{self.path}' is not a finlife snapshot")
        version = payload.get("version")
        if version != SNAPSHOT_VERSION:
            raise ValueError(
                f"Unsupported snapshot version {version!r} in '{self.path}' "
                f"(expected {SNAPSHOT_VERSION})"
            )
        return state_from_dict(payload["state"])

    def save(self, state: PlayerState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": SNAPSHOT_VERSION, "state": state_to_dict(state)}
        with self.path.open("wt", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        log.debug(f"Saved snapshot to {self.path}")

    def __repr__(self) -> str:
        return f"JsonStateStore(path={str(self.path)!r})"
