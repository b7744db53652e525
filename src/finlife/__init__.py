"""
finlife - turn-based personal-finance life simulation
=====================================================

The engine advances one player's financial life a week at a time. Every
fourth week closes a month: salary and bills are settled, loans are
serviced, the credit score and job performance are re-evaluated and the
player's crisis status is classified.

Quick Start
-----------
>>> import finlife as fl
>>> sim = fl.Simulation.init(seed=42)
>>> report = sim.next_turn()
>>> report.turn.turn_number
2

Custom configuration via kwargs or a YAML file:

>>> sim = fl.Simulation.init(config="my_life.yml", income=4500.0, seed=7)

Player actions return tagged results:

>>> result = sim.buy_investment("VTSAX", 2)
>>> if not result.ok:
...     print(result.message)

Key Concepts
------------
**PlayerState**
  A single mutable value holding balances, wellbeing, loans, holdings,
  events and history. Every system function receives it explicitly.

**Turn Pipelines**
  The ``weekly`` and ``monthly_close`` pipelines are ordered lists of
  named stages loaded from ``default_pipeline.yml``. Stages can be
  inserted, removed or replaced before running.

**Deterministic RNG**
  One ``numpy.random.Generator`` per simulation; a fixed seed reproduces
  a run exactly.

Notes
-----
- Time scale: 1 turn = 1 week, 13 accounting months per year
- Configuration precedence: defaults.yml → user config → kwargs
"""

from __future__ import annotations

__version__: str = "0.1.0"

from typing import TypeAlias

import numpy as np

Rng: TypeAlias = np.random.Generator

from . import logging  # noqa: E402 (circular‑safe)


def make_rng(seed: int | None = None) -> Rng:
    """
    Create a new random number generator.

    Parameters
    ----------
    seed : int | None
        Seed for reproducibility. If `None`, uses a random seed.

    Returns
    -------
    Rng
        A NumPy random number generator (np.random.Generator).
    """
    return np.random.default_rng(seed)


from .actions import (  # noqa: E402
    ActionResult,
    Failure,
    PlayerDecision,
    Success,
    Toast,
)
from .calendar import GameTurn, calculate_turn_info  # noqa: E402
from .catalogs import Catalog  # noqa: E402
from .config import Config  # noqa: E402
from .core import Event, Pipeline, event, get_event, list_events  # noqa: E402
from .finance import calculate_net_worth  # noqa: E402
from .persistence import JsonStateStore, StateStore  # noqa: E402
from .simulation import Simulation, TurnReport  # noqa: E402  (circular‑safe)
from .state import DelayedImpact, Impact, PlayerState  # noqa: E402

__all__ = [
    "Simulation",
    "TurnReport",
    "__version__",
    # State and results
    "PlayerState",
    "Impact",
    "DelayedImpact",
    "PlayerDecision",
    "ActionResult",
    "Success",
    "Failure",
    "Toast",
    "GameTurn",
    "calculate_turn_info",
    "calculate_net_worth",
    # Reference data and configuration
    "Catalog",
    "Config",
    # Pipeline extensibility
    "Event",
    "Pipeline",
    "event",
    "get_event",
    "list_events",
    # Persistence
    "StateStore",
    "JsonStateStore",
    # Utilities
    "Rng",
    "make_rng",
    "logging",
]
