"""Event (turn stage) base class definition."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from finlife.simulation import Simulation


def _camel_to_snake(name: str) -> str:
    """Convert CamelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


@dataclass(slots=True)
class Event(ABC):
    """
    Base class for every named stage of a turn.

    An Event wraps one piece of turn logic (accrue interest, collect
    salary, evaluate crisis status, ...) and mutates the simulation's
    player state in place. Events are executed by a Pipeline in the exact
    order listed in the pipeline configuration.

    Notes
    -----
    Events are registered automatically via __init_subclass__.
    """

    name: ClassVar[str] = ""

    def __init_subclass__(cls, name: str = "", **kwargs: Any) -> None:
        """
        Auto-register Event subclasses in the global registry.

        Parameters
        ----------
        name : str, optional
            Custom name for the event.
            If not provided, uses the class name converted to snake_case.
        **kwargs
            Additional keyword arguments passed to parent __init_subclass__.
        """
        super(Event, cls).__init_subclass__(**kwargs)

        # @dataclass(slots=True) builds a new class and re-enters this hook
        # without the custom name, so an existing name is preserved.
        if name != "":
            cls.name = name
        elif cls.name == "":
            cls.name = _camel_to_snake(cls.__name__)

        from finlife.core.registry import _EVENT_REGISTRY

        _EVENT_REGISTRY[cls.name] = cls

    def get_logger(self) -> logging.Logger:
        """
        Get logger for this event with per-event log level applied.

        Returns
        -------
        logging.Logger
            Logger named ``finlife.events.{event_name}``.

        Notes
        -----
        Per-event log levels can be configured via defaults.yml or kwargs:

        logging:
          events:
            evaluate_crisis: DEBUG
        """
        return logging.getLogger(f"finlife.events.{self.name}")

    @abstractmethod
    def execute(self, sim: Simulation) -> None:
        """
        Execute the stage's logic.

        Parameters
        ----------
        sim : Simulation
            The simulation holding player state, config, catalog and rng.
        """

    def __repr__(self) -> str:
        """Provide informative repr."""
        return f"{self.__class__.__name__}(name={self.name!r})"
