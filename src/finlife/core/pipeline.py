"""Event Pipeline with explicit execution order."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from finlife.core.event import Event
from finlife.core.registry import get_event

if TYPE_CHECKING:
    from finlife.simulation import Simulation


@dataclass(slots=True)
class Pipeline:
    """
    Ordered list of named turn stages.

    A turn is driven by two pipelines: the ``weekly`` one runs on every
    turn, the ``monthly_close`` one only on turns that close a month.

    Attributes
    ----------
    events : list[Event]
        Ordered list of event instances to execute.
    _event_map : dict[str, Event]
        Internal mapping from event names to instances for quick lookup.

    See Also
    --------
    Pipeline.from_event_list : Build pipeline from event name list
    Pipeline.from_yaml : Build pipeline from a YAML section
    """

    events: list[Event] = field(default_factory=list)
    _event_map: dict[str, Event] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        """Build internal event mapping."""
        self._event_map = {event.name: event for event in self.events}

    @classmethod
    def from_event_list(cls, event_names: list[str]) -> Pipeline:
        """
        Build pipeline from ordered list of event names.

        Parameters
        ----------
        event_names : list[str]
            Event names in desired execution order.

        Returns
        -------
        Pipeline
            Pipeline with events in the order specified.

        Raises
        ------
        KeyError
            If event name not found in registry.
        """
        return cls(events=[get_event(name)() for name in event_names])

    @classmethod
    def from_yaml(cls, yaml_path: str | Path, section: str) -> Pipeline:
        """
        Build one pipeline from a section of a YAML configuration file.

        The file maps section names (``weekly``, ``monthly_close``) to
        lists of event names.

        Parameters
        ----------
        yaml_path : str | Path
            Path to YAML configuration file.
        section : str
            Top-level key to read.

        Returns
        -------
        Pipeline
            Pipeline with events parsed from YAML.

        Raises
        ------
        ValueError
            If the section is missing or is not a list of names.

        Examples
        --------
        >>> weekly = Pipeline.from_yaml("my_pipeline.yml", "weekly")
        """
        yaml_path = Path(yaml_path)
        with open(yaml_path) as f:
            config = yaml.safe_load(f)
        return cls.from_mapping(config, section, source=str(yaml_path))

    @classmethod
    def from_mapping(
        cls, config: Any, section: str, *, source: str = "<mapping>"
    ) -> Pipeline:
        """Build one pipeline from an already parsed pipeline mapping."""
        if not isinstance(config, dict) or section not in config:
            raise ValueError(f"Pipeline config must have '{section}' key: {source}")

        names = config[section]
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ValueError(
                f"Pipeline '{section}' must be a list of event names: {source}"
            )

        return cls.from_event_list([n.strip() for n in names])

    def execute(self, sim: Simulation) -> None:
        """
        Execute all events in pipeline order.

        Parameters
        ----------
        sim : Simulation
            Simulation instance to operate on.
        """
        for event in self.events:
            event.execute(sim)

    def insert_after(self, after: str, event: Event | str) -> None:
        """
        Insert event after specified event.

        Raises
        ------
        ValueError
            If 'after' event not found in pipeline.
        """
        if after not in self._event_map:
            raise ValueError(f"Event '{after}' not found in pipeline")

        if isinstance(event, str):
            event = get_event(event)()

        idx = self.events.index(self._event_map[after])
        self.events.insert(idx + 1, event)
        self._event_map[event.name] = event

    def remove(self, event_name: str) -> None:
        """
        Remove event from pipeline.

        Raises
        ------
        ValueError
            If event not found in pipeline.
        """
        if event_name not in self._event_map:
            raise ValueError(f"Event '{event_name}' not found in pipeline")

        event = self._event_map.pop(event_name)
        self.events.remove(event)

    def replace(self, old_name: str, new_event: Event | str) -> None:
        """
        Replace event with another event.

        Raises
        ------
        ValueError
            If old event not found in pipeline.
        """
        if old_name not in self._event_map:
            raise ValueError(f"Event '{old_name}' not found in pipeline")

        if isinstance(new_event, str):
            new_event = get_event(new_event)()

        idx = self.events.index(self._event_map[old_name])
        self.events[idx] = new_event

        del self._event_map[old_name]
        self._event_map[new_event.name] = new_event

    @property
    def names(self) -> list[str]:
        """Event names in execution order."""
        return [event.name for event in self.events]

    def __len__(self) -> int:
        """Return number of events in pipeline."""
        return len(self.events)

    def __repr__(self) -> str:
        """Provide informative repr."""
        return f"Pipeline(n_events={len(self.events)})"
