"""Core turn-stage infrastructure for the finlife engine."""

from typing import Any, Callable

from finlife.core.decorators import event as event_decorator
from finlife.core.event import Event
from finlife.core.pipeline import Pipeline
from finlife.core.registry import get_event, list_events

# Export the decorator under its intended name
event: Callable[..., Any] = event_decorator

__all__ = [
    "Event",
    "Pipeline",
    "event",
    "get_event",
    "list_events",
]
