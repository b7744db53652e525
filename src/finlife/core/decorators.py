# src/finlife/core/decorators.py
"""
Decorator for simplified Event definition.

Instead of:
    from dataclasses import dataclass
    from finlife.core import Event

    @dataclass(slots=True)
    class AccrueWeeklyInterest(Event):
        def execute(self, sim): ...

You can write:
    from finlife.core import event

    @event
    class AccrueWeeklyInterest:
        def execute(self, sim): ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def event(
    cls: type[T] | None = None,
    *,
    name: str | None = None,
    **dataclass_kwargs: Any,
) -> type[T] | Callable[[type[T]], type[T]]:
    """Decorator to define an Event with automatic inheritance and dataclass.

    Parameters
    ----------
    cls : type | None
        The class to decorate (provided automatically when used without parens)
    name : str | None
        Optional custom name for the event. If None, uses class name (snake_case).
    **dataclass_kwargs : Any
        Additional keyword arguments to pass to @dataclass.
        By default, slots=True is set.

    Returns
    -------
    type | Callable
        The decorated class or a decorator function

    Examples
    --------
        @event(name="pay_rent_early")
        class PayRentEarly:
            def execute(self, sim: Simulation) -> None:
                ...
    """
    from finlife.core.event import Event

    dataclass_kwargs.setdefault("slots", True)

    def decorator(cls: type[T]) -> type[T]:
        if not issubclass(cls, Event):
            # Rebuild on top of Event alone so slots work without
            # multiple inheritance.
            namespace = {
                "__module__": cls.__module__,
                "__qualname__": cls.__qualname__,
                "__annotations__": getattr(cls, "__annotations__", {}),
            }
            for attr_name in dir(cls):
                if not attr_name.startswith("__"):
                    namespace[attr_name] = getattr(cls, attr_name)
            if cls.__doc__ is not None:
                namespace["__doc__"] = cls.__doc__
            if name is not None:
                namespace["name"] = name

            cls = type(cls.__name__, (Event,), namespace)

        # Set before the dataclass so __init_subclass__ sees it
        if name is not None:
            cls.name = name  # type: ignore[attr-defined]

        cls = dataclass(**dataclass_kwargs)(cls)

        return cls

    if cls is None:
        return decorator
    return decorator(cls)
