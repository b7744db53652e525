"""Pytest configuration and fixtures for finlife tests."""

import os

import pytest

import finlife.events  # noqa: F401 - register all events
from finlife import logging
from finlife.catalogs import Catalog
from finlife.core.registry import clear_registry
from finlife.simulation import Simulation


@pytest.fixture
def clean_registry():
    """
    Save registry state, clear it for the test, then restore it.

    This fixture should be explicitly requested by tests that need isolation
    from the built-in stages or from test pollution by other test modules.

    DO NOT use autouse=True, as it would interfere with integration tests
    that rely on the built-in stages being registered.
    """
    # noinspection PyProtectedMember
    from finlife.core.registry import _EVENT_REGISTRY

    saved_events = dict(_EVENT_REGISTRY)
    clear_registry()

    yield

    _EVENT_REGISTRY.clear()
    _EVENT_REGISTRY.update(saved_events)


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    """The packaged catalog (immutable, safe to share)."""
    return Catalog.load()


@pytest.fixture
def sim() -> Simulation:
    """A deterministic simulation with the packaged defaults."""
    return Simulation.init(seed=123)


@pytest.fixture(autouse=True)
def mute_finlife_logs(caplog):
    # DEBUG on the coverage run so every logging branch executes,
    # ERROR everywhere else for speed.
    if os.environ.get("COVERAGE_RUN") == "true":
        level = logging.DEBUG
    else:
        level = logging.ERROR

    caplog.set_level(level, logger="finlife")
    logging.getLogger("finlife").setLevel(level)
