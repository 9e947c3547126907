"""Shared fixtures: a controllable clock, a fresh default state and a container."""

from datetime import date, datetime, timedelta

import pytest

from calorix.core.defaults import default_state
from calorix.shell.container import AppStateContainer
from calorix.shell.integrations import FixedIntegrationSource
from calorix.shell.store import InMemoryStore


NOW = datetime(2026, 10, 19, 12, 0, 0)


class FixedClock:
    """Clock frozen at a given instant until advanced."""

    def __init__(self, now: datetime = NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def today():
    return NOW.date()


@pytest.fixture
def state():
    return default_state(NOW)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def container(store, clock):
    """Container over an in-memory store with a frozen clock."""
    return AppStateContainer(store, clock=clock, integration_source=FixedIntegrationSource(300, 20))
