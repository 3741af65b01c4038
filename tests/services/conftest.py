"""Service test fixtures: in-process relay + FastAPI test client.

Invariants:
    - Every test gets a fresh MemoryRelay
    - get_relay, get_today and get_clock overridden: today is pinned to 2024-06-15
    - memory_relay.relay patched for the readiness probe, which reads it directly
"""

from datetime import date, datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

import nostrcount.infrastructure.memory_relay as relay_module
from nostrcount.api.dependencies import get_clock, get_today
from nostrcount.infrastructure.memory_relay import MemoryRelay, get_relay
from nostrcount.main import app
from nostrcount.services.counter_feed import CounterFeed
from nostrcount.services.counter_publishing import CounterPublisher


TODAY = date(2024, 6, 15)
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

ALICE = "a" * 64
BOB = "b" * 64


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = NOW):
        self.current = start

    def __call__(self) -> datetime:
        moment = self.current
        self.current = datetime.fromtimestamp(moment.timestamp() + 1, tz=timezone.utc)
        return moment


@pytest.fixture
def relay():
    return MemoryRelay()


@pytest.fixture
def feed(relay):
    return CounterFeed(relay, fetch_limit=100, timeout_seconds=1.0)


@pytest.fixture
def publisher(relay, feed):
    return CounterPublisher(relay, feed, now=TickingClock())


@pytest.fixture
async def client(relay):
    """FastAPI test client with relay and clock dependencies overridden."""
    clock = TickingClock()
    app.dependency_overrides[get_relay] = lambda: relay
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_clock] = lambda: clock

    original_relay = relay_module.relay
    relay_module.relay = relay

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    relay_module.relay = original_relay
