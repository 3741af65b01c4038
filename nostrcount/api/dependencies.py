"""Route Dependencies: relay, services, clock and author identity for FastAPI handlers.

Invariants:
    - Every dependency is overridable in tests via app.dependency_overrides
    - The author pubkey comes from the X-Pubkey header; signing happens client-side
"""

import re
from datetime import date, datetime, timezone
from typing import Callable

from fastapi import Depends, Header

from nostrcount.config import Settings, get_settings
from nostrcount.core.errors import CounterValidationError
from nostrcount.infrastructure.memory_relay import MemoryRelay, get_relay
from nostrcount.services.counter_feed import CounterFeed
from nostrcount.services.counter_publishing import CounterPublisher, utc_now

_PUBKEY = re.compile(r"^[0-9a-f]{64}$")


def today_utc() -> date:
    """Current UTC calendar date."""
    return datetime.now(timezone.utc).date()


def get_today() -> date:
    return today_utc()


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_feed(
    relay: MemoryRelay = Depends(get_relay),
    settings: Settings = Depends(get_settings),
) -> CounterFeed:
    return CounterFeed(
        relay,
        fetch_limit=settings.fetch_limit,
        timeout_seconds=settings.fetch_timeout_seconds,
    )


def get_publisher(
    relay: MemoryRelay = Depends(get_relay),
    feed: CounterFeed = Depends(get_feed),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> CounterPublisher:
    return CounterPublisher(relay, feed, now=clock)


def get_author(x_pubkey: str | None = Header(None)) -> str | None:
    """Author pubkey or None. Publishing services raise IdentityRequiredError on None."""
    if x_pubkey is None:
        return None
    pubkey = x_pubkey.strip().lower()
    if not _PUBKEY.fullmatch(pubkey):
        raise CounterValidationError(
            "X-Pubkey must be a 64-character hex public key", "X-Pubkey",
        )
    return pubkey
