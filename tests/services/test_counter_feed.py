"""Counter Feed: relay queries orchestrated around assemble().

Tests cover:
    - list_counters honors deletions, visibility and author
    - get_counter: found, deleted, missing, invalid
    - slow relays surface RelayTimeoutError
"""

import asyncio

import pytest

from nostrcount.core.counter_types import RawRecord, RecordDraft
from nostrcount.core.errors import (
    InvalidCounterError, RelayTimeoutError, ResourceNotFoundError,
)
from nostrcount.core.record_builders import build_deletion_draft
from nostrcount.services.counter_feed import CounterFeed


ALICE = "a" * 64
BOB = "b" * 64


def _counter_draft(title: str, created_at: int, visibility: str = "public") -> RecordDraft:
    return RecordDraft(
        kind=30078, content="", created_at=created_at,
        tags=(
            ("type", "since"), ("title", title),
            ("date", "2023-01-01"), ("visibility", visibility),
        ),
    )


async def test_list_counters_newest_first(relay, feed):
    await relay.publish(_counter_draft("First", 10), ALICE)
    await relay.publish(_counter_draft("Second", 20), BOB)
    counters = await feed.list_counters()
    assert [c.title for c in counters] == ["Second", "First"]


async def test_list_counters_drops_deleted(relay, feed):
    kept = await relay.publish(_counter_draft("Kept", 10), ALICE)
    gone = await relay.publish(_counter_draft("Gone", 20), ALICE)
    await relay.publish(build_deletion_draft(gone.id, created_at=30), ALICE)
    assert [c.id for c in await feed.list_counters()] == [kept.id]


async def test_list_counters_public_only(relay, feed):
    await relay.publish(_counter_draft("Open", 10), ALICE)
    await relay.publish(_counter_draft("Secret", 20, visibility="private"), ALICE)
    assert [c.title for c in await feed.list_counters(public_only=True)] == ["Open"]
    assert len(await feed.list_counters(public_only=False)) == 2


async def test_list_counters_by_author(relay, feed):
    await relay.publish(_counter_draft("Alice", 10), ALICE)
    await relay.publish(_counter_draft("Bob", 20), BOB)
    assert [c.title for c in await feed.list_counters(pubkey=ALICE)] == ["Alice"]


async def test_get_counter(relay, feed):
    record = await relay.publish(_counter_draft("Lookup", 10), ALICE)
    counter = await feed.get_counter(record.id)
    assert counter.slug == record.id
    assert counter.title == "Lookup"


async def test_get_counter_missing(feed):
    with pytest.raises(ResourceNotFoundError):
        await feed.get_counter("f" * 64)


async def test_get_counter_deleted(relay, feed):
    record = await relay.publish(_counter_draft("Gone", 10), ALICE)
    await relay.publish(build_deletion_draft(record.id, created_at=20), ALICE)
    with pytest.raises(ResourceNotFoundError):
        await feed.get_counter(record.id)


async def test_get_counter_ignores_other_authors_deletions(relay, feed):
    record = await relay.publish(_counter_draft("Mine", 10), ALICE)
    await relay.publish(build_deletion_draft(record.id, created_at=20), BOB)
    assert (await feed.get_counter(record.id)).title == "Mine"


async def test_get_counter_invalid(relay, feed):
    await relay.ingest(RawRecord(
        id="c" * 64, pubkey=ALICE, kind=30078, created_at=1, tags=[["title", "x"]],
    ))
    with pytest.raises(InvalidCounterError):
        await feed.get_counter("c" * 64)


class _SlowSource:
    async def fetch(self, record_filter):
        await asyncio.sleep(1)
        return []


async def test_slow_relay_times_out():
    feed = CounterFeed(_SlowSource(), timeout_seconds=0.01)
    with pytest.raises(RelayTimeoutError):
        await feed.list_counters()
