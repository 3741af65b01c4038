"""Counter Publishing: create, edit, delete through the relay.

Tests cover:
    - type derived from the date, client type never trusted
    - edits publish a new record and leave the old one live
    - deletion markers hide the counter from the feed
    - identity and authorship enforcement
"""

import pytest

from nostrcount.core.errors import IdentityRequiredError, NotAuthorError


ALICE = "a" * 64
BOB = "b" * 64


async def test_create_counter_derives_type(publisher):
    past = await publisher.create_counter(ALICE, "Quit smoking", "2024-06-15", "public")
    future = await publisher.create_counter(ALICE, "Holiday", "2024-06-16", "public")
    assert past.type == "since"
    assert future.type == "until"


async def test_create_counter_uses_clock_timestamp(publisher):
    counter = await publisher.create_counter(ALICE, "Quit smoking", "2023-01-01", "private")
    assert counter.created_at == 1718452800
    assert counter.visibility == "private"
    assert counter.pubkey == ALICE
    assert counter.slug == counter.id


async def test_create_counter_requires_identity(publisher):
    with pytest.raises(IdentityRequiredError):
        await publisher.create_counter(None, "Quit smoking", "2023-01-01", "public")


async def test_created_counter_appears_in_feed(publisher, feed):
    counter = await publisher.create_counter(ALICE, "Quit smoking", "2023-01-01", "public")
    assert [c.id for c in await feed.list_counters()] == [counter.id]


async def test_update_publishes_new_record_without_tombstone(publisher, feed):
    original = await publisher.create_counter(ALICE, "Quit smoking", "2023-01-01", "public")
    edited = await publisher.update_counter(
        ALICE, original.slug, "Quit smoking for good", "2023-01-02", "public",
    )
    assert edited.id != original.id
    ids = [c.id for c in await feed.list_counters()]
    assert ids == [edited.id, original.id]


async def test_update_by_other_author_rejected(publisher):
    original = await publisher.create_counter(ALICE, "Quit smoking", "2023-01-01", "public")
    with pytest.raises(NotAuthorError):
        await publisher.update_counter(BOB, original.slug, "Hijack", "2023-01-01", "public")


async def test_delete_counter(publisher, feed):
    counter = await publisher.create_counter(ALICE, "Quit smoking", "2023-01-01", "public")
    marker = await publisher.delete_counter(ALICE, counter.slug)
    assert marker.kind == 5
    assert marker.tags == (("a", f"30078:{counter.id}"),)
    assert await feed.list_counters() == []


async def test_delete_requires_author(publisher):
    counter = await publisher.create_counter(ALICE, "Quit smoking", "2023-01-01", "public")
    with pytest.raises(IdentityRequiredError):
        await publisher.delete_counter(None, counter.slug)
    with pytest.raises(NotAuthorError):
        await publisher.delete_counter(BOB, counter.slug)
