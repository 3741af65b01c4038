"""Counter Publishing: builds counter and deletion records and hands them to a sink.

Invariants:
    - The published type is always derived from the date (client type ignored)
    - An edit publishes a NEW record with a new id; the old record is left in place
    - Only the author of a counter may edit or delete it
    - A published counter record must normalize back, else InvalidCounterError

Design Decisions:
    - Clock injected (now callable): tests pin "today" and created_at deterministically
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from nostrcount.core.counter_types import Counter, RawRecord
from nostrcount.core.errors import (
    ErrorContext, IdentityRequiredError, InvalidCounterError, NotAuthorError,
)
from nostrcount.core.normalize_counter import normalize
from nostrcount.core.record_builders import build_counter_draft, build_deletion_draft
from nostrcount.core.repository_protocols import RecordSink
from nostrcount.services.counter_feed import CounterFeed

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CounterPublisher:
    """Write side: create, edit and delete counters."""

    def __init__(
        self,
        sink: RecordSink,
        feed: CounterFeed,
        now: Callable[[], datetime] = utc_now,
    ):
        self.sink = sink
        self.feed = feed
        self.now = now

    async def create_counter(
        self, author: str | None, title: str, date: str, visibility: str,
    ) -> Counter:
        if not author:
            raise IdentityRequiredError()
        moment = self.now()
        draft = build_counter_draft(
            title, date, visibility,
            today=moment.date(), created_at=int(moment.timestamp()),
        )
        record = await self.sink.publish(draft, author)
        counter = normalize(record)
        if counter is None:
            raise InvalidCounterError(record.id, ErrorContext(pubkey=author))
        logger.info(
            "Counter published",
            extra={"record_id": counter.id, "pubkey": author},
        )
        return counter

    async def _owned_counter(self, author: str | None, slug: str) -> Counter:
        if not author:
            raise IdentityRequiredError()
        existing = await self.feed.get_counter(slug)
        if existing.pubkey != author:
            raise NotAuthorError(slug, ErrorContext(pubkey=author))
        return existing

    async def update_counter(
        self, author: str | None, slug: str, title: str, date: str, visibility: str,
    ) -> Counter:
        """Publish an edited copy. The superseded record is not tombstoned."""
        await self._owned_counter(author, slug)
        return await self.create_counter(author, title, date, visibility)

    async def delete_counter(self, author: str | None, slug: str) -> RawRecord:
        await self._owned_counter(author, slug)
        draft = build_deletion_draft(slug, created_at=int(self.now().timestamp()))
        marker = await self.sink.publish(draft, author)
        logger.info(
            "Counter deleted",
            extra={"record_id": slug, "pubkey": author},
        )
        return marker
