"""Counter Feed: fetches counter and deletion records, then hands them to the core.

Invariants:
    - Deletion markers are fetched with the same author filter as the counters
    - Every relay query is bounded by fetch_limit and fetch_timeout_seconds
    - Timeouts surface as RelayTimeoutError; the core itself has no timeout surface
    - A deleted counter is reported as not found, not as invalid

Design Decisions:
    - Two sequential queries (deletions, then counters) mirror what relays support:
      no server-side join between a record and the markers that reference it
"""

import asyncio
import logging

from nostrcount.core.assemble_counters import assemble, select_latest_counter
from nostrcount.core.counter_types import Counter, RawRecord, RecordFilter
from nostrcount.core.domain_types import DEFAULT_FETCH_LIMIT
from nostrcount.core.errors import (
    ErrorContext, InvalidCounterError, RelayTimeoutError, ResourceNotFoundError,
)
from nostrcount.core.reconcile_tombstones import compute_deleted_ids
from nostrcount.core.record_builders import (
    build_counter_filter, build_deletion_filter, build_lookup_filter,
)
from nostrcount.core.repository_protocols import RecordSource

logger = logging.getLogger(__name__)


class CounterFeed:
    """Read side: lists and single-counter lookups."""

    def __init__(
        self,
        source: RecordSource,
        fetch_limit: int = DEFAULT_FETCH_LIMIT,
        timeout_seconds: float = 10.0,
    ):
        self.source = source
        self.fetch_limit = fetch_limit
        self.timeout_seconds = timeout_seconds

    async def fetch(self, record_filter: RecordFilter) -> list[RawRecord]:
        try:
            return await asyncio.wait_for(
                self.source.fetch(record_filter), timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                f"Relay query timed out: {record_filter.to_dict()}",
                extra={"error_code": "RELAY_TIMEOUT"},
            )
            raise RelayTimeoutError(self.timeout_seconds)

    async def list_counters(
        self, pubkey: str | None = None, public_only: bool = False,
    ) -> list[Counter]:
        """Current counters, newest first. public_only drops private counters."""
        deletions = await self.fetch(
            build_deletion_filter(pubkey, limit=self.fetch_limit),
        )
        records = await self.fetch(
            build_counter_filter(pubkey, limit=self.fetch_limit),
        )
        counters = assemble(
            records, deletions, author_filter=pubkey, require_public=public_only,
        )
        logger.info(
            f"Fetched {len(records)} counter record(s), "
            f"{len(deletions)} deletion(s), {len(counters)} valid",
            extra={"counter_count": len(counters), "pubkey": pubkey},
        )
        return counters

    async def get_counter(self, slug: str) -> Counter:
        """Single counter by slug (record id)."""
        records = await self.fetch(build_lookup_filter(slug))
        if not records:
            raise ResourceNotFoundError("Counter", slug)

        authors = {r.pubkey for r in records}
        deletions: list[RawRecord] = []
        for author in sorted(authors):
            deletions.extend(await self.fetch(
                build_deletion_filter(author, limit=self.fetch_limit),
            ))
        if slug in compute_deleted_ids(deletions):
            raise ResourceNotFoundError("Counter", slug)

        counter = select_latest_counter(records, deletions)
        if counter is None:
            raise InvalidCounterError(slug, ErrorContext(record_id=slug))
        return counter
