"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All relay IO goes through these Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, any relay client with these methods fits
    - Async in Protocol: implementations do IO, but the core functions that consume
      their results are never async; services orchestrate the calls around the pure logic
"""

from typing import Protocol

from nostrcount.core.counter_types import RawRecord, RecordDraft, RecordFilter


class RecordSource(Protocol):
    """Queryable source of records (relay pool, cache). Signatures pre-verified."""
    async def fetch(self, record_filter: RecordFilter) -> list[RawRecord]: ...


class RecordSink(Protocol):
    """Publishes a draft on behalf of an author and returns the stored record."""
    async def publish(self, draft: RecordDraft, author: str) -> RawRecord: ...
