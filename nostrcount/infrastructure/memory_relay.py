"""In-Process Relay: append-only record store implementing RecordSource and RecordSink.

Invariants:
    - Records are never updated or removed; deletions are just more records (kind 5)
    - Record ids follow NIP-01: sha256 over [0, pubkey, created_at, kind, tags, content]
    - fetch returns newest first, capped at the filter's limit
    - Re-publishing an identical record is a no-op (same id)

Design Decisions:
    - Singleton relay initialized on startup: FastAPI lifespan manages lifecycle
    - No signing: signatures are the transport's concern, records arrive pre-verified
"""

import asyncio
import hashlib
import json
import logging
from pathlib import Path

from nostrcount.core.counter_types import RawRecord, RecordDraft, RecordFilter
from nostrcount.core.errors import RelayUnavailableError

logger = logging.getLogger(__name__)


def compute_record_id(
    pubkey: str, created_at: int, kind: int, tags, content: str,
) -> str:
    """NIP-01 event id: hex sha256 of the compact canonical serialization."""
    serialized = json.dumps(
        [0, pubkey, created_at, int(kind), [list(t) for t in tags], content],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def _matches(record: RawRecord, record_filter: RecordFilter) -> bool:
    if record.kind not in record_filter.kinds:
        return False
    if record_filter.authors and record.pubkey not in record_filter.authors:
        return False
    if record_filter.ids and record.id not in record_filter.ids:
        return False
    return True


class MemoryRelay:
    """Append-only record log with relay-style filter queries."""

    def __init__(self, url: str = "memory://local"):
        self.url = url
        self._records: dict[str, RawRecord] = {}
        self._lock = asyncio.Lock()
        self._closed = False

    def __len__(self) -> int:
        return len(self._records)

    def _check_open(self):
        if self._closed:
            raise RelayUnavailableError(f"{self.url} is closed")

    async def fetch(self, record_filter: RecordFilter) -> list[RawRecord]:
        self._check_open()
        matches = [r for r in self._records.values() if _matches(r, record_filter)]
        matches.sort(key=lambda r: (-(r.created_at or 0), r.id))
        if record_filter.limit is not None:
            matches = matches[:record_filter.limit]
        logger.debug(
            f"Relay query {record_filter.to_dict()} matched {len(matches)} record(s)",
        )
        return matches

    async def publish(self, draft: RecordDraft, author: str) -> RawRecord:
        self._check_open()
        record = RawRecord(
            id=compute_record_id(
                author, draft.created_at, draft.kind, draft.tags, draft.content,
            ),
            pubkey=author,
            kind=int(draft.kind),
            created_at=draft.created_at,
            content=draft.content,
            tags=draft.tags,
        )
        return await self.ingest(record)

    async def ingest(self, record: RawRecord) -> RawRecord:
        """Store a record received from elsewhere (third-party clients, seed files)."""
        self._check_open()
        async with self._lock:
            stored = self._records.setdefault(record.id, record)
        logger.info(
            "Stored record",
            extra={"record_id": record.id, "kind": record.kind, "pubkey": record.pubkey},
        )
        return stored

    def load_file(self, path: str | Path) -> int:
        """Load a JSON array of raw records. Entries without an id are skipped."""
        entries = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(entries, list):
            logger.warning(f"Seed file {path} is not a JSON array, nothing loaded")
            return 0
        loaded = 0
        for entry in entries:
            if not isinstance(entry, dict) or not entry.get("id"):
                continue
            record = RawRecord.from_dict(entry)
            if not record.id:
                continue
            self._records.setdefault(record.id, record)
            loaded += 1
        logger.info(f"Loaded {loaded} record(s) from {path}")
        return loaded

    async def health_check(self) -> bool:
        return not self._closed

    async def close(self):
        self._closed = True


# Singleton (initialized on startup)
relay: MemoryRelay | None = None


def init_relay(seed_records_path: str | None = None) -> MemoryRelay:
    global relay
    relay = MemoryRelay()
    if seed_records_path:
        relay.load_file(seed_records_path)
    return relay


def get_relay() -> MemoryRelay:
    """FastAPI dependency for the record source/sink."""
    if relay is None:
        raise RelayUnavailableError("relay not initialized")
    return relay
