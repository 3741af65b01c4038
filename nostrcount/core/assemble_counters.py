"""Counter Assembly: turns raw relay output into the ordered list of current counters.

Invariants:
    - assemble is PURE and total: no per-record problem aborts the batch
    - Pipeline order: tombstones → kind/author filter → validator → normalizer
    - Output sorted by created_at descending, id ascending on ties (reproducible)
    - A record id appears at most once in the output (relays may echo the same record)
    - Edits are new records: ids are never merged across versions

Design Decisions:
    - Validator runs before the normalizer as a cheap pre-filter; the list feed
      only shows records carrying canonical tags, while select_latest_counter
      (single lookup) goes straight to the normalizer so fallback schemas resolve
"""

import logging
from typing import Iterable

from nostrcount.core.counter_types import Counter, RawRecord
from nostrcount.core.domain_types import RecordKind
from nostrcount.core.normalize_counter import normalize
from nostrcount.core.reconcile_tombstones import compute_deleted_ids
from nostrcount.core.validate_record import is_valid_counter_record

logger = logging.getLogger(__name__)


def sort_newest_first(counters: Iterable[Counter]) -> list[Counter]:
    return sorted(counters, key=lambda c: (-c.created_at, c.id))


def assemble(
    raw_records: Iterable[RawRecord] | None,
    deletion_markers: Iterable[RawRecord] | None = None,
    author_filter: str | None = None,
    require_public: bool = False,
) -> list[Counter]:
    """Reconcile counter records against deletion markers into current counters."""
    deleted_ids = compute_deleted_ids(deletion_markers)
    counters: dict[str, Counter] = {}
    skipped = 0

    for record in raw_records or ():
        if record.id in deleted_ids:
            logger.debug("Skipping deleted record", extra={"record_id": record.id})
            skipped += 1
            continue
        if record.kind != RecordKind.COUNTER:
            skipped += 1
            continue
        if author_filter and record.pubkey != author_filter:
            skipped += 1
            continue
        if record.id in counters:
            continue
        if not is_valid_counter_record(record, require_public):
            logger.debug("Skipping invalid counter record", extra={"record_id": record.id})
            skipped += 1
            continue
        counter = normalize(record, require_public)
        if counter is None:
            skipped += 1
            continue
        counters[record.id] = counter

    logger.debug(
        f"Assembled {len(counters)} counter(s), skipped {skipped}",
        extra={"counter_count": len(counters)},
    )
    return sort_newest_first(counters.values())


def select_latest_counter(
    records: Iterable[RawRecord] | None,
    deletion_markers: Iterable[RawRecord] | None = None,
) -> Counter | None:
    """Single-counter lookup: the newest matching record, if it normalizes."""
    deleted_ids = compute_deleted_ids(deletion_markers)
    candidates = [
        r for r in records or ()
        if r.kind == RecordKind.COUNTER and r.id not in deleted_ids
    ]
    if not candidates:
        return None
    latest = max(candidates, key=lambda r: (r.created_at or 0, r.id))
    return normalize(latest)
