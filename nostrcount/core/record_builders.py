"""Record Builders: the record shapes this client publishes and the filters it queries with.

Invariants:
    - Counter drafts are kind 30078 with tags type, title, date, visibility (in that order)
      and empty content, so normalize() can always read them back
    - The type tag is derived from the date; a client-supplied type is ignored
    - Deletion drafts are kind 5 with a single `a` tag "30078:<id>"
"""

from datetime import date

from nostrcount.core.counter_types import RecordDraft, RecordFilter
from nostrcount.core.derive_type import derive_type
from nostrcount.core.domain_types import DEFAULT_FETCH_LIMIT, RecordKind
from nostrcount.core.reconcile_tombstones import REFERENCE_TAG, counter_reference


DELETION_CONTENT: str = "Deleted counter"


def build_counter_draft(
    title: str, date_value: str, visibility: str, today: date, created_at: int,
) -> RecordDraft:
    counter_type = derive_type(date_value, today)
    return RecordDraft(
        kind=RecordKind.COUNTER,
        content="",
        tags=(
            ("type", counter_type.value),
            ("title", title),
            ("date", date_value),
            ("visibility", visibility),
        ),
        created_at=created_at,
    )


def build_deletion_draft(counter_id: str, created_at: int) -> RecordDraft:
    return RecordDraft(
        kind=RecordKind.DELETION,
        content=DELETION_CONTENT,
        tags=((REFERENCE_TAG, counter_reference(counter_id)),),
        created_at=created_at,
    )


def _authors(pubkey: str | None) -> tuple[str, ...] | None:
    return (pubkey,) if pubkey else None


def build_counter_filter(
    pubkey: str | None = None, limit: int = DEFAULT_FETCH_LIMIT,
) -> RecordFilter:
    """Counter records, optionally by one author. Visibility is filtered after fetching."""
    return RecordFilter(
        kinds=(RecordKind.COUNTER,), authors=_authors(pubkey), limit=limit,
    )


def build_deletion_filter(
    pubkey: str | None = None, limit: int = DEFAULT_FETCH_LIMIT,
) -> RecordFilter:
    return RecordFilter(
        kinds=(RecordKind.DELETION,), authors=_authors(pubkey), limit=limit,
    )


def build_lookup_filter(slug: str) -> RecordFilter:
    return RecordFilter(kinds=(RecordKind.COUNTER,), ids=(slug,), limit=None)


def build_profile_filter(pubkey: str) -> RecordFilter:
    return RecordFilter(kinds=(RecordKind.PROFILE,), authors=(pubkey,), limit=1)
