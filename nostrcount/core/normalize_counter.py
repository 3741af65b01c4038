"""Counter Normalization: extracts a Counter from a record written by any client.

Invariants:
    - normalize is PURE and total: malformed input returns None, never raises
    - Extractors run in order; each only fills fields still missing (first non-empty wins)
    - title and date are mandatory; type defaults to since, visibility to public
    - The type default is static: a future date without a type tag is still `since`
    - A returned Counter always satisfies: type ∈ {since, until}, visibility ∈
      {public, private}, date shaped DDDD-DD-DD, 2 <= title_length(title) <= 100
    - Title length counts UTF-16 code units: an emoji outside the BMP counts as 2

Design Decisions:
    - Ordered extractor chain over one rigid schema: counter records come from
      uncoordinated clients (canonical tags, d/t tags, JSON content)
    - Each rejection logged at DEBUG with the reason; the batch keeps going
"""

import json
import logging
from typing import Callable

from nostrcount.core.counter_types import Counter, RawRecord
from nostrcount.core.domain_types import (
    COUNTER_TYPES, VISIBILITIES, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH,
    CounterType, Visibility,
)
from nostrcount.core.validate_record import first_tag_value, is_date_shaped, tag_value

logger = logging.getLogger(__name__)

FIELDS: tuple[str, ...] = ("type", "title", "date", "visibility")

Fields = dict[str, object]
Extractor = Callable[[RawRecord], Fields]


def title_length(title: str) -> int:
    """Length in UTF-16 code units, the unit web clients measure titles in."""
    return len(title.encode("utf-16-le")) // 2


# ─── Extractors ──────────────────────────────────────────────────

def extract_canonical_tags(record: RawRecord) -> Fields:
    """type/title/date/visibility tags, first occurrence of each."""
    return {name: first_tag_value(record.tags, name) for name in FIELDS}


def extract_alternate_tags(record: RawRecord) -> Fields:
    """`d` tag as title and `t` tag as type, first non-empty of each."""
    found: Fields = {}
    for tag in record.tags:
        if not tag:
            continue
        value = tag_value(tag)
        if not value:
            continue
        if tag[0] == "d" and "title" not in found:
            found["title"] = value
        elif tag[0] == "t" and "type" not in found:
            found["type"] = value
    return found


def extract_json_content(record: RawRecord) -> Fields:
    """Fields from a JSON object in the content. Non-JSON content yields nothing."""
    if not record.content or not record.content.strip():
        return {}
    try:
        payload = json.loads(record.content)
    except (json.JSONDecodeError, RecursionError):
        logger.debug(
            "Content is not JSON", extra={"record_id": record.id},
        )
        return {}
    if not isinstance(payload, dict):
        return {}
    return {name: payload.get(name) for name in FIELDS}


EXTRACTORS: tuple[Extractor, ...] = (
    extract_canonical_tags,
    extract_alternate_tags,
    extract_json_content,
)


def extract_fields(
    record: RawRecord, extractors: tuple[Extractor, ...] = EXTRACTORS,
) -> Fields:
    """Run the extractor chain. Empty strings and None count as missing."""
    merged: Fields = {name: None for name in FIELDS}
    for extractor in extractors:
        missing = [name for name in FIELDS if not merged[name]]
        if not missing:
            break
        found = extractor(record)
        for name in missing:
            value = found.get(name)
            if value:
                merged[name] = value
    return merged


# ─── Validation ──────────────────────────────────────────────────

def _is_one_of(value: object, allowed: frozenset[str]) -> bool:
    return isinstance(value, str) and value in allowed


def check_fields(fields: Fields, require_public: bool) -> str | None:
    """Return the rejection reason, or None when all field rules hold."""
    title, date = fields["title"], fields["date"]
    if not title or not date:
        return "missing title or date"
    if not _is_one_of(fields["type"], COUNTER_TYPES):
        return f"invalid type {fields['type']!r}"
    if not _is_one_of(fields["visibility"], VISIBILITIES):
        return f"invalid visibility {fields['visibility']!r}"
    if not is_date_shaped(date):
        return f"invalid date format {date!r}"
    if not isinstance(title, str):
        return "title is not a string"
    if not TITLE_MIN_LENGTH <= title_length(title) <= TITLE_MAX_LENGTH:
        return f"invalid title length {title_length(title)}"
    if require_public and fields["visibility"] != Visibility.PUBLIC.value:
        return "counter is not public"
    return None


def normalize(record: RawRecord, require_public: bool = False) -> Counter | None:
    """Build a Counter from a record, or None if the record is not a usable counter."""
    fields = extract_fields(record)
    if not fields["type"]:
        fields["type"] = CounterType.SINCE.value
    if not fields["visibility"]:
        fields["visibility"] = Visibility.PUBLIC.value

    reason = check_fields(fields, require_public)
    if reason:
        logger.debug(
            "Rejected counter record",
            extra={"record_id": record.id, "reason": reason},
        )
        return None

    return Counter(
        id=record.id,
        title=fields["title"],
        date=fields["date"],
        type=fields["type"],
        visibility=fields["visibility"],
        pubkey=record.pubkey,
        created_at=record.created_at or 0,
        slug=record.id,
    )
