"""Counter Record Validation: cheap lexical pre-filter over a record's tags.

Invariants:
    - is_valid_counter_record is PURE and never raises
    - Requires a `type` tag (since|until), a non-empty `title` tag and a `date`
      tag shaped DDDD-DD-DD; `visibility=public` only when require_public
    - No calendar validation here: 2024-13-45 passes the shape check

Design Decisions:
    - Any tag satisfying a rule counts, not only the first occurrence: the normalizer
      applies the stricter first-occurrence extraction afterwards
    - Passing this filter does not guarantee normalize() accepts the record
"""

import re

from nostrcount.core.counter_types import RawRecord, Tag
from nostrcount.core.domain_types import COUNTER_TYPES, Visibility


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_date_shaped(value: object) -> bool:
    """True for a string of the form DDDD-DD-DD (ASCII digits only)."""
    return (
        isinstance(value, str)
        and value.isascii()
        and DATE_PATTERN.fullmatch(value) is not None
    )


def tag_value(tag: Tag) -> str | None:
    """Second element of a tag, or None when the tag has no value."""
    return tag[1] if len(tag) > 1 else None


def first_tag_value(tags: tuple[Tag, ...], name: str) -> str | None:
    """Value of the first tag named `name`, or None if absent."""
    for tag in tags:
        if tag and tag[0] == name:
            return tag_value(tag)
    return None


def _any_tag(tags: tuple[Tag, ...], name: str, predicate) -> bool:
    return any(
        tag and tag[0] == name and predicate(tag_value(tag)) for tag in tags
    )


def is_valid_counter_record(record: RawRecord, require_public: bool = False) -> bool:
    """Fast pre-filter: does this record look like a counter record?"""
    tags = record.tags
    has_type = _any_tag(tags, "type", lambda v: v in COUNTER_TYPES)
    has_title = _any_tag(tags, "title", lambda v: bool(v))
    has_date = _any_tag(tags, "date", is_date_shaped)
    if not (has_type and has_title and has_date):
        return False

    if require_public:
        return _any_tag(tags, "visibility", lambda v: v == Visibility.PUBLIC.value)
    return True
