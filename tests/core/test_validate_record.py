"""Counter Record Validation: lexical pre-filter over tags.

Tests cover:
    - canonical record passes
    - each required tag missing or malformed fails
    - require_public needs visibility=public
    - date shape only, no calendar check
"""

from nostrcount.core.counter_types import RawRecord
from nostrcount.core.validate_record import (
    first_tag_value, is_date_shaped, is_valid_counter_record,
)


def _record(tags, content: str = "") -> RawRecord:
    return RawRecord(
        id="abc", pubkey="pk", kind=30078, created_at=1000,
        content=content, tags=tags,
    )


def _tags(**overrides):
    base = {
        "type": "since", "title": "Quit smoking",
        "date": "2023-01-01", "visibility": "public",
    }
    base.update(overrides)
    return [[k, v] for k, v in base.items() if v is not None]


def test_canonical_record_is_valid():
    assert is_valid_counter_record(_record(_tags()))


def test_missing_type_is_invalid():
    assert not is_valid_counter_record(_record(_tags(type=None)))


def test_unknown_type_is_invalid():
    assert not is_valid_counter_record(_record(_tags(type="during")))


def test_empty_title_is_invalid():
    assert not is_valid_counter_record(_record(_tags(title="")))


def test_missing_date_is_invalid():
    assert not is_valid_counter_record(_record(_tags(date=None)))


def test_badly_shaped_date_is_invalid():
    assert not is_valid_counter_record(_record(_tags(date="2023-1-1")))
    assert not is_valid_counter_record(_record(_tags(date="01/01/2023")))


def test_date_shape_is_lexical_only():
    assert is_valid_counter_record(_record(_tags(date="2023-13-45")))


def test_missing_visibility_passes_without_require_public():
    assert is_valid_counter_record(_record(_tags(visibility=None)))


def test_require_public_rejects_private():
    record = _record(_tags(visibility="private"))
    assert is_valid_counter_record(record)
    assert not is_valid_counter_record(record, require_public=True)


def test_require_public_rejects_missing_visibility():
    assert not is_valid_counter_record(_record(_tags(visibility=None)), require_public=True)


def test_any_matching_tag_counts():
    tags = [["type", "bogus"], ["type", "until"], ["title", "Trip"], ["date", "2030-01-01"]]
    assert is_valid_counter_record(_record(tags))


def test_tag_without_value_is_ignored():
    tags = [["type"], ["title", "Trip"], ["date", "2030-01-01"]]
    assert not is_valid_counter_record(_record(tags))


def test_fallback_only_record_fails_prefilter():
    record = _record([], content='{"title": "X", "date": "2099-01-01"}')
    assert not is_valid_counter_record(record)


def test_first_tag_value_takes_first_occurrence():
    tags = (("title", "first"), ("title", "second"))
    assert first_tag_value(tags, "title") == "first"
    assert first_tag_value(tags, "date") is None


def test_is_date_shaped_rejects_non_strings_and_unicode_digits():
    assert is_date_shaped("2024-06-15")
    assert not is_date_shaped(20240615)
    assert not is_date_shaped("２０２４-06-15")
    assert not is_date_shaped("2024-06-15\n")
