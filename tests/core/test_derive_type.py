"""Type Derivation: date on/before today is since, after today is until.

Tests cover:
    - boundary day counts as since
    - day before / day after
    - far past and far future
    - unparseable date raises ValueError (callers validate first)
"""

from datetime import date

import pytest

from nostrcount.core.derive_type import derive_type
from nostrcount.core.domain_types import CounterType


TODAY = date(2024, 6, 15)


def test_today_is_since():
    assert derive_type("2024-06-15", TODAY) == CounterType.SINCE


def test_yesterday_is_since():
    assert derive_type("2024-06-14", TODAY) == CounterType.SINCE


def test_tomorrow_is_until():
    assert derive_type("2024-06-16", TODAY) == CounterType.UNTIL


def test_far_past_and_future():
    assert derive_type("1970-01-01", TODAY) == CounterType.SINCE
    assert derive_type("2099-12-31", TODAY) == CounterType.UNTIL


def test_derived_type_serializes_to_wire_value():
    assert derive_type("2024-06-16", TODAY).value == "until"


def test_unparseable_date_raises():
    with pytest.raises(ValueError):
        derive_type("not-a-date", TODAY)
