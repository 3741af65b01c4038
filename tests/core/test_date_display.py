"""Date Display: day differences and duration strings for counter cards."""

from datetime import date

import pytest

from nostrcount.core.date_display import (
    calculate_days_diff, format_date, format_duration,
    is_date_valid,
)


TODAY = date(2024, 6, 15)


def test_since_counts_days_elapsed():
    assert calculate_days_diff("2024-06-05", "since", TODAY) == 10


def test_until_counts_days_remaining():
    assert calculate_days_diff("2024-06-25", "until", TODAY) == 10


def test_until_goes_negative_once_passed():
    assert calculate_days_diff("2024-06-14", "until", TODAY) == -1


def test_same_day_is_zero():
    assert calculate_days_diff("2024-06-15", "since", TODAY) == 0


def test_invalid_calendar_date_raises():
    with pytest.raises(ValueError):
        calculate_days_diff("2024-13-45", "since", TODAY)


@pytest.mark.parametrize("days,expected", [
    (0, "Today"),
    (1, "1 day"),
    (-1, "1 day ago"),
    (42, "42 days"),
    (-7, "7 days ago"),
])
def test_format_duration(days, expected):
    assert format_duration(days) == expected


def test_format_date():
    assert format_date("2024-06-05") == "June 5, 2024"


def test_is_date_valid():
    assert is_date_valid("2024-02-29")
    assert not is_date_valid("2023-02-29")
    assert not is_date_valid("2024-13-01")
    assert not is_date_valid("20240615")
    assert not is_date_valid("")
