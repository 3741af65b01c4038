"""Date Display: day arithmetic and human-readable strings for counter cards.

Invariants:
    - Day differences are whole calendar days between dates (no time-of-day component)
    - since counters count forward from the date, until counters count down to it
"""

from datetime import date

from nostrcount.core.derive_type import parse_iso_date
from nostrcount.core.domain_types import CounterType
from nostrcount.core.validate_record import is_date_shaped


def calculate_days_diff(value: str, counter_type: str, today: date) -> int:
    """Days elapsed (since) or remaining (until). Negative once a countdown has passed."""
    target = parse_iso_date(value)
    if counter_type == CounterType.SINCE.value:
        return (today - target).days
    return (target - today).days


def format_duration(days: int) -> str:
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day"
    if days == -1:
        return "1 day ago"
    if days > 0:
        return f"{days} days"
    return f"{abs(days)} days ago"


def format_date(value: str) -> str:
    """2024-06-15 → 'June 15, 2024'."""
    d = parse_iso_date(value)
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def is_date_valid(value: str) -> bool:
    """True for a real calendar date in YYYY-MM-DD form (rejects 2024-02-30)."""
    if not is_date_shaped(value):
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True