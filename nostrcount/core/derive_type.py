"""Type Derivation: classifies a calendar date as `since` or `until` relative to today.

Invariants:
    - derive_type is PURE: `today` is passed in, never read from the clock here
    - date <= today → since; date > today → until (the boundary day counts as since)
    - Callers validate the date shape first; an unparseable date raises ValueError
"""

from datetime import date

from nostrcount.core.domain_types import CounterType


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD. Raises ValueError on anything else."""
    return date.fromisoformat(value)


def derive_type(value: str, today: date) -> CounterType:
    """Return SINCE when the date is on or before today, else UNTIL."""
    if parse_iso_date(value) <= today:
        return CounterType.SINCE
    return CounterType.UNTIL
