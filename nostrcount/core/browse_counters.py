"""Browse Helpers: filtering, search and distance ordering for counter listings.

Invariants:
    - All functions return new lists; input order is never mutated
    - sort_by_distance is stable: equal distances keep their feed order (newest first)
"""

from datetime import date
from typing import Iterable

from nostrcount.core.counter_types import Counter
from nostrcount.core.date_display import calculate_days_diff
from nostrcount.core.domain_types import CounterType


TYPE_FILTER_ALL: str = "all"
FEATURED_LIMIT: int = 6


def filter_counters(
    counters: Iterable[Counter],
    type_filter: str = TYPE_FILTER_ALL,
    search: str | None = None,
) -> list[Counter]:
    """Keep counters of the given type whose title (case-insensitive) or date contains `search`."""
    result = list(counters)
    if type_filter != TYPE_FILTER_ALL:
        result = [c for c in result if c.type == type_filter]

    term = (search or "").strip().lower()
    if term:
        result = [c for c in result if term in c.title.lower() or term in c.date]
    return result


def _distance(counter: Counter, today: date) -> int:
    # Shape-valid but impossible dates (2024-13-45) sort as today
    try:
        return abs(calculate_days_diff(counter.date, counter.type, today))
    except ValueError:
        return 0


def sort_by_distance(counters: Iterable[Counter], today: date) -> list[Counter]:
    """Largest absolute day distance from today first."""
    return sorted(counters, key=lambda c: _distance(c, today), reverse=True)


def featured_counters(
    counters: Iterable[Counter], today: date, limit: int = FEATURED_LIMIT,
) -> list[Counter]:
    return sort_by_distance(counters, today)[:limit]


def counter_stats(counters: Iterable[Counter]) -> dict[str, int]:
    counters = list(counters)
    return {
        "total": len(counters),
        "since": sum(1 for c in counters if c.type == CounterType.SINCE.value),
        "until": sum(1 for c in counters if c.type == CounterType.UNTIL.value),
    }
