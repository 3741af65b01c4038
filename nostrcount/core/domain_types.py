"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - RecordKind values are the Nostr kind numbers used on the wire
    - All valid counter states encoded as Enums, no raw string matching outside core/

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum, IntEnum


# ─── Enums ───────────────────────────────────────────────────────

class RecordKind(IntEnum):
    """Nostr kinds this client reads or writes."""
    PROFILE = 0
    NOTE = 1
    DELETION = 5
    COUNTER = 30078


class CounterType(str, Enum):
    """Whether a counter counts days since a past date or until a future one."""
    SINCE = "since"
    UNTIL = "until"


class Visibility(str, Enum):
    """Advisory access intent; relays do not enforce it."""
    PUBLIC = "public"
    PRIVATE = "private"


COUNTER_TYPES: frozenset[str] = frozenset(t.value for t in CounterType)
VISIBILITIES: frozenset[str] = frozenset(v.value for v in Visibility)

# Bounds applied by the normalizer
TITLE_MIN_LENGTH: int = 2
TITLE_MAX_LENGTH: int = 100

# Relays cap each query at this many records
DEFAULT_FETCH_LIMIT: int = 100
