"""Profile Metadata: kind 0 records parsed into UserProfile.

Invariants:
    - parse_profile never raises; malformed content yields None
    - Non-string values for known fields are dropped, unknown keys kept in `extra`
"""

import json
import logging

from nostrcount.core.counter_types import RawRecord, UserProfile
from nostrcount.core.domain_types import RecordKind

logger = logging.getLogger(__name__)

PROFILE_FIELDS: tuple[str, ...] = (
    "name", "display_name", "about", "picture", "nip05", "lud16", "lud06",
)


def parse_profile(record: RawRecord) -> UserProfile | None:
    if record.kind != RecordKind.PROFILE:
        return None
    try:
        payload = json.loads(record.content)
    except (json.JSONDecodeError, RecursionError):
        logger.debug("Profile content is not JSON", extra={"record_id": record.id})
        return None
    if not isinstance(payload, dict):
        return None

    known = {
        name: payload[name] for name in PROFILE_FIELDS
        if isinstance(payload.get(name), str)
    }
    extra = {k: v for k, v in payload.items() if k not in PROFILE_FIELDS}
    return UserProfile(pubkey=record.pubkey, extra=extra, **known)


def parse_nip05(value: str | None) -> tuple[str, str] | None:
    """'alice@example.com' → ('alice', 'example.com')."""
    if not value or "@" not in value:
        return None
    name, domain = value.split("@", 1)
    return name, domain


def extract_lightning_address(profile: UserProfile) -> str | None:
    return profile.lud16 or profile.lud06 or None
