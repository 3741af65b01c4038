"""Profile Lookup: newest kind 0 metadata record for a pubkey."""

import logging

from nostrcount.core.counter_types import UserProfile
from nostrcount.core.errors import ResourceNotFoundError
from nostrcount.core.profile_metadata import parse_profile
from nostrcount.core.record_builders import build_profile_filter
from nostrcount.services.counter_feed import CounterFeed

logger = logging.getLogger(__name__)


async def fetch_profile(feed: CounterFeed, pubkey: str) -> UserProfile:
    """Raises ResourceNotFoundError when no parseable profile exists."""
    records = await feed.fetch(build_profile_filter(pubkey))
    for record in sorted(records, key=lambda r: -(r.created_at or 0)):
        profile = parse_profile(record)
        if profile is not None:
            return profile
    logger.info("No profile found", extra={"pubkey": pubkey})
    raise ResourceNotFoundError("Profile", pubkey)
