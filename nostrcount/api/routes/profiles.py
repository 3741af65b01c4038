"""Profile Routes: kind 0 metadata for counter authors."""

from fastapi import APIRouter, Depends, Path

from nostrcount.api.dependencies import get_feed
from nostrcount.core.profile_metadata import extract_lightning_address, parse_nip05
from nostrcount.schemas.records import ProfileResponse
from nostrcount.services.counter_feed import CounterFeed
from nostrcount.services.profile_lookup import fetch_profile

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.get("/{pubkey}", response_model=ProfileResponse)
async def get_profile(
    pubkey: str = Path(pattern=r"^[0-9a-f]{64}$"),
    feed: CounterFeed = Depends(get_feed),
):
    profile = await fetch_profile(feed, pubkey)
    nip05_name, nip05_domain = parse_nip05(profile.nip05) or (None, None)
    return ProfileResponse(
        pubkey=profile.pubkey,
        name=profile.name,
        display_name=profile.display_name,
        about=profile.about,
        picture=profile.picture,
        nip05=profile.nip05,
        nip05_name=nip05_name,
        nip05_domain=nip05_domain,
        lightning_address=extract_lightning_address(profile),
    )
