"""Counter Routes: list, browse, look up, create, edit and delete counters.

Invariants:
    - Listing always goes through assemble(): tombstoned and malformed records never appear
    - ?public=true drops private counters (default for anonymous browsing)
    - Writes require the X-Pubkey header; edits publish a new record (new slug)
"""

import logging
from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from nostrcount.api.dependencies import get_author, get_feed, get_publisher, get_today
from nostrcount.core.browse_counters import (
    counter_stats, featured_counters, filter_counters, sort_by_distance,
)
from nostrcount.schemas.counter import (
    CounterForm, CounterListResponse, CounterResponse, CounterStats,
)
from nostrcount.schemas.records import RecordOut
from nostrcount.services.counter_feed import CounterFeed
from nostrcount.services.counter_publishing import CounterPublisher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/counters", tags=["counters"])


@router.get("", response_model=CounterListResponse)
async def list_counters(
    pubkey: str | None = Query(None, pattern=r"^[0-9a-f]{64}$"),
    public: bool = Query(True),
    type_filter: Literal["all", "since", "until"] = Query("all", alias="type"),
    search: str | None = Query(None, max_length=100),
    sort: Literal["newest", "distance"] = Query("newest"),
    feed: CounterFeed = Depends(get_feed),
    today: date = Depends(get_today),
):
    """Current counters, optionally for one author. Stats cover the unfiltered set."""
    counters = await feed.list_counters(pubkey=pubkey, public_only=public)
    shown = filter_counters(counters, type_filter, search)
    if sort == "distance":
        shown = sort_by_distance(shown, today)
    return CounterListResponse(
        counters=[CounterResponse.from_counter(c, today) for c in shown],
        stats=CounterStats(**counter_stats(counters)),
    )


@router.get("/featured", response_model=list[CounterResponse])
async def list_featured(
    feed: CounterFeed = Depends(get_feed),
    today: date = Depends(get_today),
):
    """Top public counters by distance from today."""
    counters = await feed.list_counters(public_only=True)
    return [CounterResponse.from_counter(c, today) for c in featured_counters(counters, today)]


@router.get("/{slug}", response_model=CounterResponse)
async def get_counter(
    slug: str,
    feed: CounterFeed = Depends(get_feed),
    today: date = Depends(get_today),
):
    counter = await feed.get_counter(slug)
    return CounterResponse.from_counter(counter, today)


@router.post(
    "", response_model=CounterResponse, status_code=status.HTTP_201_CREATED,
)
async def create_counter(
    body: CounterForm,
    author: str | None = Depends(get_author),
    publisher: CounterPublisher = Depends(get_publisher),
    today: date = Depends(get_today),
):
    counter = await publisher.create_counter(
        author, body.title, body.date, body.visibility,
    )
    return CounterResponse.from_counter(counter, today)


@router.put("/{slug}", response_model=CounterResponse)
async def update_counter(
    slug: str,
    body: CounterForm,
    author: str | None = Depends(get_author),
    publisher: CounterPublisher = Depends(get_publisher),
    today: date = Depends(get_today),
):
    """Publish an edited copy; the response carries the new slug."""
    counter = await publisher.update_counter(
        author, slug, body.title, body.date, body.visibility,
    )
    return CounterResponse.from_counter(counter, today)


@router.delete("/{slug}", response_model=RecordOut)
async def delete_counter(
    slug: str,
    author: str | None = Depends(get_author),
    publisher: CounterPublisher = Depends(get_publisher),
):
    """Publish a deletion marker; returns the marker record."""
    marker = await publisher.delete_counter(author, slug)
    return RecordOut.from_record(marker)
