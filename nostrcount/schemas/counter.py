"""Counter Schemas: Pydantic models with field-level validation for API boundaries.

Invariants:
    - CounterForm.title: 2-100 chars after stripping, same bounds the normalizer enforces
    - CounterForm.date: a real calendar date in YYYY-MM-DD form
    - CounterForm.type is accepted for client compatibility but never published as sent
    - Responses use camelCase createdAt, the shape web clients already consume
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nostrcount.core.counter_types import Counter
from nostrcount.core.date_display import (
    calculate_days_diff, format_date, format_duration, is_date_valid,
)
from nostrcount.core.domain_types import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH
from nostrcount.core.normalize_counter import title_length


class CounterForm(BaseModel):
    """Create/edit payload."""
    title: str
    date: str
    type: Literal["since", "until"] | None = None  # ignored: derived from date
    visibility: Literal["public", "private"] = "public"

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not TITLE_MIN_LENGTH <= title_length(v) <= TITLE_MAX_LENGTH:
            raise ValueError(
                f"title must be {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters",
            )
        return v

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        if not is_date_valid(v):
            raise ValueError("date must be a valid YYYY-MM-DD calendar date")
        return v


class CounterResponse(BaseModel):
    """Public-facing counter plus display fields computed for `today`."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: str
    type: str
    visibility: str
    pubkey: str
    created_at: int = Field(serialization_alias="createdAt")
    slug: str
    days: int | None = None
    duration: str | None = None
    formatted_date: str | None = Field(None, serialization_alias="formattedDate")

    @classmethod
    def from_counter(cls, counter: Counter, today: date) -> "CounterResponse":
        try:
            days = calculate_days_diff(counter.date, counter.type, today)
            formatted = format_date(counter.date)
        except ValueError:
            # shape-valid dates such as 2024-13-45 still reach the feed
            days, formatted = None, None
        return cls(
            id=counter.id,
            title=counter.title,
            date=counter.date,
            type=counter.type,
            visibility=counter.visibility,
            pubkey=counter.pubkey,
            created_at=counter.created_at,
            slug=counter.slug,
            days=days,
            duration=format_duration(days) if days is not None else None,
            formatted_date=formatted,
        )


class CounterStats(BaseModel):
    total: int
    since: int
    until: int


class CounterListResponse(BaseModel):
    counters: list[CounterResponse]
    stats: CounterStats
