"""Record Schemas: raw Nostr records accepted by the ingest endpoint.

Invariants:
    - Only structural validation here (types, 64-char hex ids); content is NOT
      checked: malformed counters must still be storable and skipped on read
"""

from pydantic import BaseModel, Field

from nostrcount.core.counter_types import RawRecord


HEX64 = r"^[0-9a-f]{64}$"


class RecordIn(BaseModel):
    """A record as published by any Nostr client (NIP-01 shape)."""
    id: str = Field(pattern=HEX64)
    pubkey: str = Field(pattern=HEX64)
    kind: int = Field(ge=0, le=65535)
    created_at: int | None = Field(None, ge=0)
    content: str = ""
    tags: list[list[str]] = []
    sig: str | None = None

    def to_record(self) -> RawRecord:
        return RawRecord.from_dict(self.model_dump())


class RecordOut(BaseModel):
    id: str
    pubkey: str
    kind: int
    created_at: int | None
    content: str
    tags: list[list[str]]
    sig: str | None = None

    @classmethod
    def from_record(cls, record: RawRecord) -> "RecordOut":
        return cls(**record.to_dict())


class ProfileResponse(BaseModel):
    pubkey: str
    name: str | None = None
    display_name: str | None = None
    about: str | None = None
    picture: str | None = None
    nip05: str | None = None
    nip05_name: str | None = None
    nip05_domain: str | None = None
    lightning_address: str | None = None
