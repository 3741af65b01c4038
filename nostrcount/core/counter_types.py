"""Counter Types: immutable records as received from relays and the counters derived from them.

Invariants:
    - RawRecord is never mutated after construction (tags frozen into tuples)
    - RawRecord fields always hold their declared types: wrongly typed relay values
      (string timestamps, null tag parts, scalar tag lists) are dropped on construction
    - Counter is only constructed by the normalizer, from data that passed validation
    - Counter.slug == Counter.id (edits publish new records with new ids)

Design Decisions:
    - Frozen dataclasses over pydantic in core/: core stays free of framework imports,
      schemas/ converts at the HTTP boundary
"""

from dataclasses import dataclass, field
from typing import Any

from nostrcount.core.domain_types import DEFAULT_FETCH_LIMIT


Tag = tuple[str, ...]


def freeze_tags(tags: Any) -> tuple[Tag, ...]:
    """Convert nested lists into nested tuples of strings.

    Entries that are not lists, or that hold anything but strings, are dropped.
    """
    if not isinstance(tags, (list, tuple)):
        return ()
    frozen: list[Tag] = []
    for tag in tags:
        if isinstance(tag, (list, tuple)) and all(isinstance(p, str) for p in tag):
            frozen.append(tuple(tag))
    return tuple(frozen)


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RawRecord:
    """A record as delivered by the transport layer. Signature assumed pre-verified."""
    id: str
    pubkey: str
    kind: int
    created_at: int | None = None
    content: str = ""
    tags: tuple[Tag, ...] = ()
    sig: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "tags", freeze_tags(self.tags))
        if not isinstance(self.content, str):
            object.__setattr__(self, "content", "")
        if not _is_timestamp(self.created_at):
            object.__setattr__(self, "created_at", None)
        for name in ("id", "pubkey"):
            if not isinstance(getattr(self, name), str):
                object.__setattr__(self, name, "")
        if not _is_timestamp(self.kind):
            object.__setattr__(self, "kind", -1)

    @classmethod
    def from_dict(cls, data: dict) -> "RawRecord":
        """Build from a relay JSON object. Unknown keys are ignored."""
        return cls(
            id=data.get("id", ""),
            pubkey=data.get("pubkey", ""),
            kind=data.get("kind", -1),
            created_at=data.get("created_at"),
            content=data.get("content") or "",
            tags=data.get("tags") or (),
            sig=data.get("sig"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "kind": self.kind,
            "created_at": self.created_at,
            "content": self.content,
            "tags": [list(tag) for tag in self.tags],
            "sig": self.sig,
        }


@dataclass(frozen=True)
class Counter:
    """A current, valid counter reconstructed from one counter record."""
    id: str
    title: str
    date: str
    type: str
    visibility: str
    pubkey: str
    created_at: int
    slug: str

    def to_dict(self) -> dict:
        """Wire shape consumed by the web client (camelCase createdAt)."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "type": self.type,
            "visibility": self.visibility,
            "pubkey": self.pubkey,
            "createdAt": self.created_at,
            "slug": self.slug,
        }


@dataclass(frozen=True)
class RecordDraft:
    """An unsigned record ready to be handed to a RecordSink."""
    kind: int
    content: str
    tags: tuple[Tag, ...]
    created_at: int

    def __post_init__(self):
        object.__setattr__(self, "tags", freeze_tags(self.tags))


@dataclass(frozen=True)
class RecordFilter:
    """Relay query: kinds, optional authors and ids, bounded result count."""
    kinds: tuple[int, ...]
    authors: tuple[str, ...] | None = None
    ids: tuple[str, ...] | None = None
    limit: int | None = DEFAULT_FETCH_LIMIT

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"kinds": list(self.kinds)}
        if self.authors:
            out["authors"] = list(self.authors)
        if self.ids:
            out["ids"] = list(self.ids)
        if self.limit is not None:
            out["limit"] = self.limit
        return out


@dataclass(frozen=True)
class UserProfile:
    """Kind 0 profile metadata. All fields optional except pubkey."""
    pubkey: str
    name: str | None = None
    display_name: str | None = None
    about: str | None = None
    picture: str | None = None
    nip05: str | None = None
    lud16: str | None = None
    lud06: str | None = None
    extra: dict = field(default_factory=dict)
