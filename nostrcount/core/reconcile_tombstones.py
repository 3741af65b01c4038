"""Tombstone Reconciliation: which counter records have been deleted (NIP-09).

Invariants:
    - Only `a` tags of the exact form "30078:<id>" are honored
    - References that split into more or fewer than two parts are ignored
    - Markers that are not deletion records contribute nothing
"""

from typing import Iterable

from nostrcount.core.counter_types import RawRecord
from nostrcount.core.domain_types import RecordKind


REFERENCE_TAG: str = "a"


def counter_reference(record_id: str) -> str:
    """Composite reference used by deletion markers: "30078:<id>"."""
    return f"{int(RecordKind.COUNTER)}:{record_id}"


def parse_counter_reference(value: str) -> str | None:
    """Referenced counter id, or None when the reference targets something else."""
    parts = value.split(":")
    if len(parts) != 2 or parts[0] != str(int(RecordKind.COUNTER)):
        return None
    return parts[1]


def compute_deleted_ids(deletion_markers: Iterable[RawRecord] | None) -> set[str]:
    """Ids of counter records referenced by any deletion marker."""
    deleted: set[str] = set()
    for marker in deletion_markers or ():
        if marker.kind != RecordKind.DELETION:
            continue
        for tag in marker.tags:
            if len(tag) < 2 or tag[0] != REFERENCE_TAG or not tag[1]:
                continue
            record_id = parse_counter_reference(tag[1])
            if record_id is not None:
                deleted.add(record_id)
    return deleted
