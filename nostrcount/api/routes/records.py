"""Record Ingest: accepts records published by other Nostr clients.

Invariants:
    - Records are stored as-is; interpretation happens on read
    - Ids are trusted (signature and id verification belong to the transport)
"""

import logging

from fastapi import APIRouter, Depends, status

from nostrcount.infrastructure.memory_relay import MemoryRelay, get_relay
from nostrcount.schemas.records import RecordIn, RecordOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/records", tags=["records"])


@router.post("", response_model=RecordOut, status_code=status.HTTP_201_CREATED)
async def ingest_record(body: RecordIn, relay: MemoryRelay = Depends(get_relay)):
    record = await relay.ingest(body.to_record())
    return RecordOut.from_record(record)
