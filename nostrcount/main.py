"""NostrCount API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NostrCountError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Relay initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nostrcount.api.error_handlers import register_error_handlers
from nostrcount.api.routes import counters, health, profiles, records
from nostrcount.config import get_settings
from nostrcount.infrastructure.memory_relay import init_relay
from nostrcount.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    relay = init_relay(settings.seed_records_path)
    logger.info(f"NostrCount API started with {len(relay)} seeded record(s)")
    yield
    await relay.close()
    logger.info("NostrCount API shutting down")


app = FastAPI(
    title="NostrCount API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(counters.router)
app.include_router(records.router)
app.include_router(profiles.router)

register_error_handlers(app)
