"""SkillBridge API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SkillBridgeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager created on startup, disposed with the price client on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - init_db does not handshake: the first request connects through
      DatabaseSessionManager.connect(), so the app boots with the database down
      and onboarding reads can still serve mock records
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillbridge.api.error_handlers import register_error_handlers
from skillbridge.api.routes import (
    blockchain_connections, funding, health, ledger, marketplace, onboarding,
)
from skillbridge.config import get_settings
from skillbridge.infrastructure.database import init_db
from skillbridge.infrastructure.observability import register_access_log, setup_logging
from skillbridge.infrastructure.price_client import close_price_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        max_attempts=settings.database_connect_max_attempts,
        retry_delay_ms=settings.database_connect_retry_delay_ms,
    )
    logger.info("SkillBridge API started")
    yield
    logger.info("SkillBridge API shutting down")
    await close_price_client()
    await manager.dispose()


app = FastAPI(
    title="SkillBridge API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(onboarding.router)
app.include_router(funding.router)
app.include_router(marketplace.router)
app.include_router(blockchain_connections.router)
app.include_router(ledger.router)

register_access_log(app)
register_error_handlers(app)
