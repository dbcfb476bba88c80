"""Application lifespan: startup and shutdown.

Wiring of infrastructure only: shared HTTP client, Redis key-value store,
telemetry, DB engine dispose. Process-local state that must exist without
a lifespan (user cache, in-memory fallback store) is created in create_app.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: HTTP client, Redis (if enabled), telemetry (if enabled).
    Shutdown order: HTTP client close, Redis disconnect, telemetry shutdown,
    SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for identity provider calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.identity_api_timeout_seconds
    )

    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.redis_cache = cache
        if not cache.is_available():
            logger.warning("Redis unavailable; tutorial progress kept in process memory")

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import configure_telemetry

        configure_telemetry(app, settings)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    if getattr(app.state, "redis_cache", None) is not None:
        await app.state.redis_cache.disconnect()
        app.state.redis_cache = None

    from app.shared.telemetry.telemetry import get_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()

    from app.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
