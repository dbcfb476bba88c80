"""Health check endpoint. No auth or DB; used for liveness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_kv_store
from app.application.interfaces.services import IKeyValueStore
from app.core.config import get_settings
from app.infrastructure.cache.redis_cache import CacheService
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    store: Annotated[IKeyValueStore, Depends(get_kv_store)],
) -> HealthResponse:
    """Return ok plus the backend currently holding tutorial progress."""
    backend = "redis" if isinstance(store, CacheService) else "memory"
    return HealthResponse(version=get_settings().app_version, kv_backend=backend)
