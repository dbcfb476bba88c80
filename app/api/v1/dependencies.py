"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the session principal, repositories and
application services. Routes depend only on these, not on infra directly.
All repositories in one request share a single transactional session.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.session import SessionPrincipal
from app.application.dtos.user import UserResult
from app.application.interfaces.services import (
    IIdentityProvider,
    IKeyValueStore,
    IUserCache,
)
from app.application.services import (
    OnboardingService,
    SessionResolver,
    TenantAccessService,
    TutorialService,
    UserService,
)
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.identity.clerk import ClerkIdentityProvider
from app.infrastructure.persistence.database import get_db_transactional
from app.infrastructure.persistence.repositories import (
    TenantRepository,
    UserRepository,
)

bearer_scheme = HTTPBearer(auto_error=False)


# ---- Process-wide state (created in create_app / lifespan) ----


def get_user_cache(request: Request) -> IUserCache:
    """The process-wide principal → user snapshot cache."""
    return request.app.state.user_cache


def get_kv_store(request: Request) -> IKeyValueStore:
    """Redis store while it is connected, else the in-process fallback.

    Chosen per request, so a Redis outage after startup moves tutorial
    progress to process memory instead of silently dropping writes.
    """
    redis_cache = getattr(request.app.state, "redis_cache", None)
    if redis_cache is not None and redis_cache.is_available():
        return redis_cache
    return request.app.state.kv_store


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client; created on first use when the lifespan did not run."""
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        client = httpx.AsyncClient(timeout=get_settings().identity_api_timeout_seconds)
        request.app.state.http_client = client
    return client


def get_identity_provider(
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> IIdentityProvider:
    return ClerkIdentityProvider(http_client, get_settings())


# ---- Session principal ----


async def get_principal(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
) -> SessionPrincipal:
    """Principal from the bearer session token; principal_id is None without a token."""
    token = credentials.credentials if credentials else None
    return await identity_provider.get_principal(token)


def get_principal_id(
    principal: Annotated[SessionPrincipal, Depends(get_principal)],
) -> str:
    """Principal ID; raises AuthenticationException when there is no session."""
    if principal.principal_id is None:
        raise AuthenticationException("Login required")
    return principal.principal_id


# ---- Repositories ----


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cache: Annotated[IUserCache, Depends(get_user_cache)],
) -> UserRepository:
    return UserRepository(db, cache=cache)


async def get_tenant_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TenantRepository:
    return TenantRepository(db)


# ---- Application services ----


def get_session_resolver(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    cache: Annotated[IUserCache, Depends(get_user_cache)],
) -> SessionResolver:
    return SessionResolver(
        user_repo,
        cache,
        use_post_link_status=get_settings().session_link_uses_post_link_status,
    )


def get_onboarding_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
    cache: Annotated[IUserCache, Depends(get_user_cache)],
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
) -> OnboardingService:
    return OnboardingService(user_repo, tenant_repo, cache, identity_provider)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserService:
    return UserService(user_repo)


def get_tenant_access_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
) -> TenantAccessService:
    return TenantAccessService(tenant_repo)


def get_tutorial_service(
    store: Annotated[IKeyValueStore, Depends(get_kv_store)],
) -> TutorialService:
    settings = get_settings()
    return TutorialService(
        store,
        storage_key=settings.tutorial_storage_key,
        ttl_seconds=settings.tutorial_state_ttl_seconds,
    )


# ---- Current user ----


async def get_current_user(
    principal: Annotated[SessionPrincipal, Depends(get_principal)],
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
) -> UserResult:
    """Active (non-invited) user behind the session."""
    return await resolver.current_user(principal)


async def get_tenant_user(
    user: Annotated[UserResult, Depends(get_current_user)],
    access: Annotated[TenantAccessService, Depends(get_tenant_access_service)],
) -> UserResult:
    """Current user whose tenant currently allows API access."""
    await access.ensure_access(user)
    return user


PrincipalDep = Annotated[SessionPrincipal, Depends(get_principal)]
PrincipalIdDep = Annotated[str, Depends(get_principal_id)]
CurrentUserDep = Annotated[UserResult, Depends(get_current_user)]
TenantUserDep = Annotated[UserResult, Depends(get_tenant_user)]
