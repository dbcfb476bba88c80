"""Onboarding: a member starts their own tenant, an owner finishes setup.

Both writes invalidate the principal's user cache entry so the next session
resolution sees the new tenant/role/job title. Creating a tenant also clears
the identity provider's "needs onboarding" flag; that sync is best-effort and
never fails the request.
"""

from __future__ import annotations

import logging
import re

from app.application.dtos.session import PublicMetadata
from app.application.dtos.tenant import TenantProfileUpdate, TenantResult
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import ITenantRepository, IUserRepository
from app.application.interfaces.services import IIdentityProvider, IUserCache
from app.core.constants import DEFAULT_TENANT_NAME
from app.domain.enums import UserRole
from app.domain.exceptions import AuthorizationException, ValidationException
from app.shared.utils.datetime import epoch_ms

logger = logging.getLogger(__name__)

_SLUG_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def build_tenant_slug(email: str, now_ms: int | None = None) -> str:
    """Slug from the email local part plus a millisecond timestamp (unique enough per user)."""
    local = email.split("@")[0]
    stamp = now_ms if now_ms is not None else epoch_ms()
    return f"{_SLUG_UNSAFE.sub('-', local).lower()}-{stamp}"


class OnboardingService:
    """Tenant creation for members and setup completion for owners."""

    def __init__(
        self,
        user_repo: IUserRepository,
        tenant_repo: ITenantRepository,
        cache: IUserCache,
        identity_provider: IIdentityProvider | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._tenant_repo = tenant_repo
        self._cache = cache
        self._identity_provider = identity_provider

    async def create_tenant_for_user(self, user: UserResult) -> tuple[TenantResult, UserResult]:
        """Create an ACTIVE tenant and make user its OWNER.

        Caller must run this within a single DB transaction.

        Raises:
            AuthorizationException: If user already has company access (role other than MEMBER).
        """
        if user.role != UserRole.MEMBER:
            raise AuthorizationException(
                message="User already has company access",
            )
        tenant = await self._tenant_repo.create_tenant(
            name=DEFAULT_TENANT_NAME,
            slug=build_tenant_slug(user.email),
        )
        updated = await self._user_repo.assign_tenant(user.id, tenant.id, UserRole.OWNER)
        logger.info("Created tenant %s for user %s", tenant.id, user.id)
        if user.principal_id:
            await self._sync_identity_metadata(
                user.principal_id,
                PublicMetadata(
                    needs_onboarding=False,
                    tenant_id=tenant.id,
                    role=UserRole.OWNER.value,
                    db_user_id=user.id,
                ),
            )
            self._cache.invalidate(user.principal_id)
        return tenant, updated

    async def complete_setup(
        self,
        user: UserResult,
        job_title: str,
        profile: TenantProfileUpdate,
    ) -> tuple[TenantResult, UserResult]:
        """Write the job title and tenant profile from the setup wizard.

        Allowed for elevated roles, and for anyone whose job title is still
        unset (initial setup).

        Raises:
            AuthorizationException: If a non-elevated user already has a job title.
            ValidationException: If user has no tenant.
        """
        if not user.role.is_elevated and user.job_title:
            raise AuthorizationException(resource="tenant", action="setup")
        if user.tenant_id is None:
            raise ValidationException("User has no tenant", field="tenant_id")
        updated_user = await self._user_repo.set_job_title(user.id, job_title)
        tenant = await self._tenant_repo.update_profile(user.tenant_id, profile)
        if user.principal_id:
            self._cache.invalidate(user.principal_id)
        return tenant, updated_user

    async def _sync_identity_metadata(
        self, principal_id: str, metadata: PublicMetadata
    ) -> None:
        """Push metadata to the identity provider; failures are logged and swallowed."""
        if self._identity_provider is None:
            return
        try:
            await self._identity_provider.update_public_metadata(principal_id, metadata)
        except Exception:
            logger.warning(
                "Identity metadata sync failed for principal %s", principal_id, exc_info=True
            )
