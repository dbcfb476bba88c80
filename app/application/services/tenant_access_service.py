"""Tenant access check for protected API operations."""

from __future__ import annotations

from app.application.dtos.tenant import TenantResult
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import ITenantRepository
from app.domain.enums import TenantStatus, UserRole
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    TenantAccessDeniedException,
    TenantNotFoundException,
)

_DENIED_MESSAGES: dict[TenantStatus, str] = {
    TenantStatus.PENDING_ACTIVATION: "Account pending activation. Please complete payment.",
    TenantStatus.SUSPENDED: "Account suspended. Please contact support.",
    TenantStatus.CANCELED: "Subscription canceled",
}


class TenantAccessService:
    """Require a user whose tenant is ACTIVE (platform admins bypass)."""

    def __init__(self, tenant_repo: ITenantRepository) -> None:
        self._tenant_repo = tenant_repo

    async def ensure_access(self, user: UserResult | None) -> TenantResult | None:
        """Return the user's tenant when access is allowed.

        Tenant status is always read from the data store so suspension takes
        effect immediately. Returns None for ADMIN_SAAS users.

        Raises:
            AuthenticationException: If there is no user.
            AuthorizationException: If user has no tenant.
            TenantNotFoundException: If the tenant row is missing.
            TenantAccessDeniedException: If tenant status is not ACTIVE.
        """
        if user is None:
            raise AuthenticationException("Login required")
        if user.role == UserRole.ADMIN_SAAS:
            return None
        if user.tenant_id is None:
            raise AuthorizationException(message="No tenant assigned")
        tenant = await self._tenant_repo.get_by_id(user.tenant_id)
        if tenant is None:
            raise TenantNotFoundException(user.tenant_id)
        message = _DENIED_MESSAGES.get(tenant.status)
        if message is not None:
            raise TenantAccessDeniedException(tenant.id, tenant.status.value, message)
        return tenant
