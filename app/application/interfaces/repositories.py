"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from app.domain.enums import UserRole

if TYPE_CHECKING:
    from app.application.dtos.tenant import TenantProfileUpdate, TenantResult
    from app.application.dtos.user import UserInvite, UserResult


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_principal_id(self, principal_id: str) -> UserResult | None:
        """Return user linked to the identity-provider subject."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return the oldest unlinked user with this contact address.

        Case-insensitive, across tenants.
        """

    async def get_by_email_and_tenant(
        self, email: str, tenant_id: str
    ) -> UserResult | None:
        """Return user with this contact address in the tenant."""

    async def link_principal(self, user_id: str, principal_id: str) -> UserResult:
        """Set principal_id and status ACTIVE; return the updated user."""

    async def count(self) -> int:
        """Return total number of users in the system."""

    async def create_invited(self, tenant_id: str, invite: UserInvite) -> UserResult:
        """Create a user in status INVITED for the tenant."""

    async def assign_tenant(
        self, user_id: str, tenant_id: str, role: UserRole
    ) -> UserResult:
        """Attach user to tenant with role and status ACTIVE."""

    async def set_job_title(self, user_id: str, job_title: str) -> UserResult:
        """Set job title (marks setup as completed for elevated roles)."""


# Tenant repository interface
class ITenantRepository(Protocol):
    """Protocol for tenant repository (DIP)."""

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by ID."""

    async def create_tenant(self, name: str, slug: str) -> TenantResult:
        """Create an ACTIVE tenant."""

    async def update_profile(
        self, tenant_id: str, profile: TenantProfileUpdate
    ) -> TenantResult:
        """Write setup-wizard profile fields."""
