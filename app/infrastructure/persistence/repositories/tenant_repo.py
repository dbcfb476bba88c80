"""Tenant repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.tenant import TenantProfileUpdate, TenantResult
from app.domain.enums import TenantStatus
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.repositories.base import BaseRepository


def _tenant_to_result(t: Tenant) -> TenantResult:
    """Map ORM Tenant to application TenantResult."""
    return TenantResult(
        id=t.id,
        name=t.name,
        slug=t.slug,
        status=TenantStatus(t.status),
        subscription_id=t.subscription_id,
    )


class TenantRepository(BaseRepository[Tenant]):
    """Tenant repository: lookup, creation and setup-wizard profile writes."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    def _get_entity_type(self) -> str:
        return "tenant"

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        tenant = await self.get_entity(tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def create_tenant(
        self,
        name: str,
        slug: str,
        status: TenantStatus = TenantStatus.ACTIVE,
    ) -> TenantResult:
        tenant = Tenant(name=name, slug=slug, status=status.value)
        created = await self.create(tenant)
        return _tenant_to_result(created)

    async def update_profile(
        self, tenant_id: str, profile: TenantProfileUpdate
    ) -> TenantResult:
        """Write profile fields; empty email is stored as NULL."""
        tenant = await self.require_entity(tenant_id)
        tenant.name = profile.name
        tenant.primary_color = profile.primary_color
        tenant.logo = profile.logo
        tenant.email = profile.email or None
        tenant.phone = profile.phone
        tenant.address = profile.address
        updated = await self.update(tenant)
        return _tenant_to_result(updated)
