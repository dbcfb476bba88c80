"""DTOs for tenant use cases (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import TenantStatus


@dataclass(frozen=True)
class TenantResult:
    """Tenant read-model (result of get_by_id, create_tenant, etc.)."""

    id: str
    name: str
    slug: str
    status: TenantStatus
    subscription_id: str | None = None


@dataclass(frozen=True)
class TenantProfileUpdate:
    """Tenant profile fields written by the setup wizard."""

    name: str
    primary_color: str | None = None
    logo: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
