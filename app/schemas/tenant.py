"""Tenant and onboarding API schemas."""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from app.application.dtos.tenant import TenantProfileUpdate, TenantResult
from app.domain.enums import TenantStatus
from app.schemas.user import UserResponse


class TenantResponse(BaseModel):
    """Tenant summary."""

    id: str
    name: str
    slug: str
    status: TenantStatus

    @classmethod
    def from_result(cls, tenant: TenantResult) -> "TenantResponse":
        return cls(id=tenant.id, name=tenant.name, slug=tenant.slug, status=tenant.status)


class SetupRequest(BaseModel):
    """Setup wizard submission: the caller's job title and the tenant profile."""

    job_title: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=2, max_length=120)
    ]
    tenant_name: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=2, max_length=200)
    ]
    primary_color: str | None = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    logo: str | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    address: str | None = Field(default=None, max_length=500)

    def to_profile(self) -> TenantProfileUpdate:
        return TenantProfileUpdate(
            name=self.tenant_name,
            primary_color=self.primary_color,
            logo=self.logo,
            email=self.email,
            phone=self.phone,
            address=self.address,
        )


class OnboardingResponse(BaseModel):
    """Tenant and user after an onboarding write."""

    tenant: TenantResponse
    user: UserResponse
