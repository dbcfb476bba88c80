"""User API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole, UserStatus


class UserInviteRequest(BaseModel):
    """Request body for inviting a user into the caller's tenant."""

    email: EmailStr
    name: str = Field(..., min_length=2, max_length=200)
    role: UserRole = UserRole.MEMBER

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class UserResponse(BaseModel):
    """User as seen by the web client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None
    tenant_id: str | None
    role: UserRole
    job_title: str | None
    status: UserStatus

    @classmethod
    def from_result(cls, user: UserResult) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            tenant_id=user.tenant_id,
            role=user.role,
            job_title=user.job_title,
            status=user.status,
        )
