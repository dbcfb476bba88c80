"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.enums import UserRole, UserStatus


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of lookups, link and onboarding writes).

    Frozen so it can be shared as a cache snapshot across requests.
    """

    id: str
    principal_id: str | None
    email: str
    name: str
    tenant_id: str | None
    role: UserRole
    job_title: str | None
    status: UserStatus


@dataclass(frozen=True)
class UserInvite:
    """Input for inviting a person into the inviter's tenant."""

    email: str
    name: str
    role: UserRole
