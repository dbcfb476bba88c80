"""Application DTOs (no ORM dependency)."""

from app.application.dtos.session import (
    PublicMetadata,
    SessionPrincipal,
    SessionResolution,
)
from app.application.dtos.tenant import TenantProfileUpdate, TenantResult
from app.application.dtos.user import UserInvite, UserResult

__all__ = [
    "PublicMetadata",
    "SessionPrincipal",
    "SessionResolution",
    "TenantProfileUpdate",
    "TenantResult",
    "UserInvite",
    "UserResult",
]
