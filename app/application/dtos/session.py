"""DTOs for session resolution (principal in, routing decision out)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.application.dtos.user import UserResult
from app.core.constants import (
    PATH_AWAITING_INVITE,
    PATH_DASHBOARD,
    PATH_SETUP,
    PATH_SIGN_IN,
    PATH_WELCOME,
)
from app.domain.enums import RedirectTarget

_TARGET_PATHS: dict[RedirectTarget, str | None] = {
    RedirectTarget.PROCEED: None,
    RedirectTarget.SIGN_IN: PATH_SIGN_IN,
    RedirectTarget.WELCOME: PATH_WELCOME,
    RedirectTarget.SETUP: PATH_SETUP,
    RedirectTarget.AWAITING_INVITE: PATH_AWAITING_INVITE,
    RedirectTarget.DASHBOARD: PATH_DASHBOARD,
}


@dataclass(frozen=True)
class PublicMetadata:
    """Public profile flags the identity provider carries for a principal."""

    needs_onboarding: bool | None = None
    tenant_id: str | None = None
    role: str | None = None
    db_user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> PublicMetadata:
        """Build from the provider's camelCase public_metadata object (unknown keys ignored)."""
        data = data or {}
        needs = data.get("needsOnboarding")
        return cls(
            needs_onboarding=needs if isinstance(needs, bool) else None,
            tenant_id=data.get("tenantId"),
            role=data.get("role"),
            db_user_id=data.get("dbUserId"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Provider wire shape; None values are omitted."""
        out = {
            "needsOnboarding": self.needs_onboarding,
            "tenantId": self.tenant_id,
            "role": self.role,
            "dbUserId": self.db_user_id,
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass(frozen=True)
class SessionPrincipal:
    """Authenticated principal as seen by the resolver.

    principal_id is None when the request carries no session.
    """

    principal_id: str | None
    email: str | None = None
    public_metadata: PublicMetadata = field(default_factory=PublicMetadata)


@dataclass(frozen=True)
class SessionResolution:
    """Routing decision plus the rule that produced it."""

    target: RedirectTarget
    rule: str
    user: UserResult | None = None
    linked: bool = False

    @property
    def redirect_to(self) -> str | None:
        """Path to redirect to, or None when the request may proceed."""
        return _TARGET_PATHS[self.target]
