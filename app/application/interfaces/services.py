"""Service interfaces (ports) for the application layer.

Protocols define contracts for infrastructure services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.session import PublicMetadata, SessionPrincipal


# Identity provider interface
class IIdentityProvider(Protocol):
    """Protocol for the external identity provider (session + profile metadata)."""

    async def get_principal(self, token: str | None) -> SessionPrincipal:
        """Verify the session token and return the principal with email and public metadata.

        Returns a principal with principal_id None when token is None.
        """

    async def update_public_metadata(
        self, principal_id: str, metadata: PublicMetadata
    ) -> None:
        """Merge metadata into the principal's public profile."""


# Key-value store interface (tutorial persistence)
class IKeyValueStore(Protocol):
    """Protocol for JSON key-value persistence (Redis or in-process)."""

    async def get(self, key: str) -> Any:
        """Return stored value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Remove key. Returns True if deleted."""


# User snapshot cache interface
class IUserCache(Protocol):
    """Protocol for the short-lived principal → user snapshot cache."""

    def get(self, key: str) -> Any:
        """Return entry (value, age_ms) or None."""

    def set(self, key: str, value: Any) -> None:
        """Store snapshot with current timestamp."""

    def invalidate(self, key: str) -> None:
        """Remove entry."""

    def is_valid(self, key: str) -> bool:
        """True iff entry exists and is younger than the TTL."""
