"""Identity provider adapters."""

from app.infrastructure.identity.clerk import ClerkIdentityProvider, primary_email

__all__ = ["ClerkIdentityProvider", "primary_email"]
