"""Domain enumerations for Filmtech OS.

Enums represent fixed sets of domain values (user role and status,
tenant status, session routing outcome).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Role of a user inside a tenant (ADMIN_SAAS is platform-wide)."""

    ADMIN_SAAS = "ADMIN_SAAS"
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"

    @property
    def is_elevated(self) -> bool:
        """True for roles authorized to complete tenant setup (owner, platform admin)."""
        return self in (UserRole.OWNER, UserRole.ADMIN_SAAS)


class UserStatus(_ValuesMixin, str, Enum):
    """User lifecycle status.

    INVITED users exist before the person signs in; linking a principal
    moves them to ACTIVE.
    """

    INVITED = "INVITED"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class TenantStatus(_ValuesMixin, str, Enum):
    """Tenant lifecycle status. Only ACTIVE tenants accept API traffic."""

    PENDING_ACTIVATION = "PENDING_ACTIVATION"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    CANCELED = "CANCELED"


class RedirectTarget(_ValuesMixin, str, Enum):
    """Outcome of session resolution: proceed, or where to send the principal."""

    PROCEED = "proceed"
    SIGN_IN = "sign_in"
    WELCOME = "welcome"
    SETUP = "setup"
    AWAITING_INVITE = "awaiting_invite"
    DASHBOARD = "dashboard"


class GuardedPage(_ValuesMixin, str, Enum):
    """Pages whose layouts run session resolution before rendering."""

    DASHBOARD = "dashboard"
    WELCOME = "welcome"
    SETUP = "setup"
