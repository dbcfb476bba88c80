"""Domain layer: tutorial state machine, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import TutorialAction, TutorialActionType, TutorialState
from app.domain.enums import (
    GuardedPage,
    RedirectTarget,
    TenantStatus,
    UserRole,
    UserStatus,
)
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    FilmtechException,
    IdentityProviderException,
    ResourceNotFoundException,
    TenantAccessDeniedException,
    TenantNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)

__all__ = [
    # Entities
    "TutorialAction",
    "TutorialActionType",
    "TutorialState",
    # Enums
    "GuardedPage",
    "RedirectTarget",
    "TenantStatus",
    "UserRole",
    "UserStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "FilmtechException",
    "IdentityProviderException",
    "ResourceNotFoundException",
    "TenantAccessDeniedException",
    "TenantNotFoundException",
    "UserAlreadyExistsException",
    "ValidationException",
]
