"""Application layer: DTOs, interfaces (ports) and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, cache, identity provider).
"""

from app.application.interfaces import (
    IIdentityProvider,
    IKeyValueStore,
    ITenantRepository,
    IUserCache,
    IUserRepository,
)
from app.application.services import (
    OnboardingService,
    SessionResolver,
    TenantAccessService,
    TutorialService,
    UserService,
)

__all__ = [
    "IIdentityProvider",
    "IKeyValueStore",
    "ITenantRepository",
    "IUserCache",
    "IUserRepository",
    "OnboardingService",
    "SessionResolver",
    "TenantAccessService",
    "TutorialService",
    "UserService",
]
