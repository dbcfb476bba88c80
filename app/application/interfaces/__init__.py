"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    ITenantRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IIdentityProvider,
    IKeyValueStore,
    IUserCache,
)

__all__ = [
    "IIdentityProvider",
    "IKeyValueStore",
    "ITenantRepository",
    "IUserCache",
    "IUserRepository",
]
