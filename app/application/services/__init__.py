"""Application services: session resolution, onboarding, invitations, tutorial."""

from app.application.services.onboarding_service import OnboardingService
from app.application.services.session_resolver import (
    PAGE_RULES,
    RedirectRule,
    SessionResolver,
)
from app.application.services.tenant_access_service import TenantAccessService
from app.application.services.tutorial_service import TutorialService
from app.application.services.user_service import UserService

__all__ = [
    "OnboardingService",
    "PAGE_RULES",
    "RedirectRule",
    "SessionResolver",
    "TenantAccessService",
    "TutorialService",
    "UserService",
]
