"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.session import SessionResolutionResponse
from app.schemas.tenant import OnboardingResponse, SetupRequest, TenantResponse
from app.schemas.tutorial import TutorialActionRequest, TutorialStateResponse
from app.schemas.user import UserInviteRequest, UserResponse

__all__ = [
    "HealthResponse",
    "OnboardingResponse",
    "SessionResolutionResponse",
    "SetupRequest",
    "TenantResponse",
    "TutorialActionRequest",
    "TutorialStateResponse",
    "UserInviteRequest",
    "UserResponse",
]
