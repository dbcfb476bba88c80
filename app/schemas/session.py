"""Session resolution API schemas."""

from pydantic import BaseModel, Field

from app.application.dtos.session import SessionResolution
from app.domain.enums import RedirectTarget
from app.schemas.user import UserResponse


class SessionResolutionResponse(BaseModel):
    """Routing decision for the requested page."""

    target: RedirectTarget
    redirect_to: str | None = Field(
        default=None, description="Path to redirect to; null when the page may render"
    )
    rule: str = Field(..., description="Name of the rule that decided")
    linked: bool = Field(
        default=False, description="True when this request linked the session to an invite"
    )
    user: UserResponse | None = None

    @classmethod
    def from_resolution(cls, resolution: SessionResolution) -> "SessionResolutionResponse":
        return cls(
            target=resolution.target,
            redirect_to=resolution.redirect_to,
            rule=resolution.rule,
            linked=resolution.linked,
            user=UserResponse.from_result(resolution.user) if resolution.user else None,
        )
