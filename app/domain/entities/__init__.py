"""Domain entities and value types."""

from app.domain.entities.tutorial import (
    TUTORIAL_STEPS,
    TutorialAction,
    TutorialActionType,
    TutorialState,
)

__all__ = [
    "TUTORIAL_STEPS",
    "TutorialAction",
    "TutorialActionType",
    "TutorialState",
]
