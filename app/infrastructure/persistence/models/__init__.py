"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    CuidTimestampModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.tenant import Tenant
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "CuidTimestampModel",
    "Tenant",
    "TimestampMixin",
    "User",
]
