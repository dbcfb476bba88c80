"""User ORM model. principal_id links the row to the identity provider subject."""

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import UserRole, UserStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidTimestampModel
from app.infrastructure.persistence.models.tenant import _in_values


class User(CuidTimestampModel, Base):
    """User model. Table: app_user. principal_id is unique when set; tenant_id is optional."""

    __tablename__ = "app_user"

    principal_id: Mapped[str | None] = mapped_column(
        String, unique=True, nullable=True, index=True
    )
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    tenant_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("tenant.id", ondelete="SET NULL"), nullable=True, index=True
    )
    role: Mapped[str] = mapped_column(
        String, nullable=False, default=UserRole.MEMBER.value
    )
    job_title: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=UserStatus.ACTIVE.value
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_app_user_tenant_email"),
        CheckConstraint(_in_values("role", UserRole.values()), name="user_role_check"),
        CheckConstraint(
            _in_values("status", UserStatus.values()), name="user_status_check"
        ),
    )
