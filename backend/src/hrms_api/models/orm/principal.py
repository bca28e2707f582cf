"""Principal (user) ORM model."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class PrincipalORM(Base, UUIDMixin, TimestampMixin):
    """User database model as seen by access control."""

    __tablename__ = "users"

    tenant_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_platform_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Legacy enum role, kept alongside assigned roles during the migration
    legacy_role: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # Ad-hoc grants on top of roles
    permission_overrides: Mapped[list[str]] = mapped_column(
        ARRAY(String(100)), default=list, nullable=False
    )

    # Display attributes
    position_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Self-referential reporting line; not guaranteed acyclic
    manager_id: Mapped[UUID | None] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    roles: Mapped[list["RoleORM"]] = relationship(
        "RoleORM",
        secondary="user_roles",
        back_populates="principals",
        primaryjoin="PrincipalORM.id == user_roles.c.user_id",
        secondaryjoin="RoleORM.id == user_roles.c.role_id",
    )

    __table_args__ = (
        Index("idx_users_tenant_id", "tenant_id"),
        Index("idx_users_manager_id", "manager_id"),
        Index("idx_users_tenant_active", "tenant_id", "is_active"),
    )
