"""Role ORM model."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class RoleORM(Base, UUIDMixin, TimestampMixin):
    """Role database model."""

    __tablename__ = "roles"

    # NULL for global system roles shared by every company
    tenant_id: Mapped[UUID | None] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    permissions: Mapped[list["PermissionORM"]] = relationship(
        "PermissionORM",
        secondary="role_permissions",
        back_populates="roles",
    )
    principals: Mapped[list["PrincipalORM"]] = relationship(
        "PrincipalORM",
        secondary="user_roles",
        back_populates="roles",
        primaryjoin="RoleORM.id == user_roles.c.role_id",
        secondaryjoin="PrincipalORM.id == user_roles.c.user_id",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "code", name="uq_roles_tenant_code"),
        # NULLs never collide in the constraint above
        Index(
            "uq_roles_global_code",
            "code",
            unique=True,
            postgresql_where=text("tenant_id IS NULL"),
        ),
    )
