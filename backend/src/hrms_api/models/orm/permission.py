"""Permission ORM model."""

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin

# resource.action, lower case
PERMISSION_CODE_PATTERN = r"^[a-z][a-z_]*\.[a-z][a-z_]*$"


class PermissionORM(Base, UUIDMixin, TimestampMixin):
    """Row mirroring one catalog permission.

    Rows are written by the permission sync on startup. ``category`` is the
    resource part of the code and only groups permissions for display.
    """

    __tablename__ = "permissions"

    code: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    roles: Mapped[list["RoleORM"]] = relationship(
        "RoleORM",
        secondary="role_permissions",
        back_populates="permissions",
    )

    __table_args__ = (
        CheckConstraint(f"code ~ '{PERMISSION_CODE_PATTERN}'", name="ck_permissions_code_format"),
    )
