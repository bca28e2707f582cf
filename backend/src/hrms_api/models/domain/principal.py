"""Principal domain model."""

from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from hrms_api.constants.roles import LegacyRoleCode


class LegacyRole(BaseModel):
    """Role reference through the fixed legacy enum."""

    kind: Literal["legacy"] = "legacy"
    code: LegacyRoleCode


class AssignedRole(BaseModel):
    """Role reference through the roles table."""

    kind: Literal["assigned"] = "assigned"
    role_id: UUID


RoleRef = Annotated[LegacyRole | AssignedRole, Field(discriminator="kind")]


class Principal(BaseModel):
    """Authenticated actor subject to authorization decisions.

    A principal migrated from the legacy role enum may carry both a legacy and
    an assigned role reference; both are honored.
    """

    id: UUID
    tenant_id: UUID
    is_active: bool = True
    # Only platform operators are exempt from tenant isolation
    is_platform_admin: bool = False
    manager_id: UUID | None = None
    roles: list[RoleRef] = []
    permission_overrides: list[str] = []

    # Display attributes (org chart)
    full_name: str = ""
    email: EmailStr | None = None
    position: str | None = None
    department: str | None = None
    profile_photo_url: str | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
