"""Access control DTOs."""

from uuid import UUID

from pydantic import BaseModel, Field

from hrms_api.models.domain.access import ScopeTier
from hrms_api.models.domain.menu import MenuItem
from hrms_api.models.domain.org_chart import OrgChartNode


class PermissionResponse(BaseModel):
    """Permission response DTO."""

    code: str
    name: str
    description: str | None = None
    category: str


class PermissionsByCategory(BaseModel):
    """Permissions grouped by category."""

    category: str
    label: str
    permissions: list[PermissionResponse]


class EffectiveAccessResponse(BaseModel):
    """The caller's effective access."""

    principal_id: UUID
    tenant_id: UUID
    is_superadmin: bool
    permissions: list[str]
    # Broadest tier held per scoped resource
    scopes: dict[str, ScopeTier] = Field(default_factory=dict)


class MenuResponse(BaseModel):
    """Navigation menu filtered for the caller."""

    items: list[MenuItem]


class OrgChartResponse(BaseModel):
    """Org chart forest of the caller's tenant."""

    roots: list[OrgChartNode]
    total: int


class ManagerAssignRequest(BaseModel):
    """Manager reassignment request; null clears the manager."""

    manager_id: UUID | None = None


class RolePermissionsUpdateRequest(BaseModel):
    """Role permission replacement request."""

    permissions: list[str] = Field(max_length=500)


class RoleAssignRequest(BaseModel):
    """Role assignment request."""

    role_id: UUID


class RoleResponse(BaseModel):
    """Role response DTO."""

    id: UUID
    code: str
    name: str
    description: str | None = None
    is_system: bool
    tenant_id: UUID | None = None
    permissions: list[str]
