"""Access router: permission catalog, effective access, menu and org chart."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from hrms_api.constants.permissions import CATEGORY_LABELS, SCOPED_RESOURCES
from hrms_api.dependencies import get_access_service, get_hierarchy_service, get_rbac_service
from hrms_api.models.domain.access import ScopeFilter, ScopeTier
from hrms_api.models.dto.access import (
    EffectiveAccessResponse,
    ManagerAssignRequest,
    MenuResponse,
    OrgChartResponse,
    PermissionResponse,
    PermissionsByCategory,
    RoleAssignRequest,
    RolePermissionsUpdateRequest,
    RoleResponse,
)
from hrms_api.security.catalog import PermissionCatalog, get_permission_catalog
from hrms_api.security.dependencies import get_access_context, require_operation
from hrms_api.services.access_service import AccessContext, AccessService
from hrms_api.services.hierarchy_service import HierarchyService
from hrms_api.services.rbac_service import RbacService

router = APIRouter()


# ============================================================================
# Catalog & effective access
# ============================================================================


@router.get("/permissions", response_model=list[PermissionsByCategory])
async def list_permissions(
    context: Annotated[AccessContext, Depends(require_operation("permissions.list"))],
    catalog: Annotated[PermissionCatalog, Depends(get_permission_catalog)],
) -> list[PermissionsByCategory]:
    """List the permission catalog grouped by category."""
    return [
        PermissionsByCategory(
            category=category,
            label=CATEGORY_LABELS.get(category, category),
            permissions=[PermissionResponse(**definition._asdict()) for definition in definitions],
        )
        for category, definitions in catalog.by_category().items()
    ]


@router.get("/me", response_model=EffectiveAccessResponse)
async def get_my_access(
    context: Annotated[AccessContext, Depends(require_operation("profile.view"))],
) -> EffectiveAccessResponse:
    """Get the caller's effective permissions and scope tiers."""
    principal = context.principal
    scopes = {}
    for resource in SCOPED_RESOURCES:
        tier = context.gate.highest_tier(principal, resource)
        if tier is not None:
            scopes[resource] = tier

    return EffectiveAccessResponse(
        principal_id=principal.id,
        tenant_id=principal.tenant_id,
        is_superadmin=context.role_store.is_super_admin(principal),
        permissions=sorted(context.permissions),
        scopes=scopes,
    )


@router.get("/menu", response_model=MenuResponse)
async def get_menu(
    context: Annotated[AccessContext, Depends(require_operation("profile.view"))],
    access_service: Annotated[AccessService, Depends(get_access_service)],
) -> MenuResponse:
    """Get the navigation menu filtered by the caller's permissions."""
    return MenuResponse(items=access_service.get_menu(context))


@router.get("/scope/{resource}", response_model=ScopeFilter)
async def get_scope(
    resource: str,
    context: Annotated[AccessContext, Depends(get_access_context)],
    scope: ScopeTier | None = None,
) -> ScopeFilter:
    """Resolve the records of a resource the caller may access."""
    if resource not in SCOPED_RESOURCES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    return context.scope(resource, scope)


@router.get("/org-chart", response_model=OrgChartResponse)
async def get_org_chart(
    context: Annotated[AccessContext, Depends(require_operation("orgchart.view"))],
    access_service: Annotated[AccessService, Depends(get_access_service)],
) -> OrgChartResponse:
    """Get the org chart of the caller's company."""
    roots = access_service.get_org_chart(context)
    return OrgChartResponse(roots=roots, total=len(context.directory.active_principals()))


# ============================================================================
# Roles & hierarchy
# ============================================================================


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(
    context: Annotated[AccessContext, Depends(get_access_context)],
    rbac_service: Annotated[RbacService, Depends(get_rbac_service)],
) -> list[RoleResponse]:
    """List the roles of the caller's company."""
    roles = await rbac_service.list_roles(context)
    return [RoleResponse(**role.model_dump()) for role in roles]


@router.put("/roles/{role_id}/permissions", response_model=RoleResponse)
async def update_role_permissions(
    role_id: UUID,
    request: RolePermissionsUpdateRequest,
    context: Annotated[AccessContext, Depends(get_access_context)],
    rbac_service: Annotated[RbacService, Depends(get_rbac_service)],
) -> RoleResponse:
    """Replace the permissions of a role."""
    role = await rbac_service.set_role_permissions(role_id, request.permissions, context)
    return RoleResponse(**role.model_dump())


@router.delete("/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: UUID,
    context: Annotated[AccessContext, Depends(get_access_context)],
    rbac_service: Annotated[RbacService, Depends(get_rbac_service)],
) -> None:
    """Delete a custom role that nobody holds."""
    await rbac_service.delete_role(role_id, context)


@router.post("/principals/{principal_id}/roles", status_code=status.HTTP_204_NO_CONTENT)
async def assign_role(
    principal_id: UUID,
    request: RoleAssignRequest,
    context: Annotated[AccessContext, Depends(get_access_context)],
    rbac_service: Annotated[RbacService, Depends(get_rbac_service)],
) -> None:
    """Assign a role to a principal."""
    await rbac_service.assign_role(principal_id, request.role_id, context)


@router.put("/principals/{principal_id}/manager", status_code=status.HTTP_204_NO_CONTENT)
async def assign_manager(
    principal_id: UUID,
    request: ManagerAssignRequest,
    context: Annotated[AccessContext, Depends(get_access_context)],
    hierarchy_service: Annotated[HierarchyService, Depends(get_hierarchy_service)],
) -> None:
    """Change the manager of a principal."""
    await hierarchy_service.assign_manager(principal_id, request.manager_id, context)
