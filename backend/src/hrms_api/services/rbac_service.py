"""RBAC service for role maintenance and role assignment."""

import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.exceptions import (
    CannotDeleteSystemRoleError,
    CannotModifySystemRoleError,
    PrincipalNotFoundError,
    RoleInUseError,
    RoleNotFoundError,
    TenantMismatchError,
    UnknownPermissionError,
)
from hrms_api.models.domain.role import Role
from hrms_api.models.orm.role import RoleORM
from hrms_api.repositories.permission_repository import PermissionRepository
from hrms_api.repositories.principal_repository import PrincipalRepository
from hrms_api.repositories.role_repository import RoleRepository
from hrms_api.security.catalog import PermissionCatalog, get_permission_catalog
from hrms_api.services.access_service import AccessContext, role_from_orm
from hrms_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


class RbacService:
    """Service for RBAC write operations.

    Each method authorizes the acting principal through its access context
    once the target record, and therefore its tenant, is known.
    """

    def __init__(self, session: AsyncSession, catalog: PermissionCatalog | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.role_repo = RoleRepository(session)
        self.permission_repo = PermissionRepository(session)
        self.principal_repo = PrincipalRepository(session)
        self.catalog = catalog or get_permission_catalog()

    async def _get_role(self, role_id: UUID, context: AccessContext, operation: str) -> RoleORM:
        context.require_operation(operation)
        role = await self.role_repo.get_with_permissions(role_id)
        if role is None:
            raise RoleNotFoundError(str(role_id))
        context.require_visible(operation, role.tenant_id, RoleNotFoundError(str(role_id)))
        return role

    async def list_roles(self, context: AccessContext) -> list[Role]:
        """List the roles visible to the caller's tenant."""
        context.require_operation("roles.list")
        roles = await self.role_repo.get_all_for_tenant(context.principal.tenant_id)
        return [role_from_orm(role) for role in roles]

    async def delete_role(self, role_id: UUID, context: AccessContext) -> None:
        """Delete a custom role.

        Args:
            role_id: Role ID to delete
            context: Access context of the acting principal

        Raises:
            RoleNotFoundError: If role not found or owned by another tenant
            AccessDeniedError: If the caller may not delete roles
            CannotDeleteSystemRoleError: If role is a system role
            RoleInUseError: If principals still hold the role
        """
        role = await self._get_role(role_id, context, "roles.delete")

        if role.is_system:
            raise CannotDeleteSystemRoleError(role.code)

        principal_count = await self.role_repo.count_principals_with_role(role_id)
        if principal_count > 0:
            raise RoleInUseError(role.code, principal_count)

        await self.role_repo.delete(role)
        await self.session.commit()

        log_security_event(
            SecurityEventType.ROLE_DELETED,
            principal_id=context.principal.id,
            tenant_id=context.principal.tenant_id,
            target_id=role_id,
            target_tenant_id=role.tenant_id,
            details={"role_code": role.code},
        )

    async def set_role_permissions(
        self,
        role_id: UUID,
        codes: Iterable[str],
        context: AccessContext,
    ) -> Role:
        """Replace the permissions of a role.

        Args:
            role_id: Role to update
            codes: New permission codes
            context: Access context of the acting principal

        Returns:
            Updated role

        Raises:
            UnknownPermissionError: If a code is not part of the catalog
            RoleNotFoundError: If role not found or owned by another tenant
            AccessDeniedError: If the caller may not edit roles
            CannotModifySystemRoleError: If a tenant edits a system role
        """
        wanted = sorted(set(codes))
        self.catalog.validate(wanted)

        role = await self._get_role(role_id, context, "roles.write")

        # System roles are shared; only a platform operator may reshape them
        if role.is_system and not context.gate.is_tenant_exempt(context.principal):
            raise CannotModifySystemRoleError(role.code)

        permissions = await self.permission_repo.get_by_codes(wanted)
        missing = set(wanted) - {perm.code for perm in permissions}
        if missing:
            # Catalog code not yet synced to the permissions table
            raise UnknownPermissionError(missing)

        previous = {perm.code for perm in role.permissions}
        await self.role_repo.set_permissions(role.id, [perm.id for perm in permissions])
        await self.session.commit()

        log_security_event(
            SecurityEventType.ROLE_PERMISSIONS_CHANGED,
            principal_id=context.principal.id,
            tenant_id=context.principal.tenant_id,
            target_id=role.id,
            target_tenant_id=role.tenant_id,
            details={
                "role_code": role.code,
                "added": sorted(set(wanted) - previous),
                "removed": sorted(previous - set(wanted)),
            },
        )

        return Role(
            id=role.id,
            code=role.code,
            name=role.name,
            description=role.description,
            is_system=role.is_system,
            tenant_id=role.tenant_id,
            permissions=wanted,
        )

    async def assign_role(
        self,
        principal_id: UUID,
        role_id: UUID,
        context: AccessContext,
    ) -> bool:
        """Assign a role to a principal.

        Args:
            principal_id: Principal receiving the role
            role_id: Role to assign
            context: Access context of the acting principal

        Returns:
            False if the principal already held the role

        Raises:
            PrincipalNotFoundError: If the principal does not exist in a visible tenant
            AccessDeniedError: If the caller may not assign roles
            RoleNotFoundError: If role not found in a visible tenant
            TenantMismatchError: If a tenant-exempt caller links two tenants
        """
        operation = "users.assign_role"
        context.require_operation(operation)

        principal = await self.principal_repo.get_by_id(principal_id)
        if principal is None:
            raise PrincipalNotFoundError(str(principal_id))
        context.require_visible(
            operation, principal.tenant_id, PrincipalNotFoundError(str(principal_id))
        )

        role = await self.role_repo.get_by_id(role_id)
        if role is None:
            raise RoleNotFoundError(str(role_id))
        context.require_visible(operation, role.tenant_id, RoleNotFoundError(str(role_id)))
        if role.tenant_id is not None and role.tenant_id != principal.tenant_id:
            raise TenantMismatchError(
                {"principal_id": str(principal_id), "role_id": str(role_id)}
            )
        if role.code == context.role_store.superadmin_role_code:
            context.gate.require_super_admin(context.principal)

        added = await self.principal_repo.add_role(
            principal_id, role_id, assigned_by=context.principal.id
        )
        await self.session.commit()

        if added:
            log_security_event(
                SecurityEventType.ROLE_ASSIGNED,
                principal_id=context.principal.id,
                tenant_id=context.principal.tenant_id,
                target_id=principal_id,
                target_tenant_id=principal.tenant_id,
                details={"role_id": str(role_id), "role_code": role.code},
            )
        return added
