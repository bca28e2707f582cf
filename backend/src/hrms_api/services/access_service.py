"""Access service: loads tenant snapshots and wires the access control core."""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.constants.menu import DEFAULT_MENU
from hrms_api.constants.roles import LegacyRoleCode
from hrms_api.exceptions import AccessDeniedError, NotFoundError, PrincipalNotFoundError
from hrms_api.models.domain.access import DenialReason, ScopeFilter, ScopeTier
from hrms_api.models.domain.menu import MenuItem
from hrms_api.models.domain.org_chart import OrgChartNode
from hrms_api.models.domain.principal import AssignedRole, LegacyRole, Principal, RoleRef
from hrms_api.models.domain.role import Role
from hrms_api.models.orm.principal import PrincipalORM
from hrms_api.models.orm.role import RoleORM
from hrms_api.repositories.principal_repository import PrincipalRepository
from hrms_api.repositories.role_repository import RoleRepository
from hrms_api.security.catalog import PermissionCatalog, get_permission_catalog
from hrms_api.security.gate import AuthorizationGate
from hrms_api.security.operations import required_permissions
from hrms_api.security.role_store import InMemoryRoleResolver, RoleStore
from hrms_api.services.hierarchy_directory import HierarchyDirectory
from hrms_api.services.menu_service import filter_menu
from hrms_api.services.org_chart import build_forest
from hrms_api.services.scope_resolver import ScopeResolver

logger = logging.getLogger(__name__)


def principal_from_orm(orm: PrincipalORM) -> Principal:
    """Convert a principal row into the domain model.

    An unknown legacy role value grants nothing and is logged.
    """
    roles: list[RoleRef] = []
    if orm.legacy_role:
        try:
            roles.append(LegacyRole(code=LegacyRoleCode(orm.legacy_role)))
        except ValueError:
            logger.warning(
                "Ignoring unknown legacy role '%s' on principal %s", orm.legacy_role, orm.id
            )
    roles.extend(AssignedRole(role_id=role.id) for role in orm.roles)

    return Principal(
        id=orm.id,
        tenant_id=orm.tenant_id,
        is_active=orm.is_active,
        is_platform_admin=orm.is_platform_admin,
        manager_id=orm.manager_id,
        roles=roles,
        permission_overrides=list(orm.permission_overrides or []),
        full_name=orm.full_name,
        email=orm.email,
        position=orm.position_title,
        department=orm.department_name,
        profile_photo_url=orm.profile_photo_url,
    )


def role_from_orm(orm: RoleORM) -> Role:
    """Convert a role row with loaded permissions into the domain model."""
    return Role(
        id=orm.id,
        code=orm.code,
        name=orm.name,
        description=orm.description,
        is_system=orm.is_system,
        tenant_id=orm.tenant_id,
        permissions=[perm.code for perm in orm.permissions],
    )


@dataclass
class AccessContext:
    """Everything needed to authorize one request of one principal."""

    principal: Principal
    directory: HierarchyDirectory
    role_store: RoleStore
    gate: AuthorizationGate
    resolver: ScopeResolver

    @property
    def permissions(self) -> frozenset[str]:
        """Effective permissions of the acting principal."""
        return self.role_store.effective_permissions(self.principal)

    def require(self, required: str | tuple[str, ...], target_tenant_id: UUID | None = None) -> None:
        """Authorize the principal or raise AccessDeniedError."""
        self.gate.require(self.principal, required, target_tenant_id=target_tenant_id)

    def require_operation(self, operation: str, target_tenant_id: UUID | None = None) -> None:
        """Authorize the principal for a registered operation."""
        self.require(required_permissions(operation), target_tenant_id=target_tenant_id)

    def require_visible(
        self, operation: str, target_tenant_id: UUID | None, not_found: NotFoundError
    ) -> None:
        """Authorize an operation on a fetched record, hiding other tenants' records.

        Raises:
            AccessDeniedError: If the principal lacks the operation's permissions
            NotFoundError: ``not_found`` when tenant isolation hides the record
        """
        decision = self.gate.authorize(
            self.principal, required_permissions(operation), target_tenant_id=target_tenant_id
        )
        if decision.allowed:
            return
        if decision.reason is DenialReason.TENANT_VIOLATION:
            raise not_found
        raise AccessDeniedError(decision)

    def scope(self, resource: str, tier: ScopeTier | str | None = None) -> ScopeFilter:
        """Authorize a scope tier and resolve it.

        Without an explicit tier the broadest tier the principal holds is used.

        Raises:
            AccessDeniedError: If the principal does not hold the tier
        """
        if tier is None:
            tier = self.gate.highest_tier(self.principal, resource)
            if tier is None:
                # Let the gate deny and log the missing permission
                tier = ScopeTier.OWN
        decision = self.gate.authorize_scope(self.principal, resource, tier)
        if not decision.allowed:
            raise AccessDeniedError(decision)
        return self.resolver.resolve(self.principal, tier)


class AccessService:
    """Builds access contexts from the database."""

    def __init__(
        self,
        session: AsyncSession,
        catalog: PermissionCatalog | None = None,
        superadmin_role_code: str = "superadmin",
        team_scope_transitive: bool = True,
    ) -> None:
        """Initialize service with database session."""
        self.session = session
        self.principal_repo = PrincipalRepository(session)
        self.role_repo = RoleRepository(session)
        self.catalog = catalog or get_permission_catalog()
        self.superadmin_role_code = superadmin_role_code
        self.team_scope_transitive = team_scope_transitive

    async def load_directory(self, tenant_id: UUID) -> tuple[HierarchyDirectory, RoleStore]:
        """Load a tenant snapshot of principals and roles.

        Args:
            tenant_id: Company UUID

        Returns:
            Tuple of (HierarchyDirectory, RoleStore) over the snapshot
        """
        principals = [
            principal_from_orm(orm)
            for orm in await self.principal_repo.get_all_for_tenant(tenant_id)
        ]
        roles = [role_from_orm(orm) for orm in await self.role_repo.get_all_for_tenant(tenant_id)]

        directory = HierarchyDirectory(principals)
        role_store = RoleStore(
            self.catalog,
            InMemoryRoleResolver(roles),
            superadmin_role_code=self.superadmin_role_code,
        )
        return directory, role_store

    async def get_context(self, principal_id: UUID) -> AccessContext:
        """Load the access context of an authenticated principal.

        Raises:
            PrincipalNotFoundError: If the principal does not exist
        """
        orm = await self.principal_repo.get_with_roles(principal_id)
        if orm is None:
            raise PrincipalNotFoundError(str(principal_id))

        principal = principal_from_orm(orm)
        directory, role_store = await self.load_directory(principal.tenant_id)
        return AccessContext(
            principal=principal,
            directory=directory,
            role_store=role_store,
            gate=AuthorizationGate(role_store),
            resolver=ScopeResolver(directory, team_transitive=self.team_scope_transitive),
        )

    def get_menu(self, context: AccessContext) -> list[MenuItem]:
        """Navigation menu filtered by the principal's effective permissions."""
        return filter_menu(DEFAULT_MENU, context.permissions)

    def get_org_chart(self, context: AccessContext) -> list[OrgChartNode]:
        """Org chart of the principal's tenant."""
        return build_forest(context.directory.active_principals())
