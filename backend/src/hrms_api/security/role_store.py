"""Role store: resolves a principal to its effective permission set."""

import logging
from collections.abc import Iterable, Mapping
from typing import NamedTuple, Protocol
from uuid import UUID

from hrms_api.constants.roles import LEGACY_ROLE_PERMISSIONS, LegacyRoleCode
from hrms_api.models.domain.principal import AssignedRole, LegacyRole, Principal
from hrms_api.models.domain.role import Role
from hrms_api.security.catalog import PermissionCatalog
from hrms_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


class RoleResolver(Protocol):
    """Lookup of roles referenced by principals."""

    def get_role(self, role_id: UUID) -> Role | None:
        ...


class InMemoryRoleResolver:
    """Role lookup over a loaded snapshot of roles."""

    def __init__(self, roles: Iterable[Role] = ()) -> None:
        self._roles: dict[UUID, Role] = {role.id: role for role in roles}

    def get_role(self, role_id: UUID) -> Role | None:
        return self._roles.get(role_id)

    def roles(self) -> list[Role]:
        return list(self._roles.values())


class ResolvedAccess(NamedTuple):
    """Super-admin marker and effective permissions from one pass over the roles."""

    is_super_admin: bool
    permissions: frozenset[str]


class RoleStore:
    """Computes effective permissions from legacy roles, assigned roles and overrides.

    Every source is additive: nothing ever subtracts a permission granted by
    another source. Codes missing from the catalog are dropped from the result,
    so shrinking the catalog never breaks a role that still references them.
    """

    def __init__(
        self,
        catalog: PermissionCatalog,
        roles: RoleResolver,
        superadmin_role_code: str = "superadmin",
        legacy_permissions: Mapping[LegacyRoleCode, frozenset[str]] = LEGACY_ROLE_PERMISSIONS,
    ) -> None:
        self.catalog = catalog
        self.roles = roles
        self.superadmin_role_code = superadmin_role_code
        self.legacy_permissions = legacy_permissions

    def _resolve_assigned(self, principal: Principal, ref: AssignedRole) -> Role | None:
        role = self.roles.get_role(ref.role_id)
        if role is not None and role.tenant_id not in (None, principal.tenant_id):
            # A role owned by another tenant never grants anything
            role = None
        if role is None:
            log_security_event(
                SecurityEventType.ROLE_REFERENCE_ORPHANED,
                principal_id=principal.id,
                tenant_id=principal.tenant_id,
                target_id=ref.role_id,
                success=False,
            )
        return role

    def _collect(self, principal: Principal) -> tuple[bool, set[str]]:
        # Each assigned reference is resolved exactly once per call
        super_admin = False
        granted: set[str] = set(principal.permission_overrides)
        for ref in principal.roles:
            if isinstance(ref, LegacyRole):
                if ref.code == LegacyRoleCode.SUPER_ADMIN:
                    super_admin = True
                granted.update(self.legacy_permissions.get(ref.code, ()))
                continue
            role = self._resolve_assigned(principal, ref)
            if role is None:
                continue
            if role.code == self.superadmin_role_code:
                super_admin = True
            granted.update(role.permissions)
        return super_admin, granted

    def resolve(self, principal: Principal) -> ResolvedAccess:
        """Resolve the super-admin marker and effective permissions together.

        Super admins hold the full catalog, so permissions added later are
        covered without a migration.

        Args:
            principal: Principal to resolve

        Returns:
            ResolvedAccess with permission codes known to the catalog
        """
        super_admin, granted = self._collect(principal)
        if super_admin:
            return ResolvedAccess(True, self.catalog.codes)

        unknown = self.catalog.unknown(granted)
        if unknown:
            logger.debug(
                "Ignoring %d permission(s) unknown to the catalog for principal %s",
                len(unknown),
                principal.id,
            )
        return ResolvedAccess(False, frozenset(granted - unknown))

    def is_super_admin(self, principal: Principal) -> bool:
        """Check if a principal carries the super-admin marker."""
        return self._collect(principal)[0]

    def effective_permissions(self, principal: Principal) -> frozenset[str]:
        """Get the effective permission set of a principal."""
        return self.resolve(principal).permissions
