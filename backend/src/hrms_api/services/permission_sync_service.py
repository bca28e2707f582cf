"""Permission sync service.

Seeds the permissions table from the catalog and keeps the predefined system
roles in line with their bundles on every startup.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.constants.roles import PREDEFINED_ROLES, PredefinedRole
from hrms_api.repositories.permission_repository import PermissionRepository
from hrms_api.repositories.role_repository import RoleRepository
from hrms_api.security.catalog import PermissionCatalog, get_permission_catalog

logger = logging.getLogger(__name__)


class PermissionSyncService:
    """Synchronizes the permissions table and system roles with the catalog.

    Only additions are made: permissions an administrator removed from a
    system role by hand are put back, but nothing is ever taken away.
    """

    def __init__(self, session: AsyncSession, catalog: PermissionCatalog | None = None) -> None:
        """Initialize the service.

        Args:
            session: Database session
            catalog: Catalog to sync, defaults to the platform catalog
        """
        self.session = session
        self.catalog = catalog or get_permission_catalog()
        self.permission_repo = PermissionRepository(session)
        self.role_repo = RoleRepository(session)

    async def sync(
        self, predefined: tuple[PredefinedRole, ...] = PREDEFINED_ROLES
    ) -> dict[str, int]:
        """Synchronize permissions and predefined roles.

        Returns:
            Dict with counts of created permissions, created roles and
            permissions added to existing roles
        """
        results = {"permissions_created": 0, "roles_created": 0, "role_permissions_added": 0}

        definitions = [self.catalog.get(code) for code in self.catalog.list_all()]
        results["permissions_created"] = await self.permission_repo.sync_catalog(
            [d for d in definitions if d is not None]
        )
        permission_ids = {perm.code: perm.id for perm in await self.permission_repo.get_all()}

        for definition in predefined:
            role = await self.role_repo.get_global_by_code(definition.code)
            if role is None:
                role = await self.role_repo.create(
                    code=definition.code,
                    name=definition.name,
                    description=definition.description,
                    is_system=True,
                    tenant_id=None,
                )
                role = await self.role_repo.get_with_permissions(role.id)
                results["roles_created"] += 1

            current = {perm.code for perm in role.permissions}
            wanted = {code for code in definition.permissions if code in permission_ids}
            missing = wanted - current
            if missing:
                await self.role_repo.set_permissions(
                    role.id, [permission_ids[code] for code in sorted(current | wanted)]
                )
                results["role_permissions_added"] += len(missing)

        await self.session.commit()

        if any(results.values()):
            logger.info(
                "Permission sync completed: %d permissions, %d roles created, "
                "%d role permissions added",
                results["permissions_created"],
                results["roles_created"],
                results["role_permissions_added"],
            )
        else:
            logger.debug("Permission sync: no changes needed")

        return results


async def sync_permissions() -> dict[str, int]:
    """Sync permissions and system roles; called from application startup."""
    from hrms_api.database import async_session_maker

    async with async_session_maker() as session:
        service = PermissionSyncService(session)
        return await service.sync()
