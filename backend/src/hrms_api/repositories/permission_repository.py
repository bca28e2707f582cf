"""Permission repository."""

from sqlalchemy import select

from hrms_api.constants.permissions import PermissionDefinition
from hrms_api.models.orm.permission import PermissionORM
from hrms_api.repositories.base import BaseRepository


class PermissionRepository(BaseRepository[PermissionORM]):
    """Repository for permission operations."""

    model = PermissionORM

    async def get_by_codes(self, codes: list[str]) -> list[PermissionORM]:
        """Get permissions by codes.

        Args:
            codes: List of permission codes

        Returns:
            List of PermissionORM
        """
        if not codes:
            return []
        result = await self.session.execute(
            select(PermissionORM).where(PermissionORM.code.in_(codes))
        )
        return list(result.scalars().all())

    async def get_all(self) -> list[PermissionORM]:
        """Get all permissions ordered by category and code."""
        result = await self.session.execute(
            select(PermissionORM).order_by(PermissionORM.category, PermissionORM.code)
        )
        return list(result.scalars().all())

    async def sync_catalog(self, definitions: list[PermissionDefinition]) -> int:
        """Insert catalog permissions missing from the table.

        Existing rows get their display fields refreshed. Rows absent from the
        catalog are left in place; the role store ignores them.

        Args:
            definitions: Catalog entries

        Returns:
            Number of permissions created
        """
        existing = {perm.code: perm for perm in await self.get_all()}
        created = 0
        for definition in definitions:
            perm = existing.get(definition.code)
            if perm is None:
                self.session.add(
                    PermissionORM(
                        code=definition.code,
                        name=definition.name,
                        description=definition.description,
                        category=definition.category,
                    )
                )
                created += 1
            else:
                perm.name = definition.name
                perm.description = definition.description
                perm.category = definition.category
        await self.session.flush()
        return created
