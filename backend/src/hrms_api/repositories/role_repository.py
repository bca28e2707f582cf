"""Role repository."""

from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import selectinload

from hrms_api.models.orm.role import RoleORM
from hrms_api.models.orm.role_permission import RolePermissionORM
from hrms_api.models.orm.user_role import UserRoleORM
from hrms_api.repositories.base import BaseRepository


class RoleRepository(BaseRepository[RoleORM]):
    """Repository for role operations."""

    model = RoleORM

    async def get_with_permissions(self, role_id: UUID) -> RoleORM | None:
        """Get role with permissions loaded.

        Args:
            role_id: Role UUID

        Returns:
            RoleORM with permissions or None
        """
        result = await self.session.execute(
            select(RoleORM).options(selectinload(RoleORM.permissions)).where(RoleORM.id == role_id)
        )
        return result.scalar_one_or_none()

    async def get_global_by_code(self, code: str) -> RoleORM | None:
        """Get a global (tenant-less) role by code."""
        result = await self.session.execute(
            select(RoleORM)
            .options(selectinload(RoleORM.permissions))
            .where(RoleORM.code == code, RoleORM.tenant_id.is_(None))
        )
        return result.scalar_one_or_none()

    async def get_all_for_tenant(self, tenant_id: UUID) -> list[RoleORM]:
        """Get the roles visible to a tenant: its own plus the global ones.

        Args:
            tenant_id: Company UUID

        Returns:
            List of RoleORM with permissions
        """
        result = await self.session.execute(
            select(RoleORM)
            .options(selectinload(RoleORM.permissions))
            .where(or_(RoleORM.tenant_id == tenant_id, RoleORM.tenant_id.is_(None)))
            .order_by(RoleORM.code)
        )
        return list(result.scalars().all())

    async def set_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Set permissions for a role (replaces existing).

        Args:
            role_id: Role UUID
            permission_ids: List of permission UUIDs
        """
        await self.session.execute(
            delete(RolePermissionORM).where(RolePermissionORM.role_id == role_id)
        )
        for perm_id in permission_ids:
            self.session.add(RolePermissionORM(role_id=role_id, permission_id=perm_id))
        await self.session.flush()

    async def count_principals_with_role(self, role_id: UUID) -> int:
        """Count principals assigned to a role.

        Args:
            role_id: Role UUID

        Returns:
            Number of principals holding the role
        """
        result = await self.session.execute(
            select(func.count(UserRoleORM.user_id)).where(UserRoleORM.role_id == role_id)
        )
        return result.scalar_one()
