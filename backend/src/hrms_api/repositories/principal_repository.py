"""Principal repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from hrms_api.models.orm.principal import PrincipalORM
from hrms_api.models.orm.user_role import UserRoleORM
from hrms_api.repositories.base import BaseRepository


class PrincipalRepository(BaseRepository[PrincipalORM]):
    """Repository for principal operations."""

    model = PrincipalORM

    async def get_with_roles(self, principal_id: UUID) -> PrincipalORM | None:
        """Get principal with role references loaded.

        Args:
            principal_id: Principal UUID

        Returns:
            PrincipalORM or None if not found
        """
        result = await self.session.execute(
            select(PrincipalORM)
            .options(selectinload(PrincipalORM.roles))
            .where(PrincipalORM.id == principal_id)
        )
        return result.scalar_one_or_none()

    async def get_all_for_tenant(self, tenant_id: UUID) -> list[PrincipalORM]:
        """Load every principal of a tenant, active or not.

        Inactive principals are part of the snapshot so that their reports
        can be detected as orphaned.

        Args:
            tenant_id: Company UUID

        Returns:
            List of PrincipalORM with roles loaded
        """
        result = await self.session.execute(
            select(PrincipalORM)
            .options(selectinload(PrincipalORM.roles))
            .where(PrincipalORM.tenant_id == tenant_id)
            .order_by(PrincipalORM.full_name, PrincipalORM.id)
        )
        return list(result.scalars().all())

    async def get_manager_edges(self, tenant_id: UUID) -> dict[UUID, UUID | None]:
        """Get the raw ``principal -> manager`` edges of a tenant."""
        result = await self.session.execute(
            select(PrincipalORM.id, PrincipalORM.manager_id).where(
                PrincipalORM.tenant_id == tenant_id
            )
        )
        return {row.id: row.manager_id for row in result.all()}

    async def set_manager(self, principal: PrincipalORM, manager_id: UUID | None) -> None:
        """Point a principal at a new manager."""
        principal.manager_id = manager_id
        await self.session.flush()

    async def add_role(
        self,
        principal_id: UUID,
        role_id: UUID,
        assigned_by: UUID | None = None,
    ) -> bool:
        """Assign a role to a principal.

        Returns:
            False if the principal already held the role
        """
        existing = await self.session.execute(
            select(UserRoleORM).where(
                UserRoleORM.user_id == principal_id,
                UserRoleORM.role_id == role_id,
            )
        )
        if existing.scalar_one_or_none() is not None:
            return False
        self.session.add(
            UserRoleORM(user_id=principal_id, role_id=role_id, assigned_by=assigned_by)
        )
        await self.session.flush()
        return True
