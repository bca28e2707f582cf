"""Hierarchy service: manager reassignment with cycle re-validation."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.exceptions import HierarchyCycleError, PrincipalNotFoundError, TenantMismatchError
from hrms_api.repositories.principal_repository import PrincipalRepository
from hrms_api.services.access_service import AccessContext
from hrms_api.services.hierarchy_directory import closes_cycle
from hrms_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


class HierarchyService:
    """Service for reporting line changes."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.principal_repo = PrincipalRepository(session)

    async def assign_manager(
        self,
        principal_id: UUID,
        manager_id: UUID | None,
        context: AccessContext,
    ) -> None:
        """Point a principal at a new manager, or clear it with None.

        The new edge is checked against the stored edges of the whole tenant,
        inactive principals included.

        Args:
            principal_id: Principal whose manager changes
            manager_id: New manager, None to make the principal a root
            context: Access context of the acting principal

        Raises:
            PrincipalNotFoundError: If either principal does not exist in a visible tenant
            AccessDeniedError: If the caller may not edit reporting lines
            TenantMismatchError: If a tenant-exempt caller links two tenants
            HierarchyCycleError: If the edge would close a reporting loop
        """
        operation = "users.assign_manager"
        context.require_operation(operation)

        principal = await self.principal_repo.get_by_id(principal_id)
        if principal is None:
            raise PrincipalNotFoundError(str(principal_id))
        context.require_visible(
            operation, principal.tenant_id, PrincipalNotFoundError(str(principal_id))
        )

        if manager_id is not None:
            if manager_id == principal_id:
                raise HierarchyCycleError(str(principal_id), str(manager_id))

            manager = await self.principal_repo.get_by_id(manager_id)
            if manager is None:
                raise PrincipalNotFoundError(str(manager_id))
            context.require_visible(
                operation, manager.tenant_id, PrincipalNotFoundError(str(manager_id))
            )
            if manager.tenant_id != principal.tenant_id:
                raise TenantMismatchError(
                    {"principal_id": str(principal_id), "manager_id": str(manager_id)}
                )

            edges = await self.principal_repo.get_manager_edges(principal.tenant_id)
            if closes_cycle(edges, principal_id, manager_id):
                logger.info(
                    "Rejected manager %s for principal %s: reporting cycle",
                    manager_id,
                    principal_id,
                )
                raise HierarchyCycleError(str(principal_id), str(manager_id))

        previous = principal.manager_id
        await self.principal_repo.set_manager(principal, manager_id)
        await self.session.commit()

        log_security_event(
            SecurityEventType.MANAGER_ASSIGNED,
            principal_id=context.principal.id,
            tenant_id=context.principal.tenant_id,
            target_id=principal_id,
            target_tenant_id=principal.tenant_id,
            details={
                "previous_manager_id": str(previous) if previous else None,
                "manager_id": str(manager_id) if manager_id else None,
            },
        )
