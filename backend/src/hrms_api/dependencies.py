"""Centralized dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hrms_api.config import get_settings
from hrms_api.database import get_db
from hrms_api.services.access_service import AccessService
from hrms_api.services.hierarchy_service import HierarchyService
from hrms_api.services.rbac_service import RbacService


# =============================================================================
# Access Control Service Factories
# =============================================================================


def get_access_service(db: AsyncSession = Depends(get_db)) -> AccessService:
    """Get AccessService instance."""
    settings = get_settings()
    return AccessService(
        db,
        superadmin_role_code=settings.superadmin_role_code,
        team_scope_transitive=settings.team_scope_transitive,
    )


def get_rbac_service(db: AsyncSession = Depends(get_db)) -> RbacService:
    """Get RbacService instance."""
    return RbacService(db)


def get_hierarchy_service(db: AsyncSession = Depends(get_db)) -> HierarchyService:
    """Get HierarchyService instance."""
    return HierarchyService(db)
