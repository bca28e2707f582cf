"""Repository layer for database access."""

from hrms_api.repositories.base import BaseRepository
from hrms_api.repositories.permission_repository import PermissionRepository
from hrms_api.repositories.principal_repository import PrincipalRepository
from hrms_api.repositories.role_repository import RoleRepository
from hrms_api.repositories.scope import apply_scope

__all__ = [
    "BaseRepository",
    "PermissionRepository",
    "PrincipalRepository",
    "RoleRepository",
    "apply_scope",
]
