"""Security package."""

from hrms_api.security.catalog import PermissionCatalog, get_permission_catalog
from hrms_api.security.gate import AuthorizationGate
from hrms_api.security.role_store import InMemoryRoleResolver, RoleStore

__all__ = [
    "AuthorizationGate",
    "InMemoryRoleResolver",
    "PermissionCatalog",
    "RoleStore",
    "get_permission_catalog",
]
