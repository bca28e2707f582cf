"""SQLAlchemy ORM models package."""

from hrms_api.models.orm.base import Base
from hrms_api.models.orm.company import CompanyORM
from hrms_api.models.orm.permission import PermissionORM
from hrms_api.models.orm.principal import PrincipalORM
from hrms_api.models.orm.role import RoleORM
from hrms_api.models.orm.role_permission import RolePermissionORM
from hrms_api.models.orm.user_role import UserRoleORM

__all__ = [
    "Base",
    "CompanyORM",
    "PermissionORM",
    "PrincipalORM",
    "RoleORM",
    "RolePermissionORM",
    "UserRoleORM",
]
