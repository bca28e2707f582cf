"""Legacy role bundles and predefined system roles."""

from enum import StrEnum
from typing import NamedTuple

from hrms_api.constants.permissions import Permissions


class LegacyRoleCode(StrEnum):
    """Fixed role enum carried on principals created before granular roles."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


_PROFILE = (Permissions.PROFILE_VIEW_OWN, Permissions.PROFILE_EDIT_OWN)

# SUPER_ADMIN holds the whole catalog through the role store fast path and
# therefore has no bundle of its own.
LEGACY_ROLE_PERMISSIONS: dict[LegacyRoleCode, frozenset[str]] = {
    LegacyRoleCode.SUPER_ADMIN: frozenset(),
    LegacyRoleCode.ADMIN: frozenset(
        {
            Permissions.USERS_VIEW,
            Permissions.USERS_CREATE,
            Permissions.USERS_EDIT,
            Permissions.USERS_DELETE,
            Permissions.USERS_MANAGE_ROLES,
            Permissions.DEPARTMENTS_VIEW,
            Permissions.DEPARTMENTS_MANAGE,
            Permissions.POSITIONS_VIEW,
            Permissions.POSITIONS_MANAGE,
            Permissions.REPORTS_VIEW,
            Permissions.REPORTS_CREATE,
            Permissions.ANALYTICS_VIEW,
            Permissions.ORGCHART_VIEW,
            Permissions.ROLES_VIEW,
            Permissions.ROLES_MANAGE,
            Permissions.SYSTEM_SETTINGS,
            *_PROFILE,
        }
    ),
    LegacyRoleCode.HR: frozenset(
        {
            Permissions.USERS_VIEW,
            Permissions.USERS_CREATE,
            Permissions.USERS_EDIT,
            Permissions.USERS_VIEW_SALARY,
            Permissions.USERS_EDIT_SALARY,
            Permissions.DEPARTMENTS_VIEW,
            Permissions.DEPARTMENTS_MANAGE,
            Permissions.POSITIONS_VIEW,
            Permissions.POSITIONS_MANAGE,
            Permissions.CONTRACTS_VIEW_ALL,
            Permissions.CONTRACTS_MANAGE,
            Permissions.LEAVES_VIEW_ALL,
            Permissions.LEAVES_APPROVE,
            Permissions.LEAVES_REJECT,
            Permissions.ATTENDANCE_VIEW_ALL,
            Permissions.PAYROLL_VIEW_ALL,
            Permissions.PAYROLL_MANAGE,
            Permissions.REPORTS_VIEW,
            Permissions.REPORTS_CREATE,
            Permissions.ORGCHART_VIEW,
            *_PROFILE,
        }
    ),
    LegacyRoleCode.MANAGER: frozenset(
        {
            Permissions.USERS_VIEW,
            Permissions.DEPARTMENTS_VIEW,
            Permissions.POSITIONS_VIEW,
            Permissions.LEAVES_VIEW_TEAM,
            Permissions.LEAVES_APPROVE,
            Permissions.LEAVES_REJECT,
            Permissions.EXPENSES_VIEW_TEAM,
            Permissions.EXPENSES_APPROVE,
            Permissions.ATTENDANCE_VIEW_TEAM,
            Permissions.TASKS_VIEW_TEAM,
            Permissions.PERFORMANCE_VIEW_TEAM,
            Permissions.PERFORMANCE_REVIEWS,
            Permissions.REPORTS_VIEW,
            Permissions.ORGCHART_VIEW,
            *_PROFILE,
        }
    ),
    LegacyRoleCode.EMPLOYEE: frozenset(
        {
            Permissions.USERS_VIEW,
            Permissions.LEAVES_VIEW_OWN,
            Permissions.LEAVES_CREATE,
            Permissions.EXPENSES_VIEW_OWN,
            Permissions.EXPENSES_CREATE,
            Permissions.ATTENDANCE_VIEW_OWN,
            Permissions.CONTRACTS_VIEW_OWN,
            Permissions.PAYROLL_VIEW_OWN,
            Permissions.TASKS_VIEW_OWN,
            Permissions.PERFORMANCE_VIEW_OWN,
            Permissions.TRAINING_VIEW,
            Permissions.TRAINING_REGISTER,
            Permissions.NOTIFICATIONS_VIEW,
            Permissions.ANNOUNCEMENTS_VIEW,
            Permissions.ORGCHART_VIEW,
            *_PROFILE,
        }
    ),
}


class PredefinedRole(NamedTuple):
    """System role seeded at deployment."""

    code: str
    name: str
    description: str
    permissions: frozenset[str]


PREDEFINED_ROLES: tuple[PredefinedRole, ...] = (
    PredefinedRole(
        code="superadmin",
        name="Super Administrator",
        description="Full access to every feature; permissions are implicit",
        permissions=frozenset(),
    ),
    PredefinedRole(
        code="admin",
        name="Administrator",
        description="Global administration of the company and its users",
        permissions=LEGACY_ROLE_PERMISSIONS[LegacyRoleCode.ADMIN],
    ),
    PredefinedRole(
        code="hr_manager",
        name="HR Manager",
        description="Complete human resources management",
        permissions=LEGACY_ROLE_PERMISSIONS[LegacyRoleCode.HR],
    ),
    PredefinedRole(
        code="manager",
        name="Manager",
        description="Team management and request approval",
        permissions=LEGACY_ROLE_PERMISSIONS[LegacyRoleCode.MANAGER],
    ),
    PredefinedRole(
        code="accountant",
        name="Accountant",
        description="Accounting, expenses and budget",
        permissions=frozenset(
            {
                Permissions.USERS_VIEW,
                Permissions.USERS_VIEW_SALARY,
                Permissions.PAYROLL_VIEW_ALL,
                Permissions.PAYROLL_MANAGE,
                Permissions.EXPENSES_VIEW_ALL,
                Permissions.EXPENSES_APPROVE,
                Permissions.BUDGET_VIEW_ALL,
                Permissions.BUDGET_MANAGE,
                Permissions.REPORTS_VIEW,
                Permissions.ANALYTICS_VIEW,
                *_PROFILE,
            }
        ),
    ),
    PredefinedRole(
        code="employee",
        name="Employee",
        description="Basic self-service access",
        permissions=LEGACY_ROLE_PERMISSIONS[LegacyRoleCode.EMPLOYEE],
    ),
)
