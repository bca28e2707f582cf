"""Operation to permission registry.

Each operation declares the permission(s) it requires. A tuple of several
codes means holding any one of them is enough. The registry is validated
against the permission catalog at application startup.
"""

from collections.abc import Mapping
from typing import Final

from hrms_api.constants.permissions import Permissions as P
from hrms_api.exceptions import UnknownOperationError
from hrms_api.security.catalog import PermissionCatalog

OPERATION_PERMISSIONS: Final[dict[str, tuple[str, ...]]] = {
    # Users
    "users.list": (P.USERS_VIEW,),
    "users.create": (P.USERS_CREATE,),
    "users.update": (P.USERS_EDIT,),
    "users.delete": (P.USERS_DELETE,),
    "users.assign_role": (P.USERS_MANAGE_ROLES, P.ROLES_MANAGE),
    "users.assign_manager": (P.USERS_EDIT,),
    "users.view_salary": (P.USERS_VIEW_SALARY, P.PAYROLL_VIEW_ALL),
    # Departments & positions
    "departments.list": (P.DEPARTMENTS_VIEW, P.DEPARTMENTS_MANAGE),
    "departments.write": (P.DEPARTMENTS_MANAGE,),
    "positions.list": (P.POSITIONS_VIEW, P.POSITIONS_MANAGE),
    "positions.write": (P.POSITIONS_MANAGE,),
    # Contracts
    "contracts.list": (
        P.CONTRACTS_VIEW_OWN,
        P.CONTRACTS_VIEW_TEAM,
        P.CONTRACTS_VIEW_ALL,
        P.CONTRACTS_MANAGE,
    ),
    "contracts.write": (P.CONTRACTS_MANAGE,),
    # Leaves
    "leaves.list": (
        P.LEAVES_VIEW_OWN,
        P.LEAVES_VIEW_TEAM,
        P.LEAVES_VIEW_ALL,
        P.LEAVES_MANAGE,
    ),
    "leaves.create": (P.LEAVES_CREATE,),
    "leaves.review": (P.LEAVES_APPROVE, P.LEAVES_REJECT),
    "leaves.cancel": (P.LEAVES_CANCEL, P.LEAVES_MANAGE),
    "leaves.export": (P.LEAVES_VIEW_ALL,),
    # Expenses
    "expenses.list": (
        P.EXPENSES_VIEW_OWN,
        P.EXPENSES_VIEW_TEAM,
        P.EXPENSES_VIEW_ALL,
        P.EXPENSES_MANAGE,
    ),
    "expenses.create": (P.EXPENSES_CREATE,),
    "expenses.approve": (P.EXPENSES_APPROVE,),
    # Attendance
    "attendance.list": (
        P.ATTENDANCE_VIEW_OWN,
        P.ATTENDANCE_VIEW_TEAM,
        P.ATTENDANCE_VIEW_ALL,
        P.ATTENDANCE_MANAGE,
    ),
    "attendance.write": (P.ATTENDANCE_MANAGE,),
    # Budget
    "budget.list": (P.BUDGET_VIEW_OWN, P.BUDGET_VIEW_TEAM, P.BUDGET_VIEW_ALL, P.BUDGET_MANAGE),
    "budget.write": (P.BUDGET_MANAGE,),
    # Payroll
    "payroll.list": (P.PAYROLL_VIEW_OWN, P.PAYROLL_VIEW_ALL, P.PAYROLL_MANAGE),
    "payroll.write": (P.PAYROLL_MANAGE,),
    # Tasks
    "tasks.list": (P.TASKS_VIEW_OWN, P.TASKS_VIEW_TEAM, P.TASKS_VIEW_ALL, P.TASKS_MANAGE),
    "tasks.write": (P.TASKS_MANAGE,),
    # Training
    "training.catalog": (P.TRAINING_VIEW, P.TRAINING_MANAGE),
    "training.register": (P.TRAINING_REGISTER,),
    "training.write": (P.TRAINING_MANAGE,),
    # Performance
    "performance.list": (
        P.PERFORMANCE_VIEW_OWN,
        P.PERFORMANCE_VIEW_TEAM,
        P.PERFORMANCE_VIEW_ALL,
        P.PERFORMANCE_MANAGE,
    ),
    "performance.review": (P.PERFORMANCE_REVIEWS, P.PERFORMANCE_MANAGE),
    # Notifications & announcements
    "notifications.list": (P.NOTIFICATIONS_VIEW,),
    "announcements.list": (P.ANNOUNCEMENTS_VIEW, P.ANNOUNCEMENTS_MANAGE),
    "announcements.write": (P.ANNOUNCEMENTS_MANAGE,),
    # Reports
    "reports.view": (P.REPORTS_VIEW,),
    "reports.create": (P.REPORTS_CREATE,),
    "analytics.view": (P.ANALYTICS_VIEW,),
    # Organization
    "orgchart.view": (P.ORGCHART_VIEW,),
    # Roles & permissions
    "roles.list": (P.ROLES_VIEW, P.ROLES_MANAGE),
    "roles.write": (P.ROLES_MANAGE,),
    "roles.delete": (P.ROLES_MANAGE,),
    "permissions.list": (P.ROLES_VIEW, P.ROLES_MANAGE, P.PERMISSIONS_MANAGE),
    # System
    "settings.update": (P.SYSTEM_SETTINGS,),
    "logs.view": (P.SYSTEM_LOGS,),
    # Profile
    "profile.view": (P.PROFILE_VIEW_OWN,),
    "profile.update": (P.PROFILE_EDIT_OWN,),
}


def required_permissions(
    operation: str,
    registry: Mapping[str, tuple[str, ...]] = OPERATION_PERMISSIONS,
) -> tuple[str, ...]:
    """Resolve the permission requirement of an operation.

    Raises:
        UnknownOperationError: If the operation is not registered
    """
    try:
        return registry[operation]
    except KeyError:
        raise UnknownOperationError(operation) from None


def validate_operation_registry(
    catalog: PermissionCatalog,
    registry: Mapping[str, tuple[str, ...]] = OPERATION_PERMISSIONS,
) -> None:
    """Validate every declared requirement against the catalog.

    Raises:
        UnknownPermissionError: If a requirement references an unknown code
        ValueError: If an operation declares no requirement at all
    """
    empty = sorted(op for op, codes in registry.items() if not codes)
    if empty:
        raise ValueError(f"Operations without permission requirement: {', '.join(empty)}")
    catalog.validate(code for codes in registry.values() for code in codes)
