"""Permission vocabulary of the platform.

Codes follow the ``<resource>.<action>`` convention. Scoped resources expose
``view_own`` / ``view_team`` / ``view_all`` tiers and a ``manage`` action that
implies tenant-wide access.
"""

from typing import NamedTuple


class PermissionDefinition(NamedTuple):
    """Catalog entry: code, display name, description and category."""

    code: str
    name: str
    description: str
    category: str


class Permissions:
    """Permission code constants."""

    # Users
    USERS_VIEW = "users.view"
    USERS_CREATE = "users.create"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_MANAGE_ROLES = "users.manage_roles"
    USERS_VIEW_SALARY = "users.view_salary"
    USERS_EDIT_SALARY = "users.edit_salary"

    # Departments
    DEPARTMENTS_VIEW = "departments.view"
    DEPARTMENTS_MANAGE = "departments.manage"

    # Positions
    POSITIONS_VIEW = "positions.view"
    POSITIONS_MANAGE = "positions.manage"

    # Contracts
    CONTRACTS_VIEW_OWN = "contracts.view_own"
    CONTRACTS_VIEW_TEAM = "contracts.view_team"
    CONTRACTS_VIEW_ALL = "contracts.view_all"
    CONTRACTS_MANAGE = "contracts.manage"

    # Leaves
    LEAVES_VIEW_OWN = "leaves.view_own"
    LEAVES_VIEW_TEAM = "leaves.view_team"
    LEAVES_VIEW_ALL = "leaves.view_all"
    LEAVES_CREATE = "leaves.create"
    LEAVES_APPROVE = "leaves.approve"
    LEAVES_REJECT = "leaves.reject"
    LEAVES_CANCEL = "leaves.cancel"
    LEAVES_MANAGE = "leaves.manage"

    # Expenses
    EXPENSES_VIEW_OWN = "expenses.view_own"
    EXPENSES_VIEW_TEAM = "expenses.view_team"
    EXPENSES_VIEW_ALL = "expenses.view_all"
    EXPENSES_CREATE = "expenses.create"
    EXPENSES_APPROVE = "expenses.approve"
    EXPENSES_MANAGE = "expenses.manage"

    # Attendance
    ATTENDANCE_VIEW_OWN = "attendance.view_own"
    ATTENDANCE_VIEW_TEAM = "attendance.view_team"
    ATTENDANCE_VIEW_ALL = "attendance.view_all"
    ATTENDANCE_MANAGE = "attendance.manage"

    # Budget
    BUDGET_VIEW_OWN = "budget.view_own"
    BUDGET_VIEW_TEAM = "budget.view_team"
    BUDGET_VIEW_ALL = "budget.view_all"
    BUDGET_MANAGE = "budget.manage"

    # Payroll
    PAYROLL_VIEW_OWN = "payroll.view_own"
    PAYROLL_VIEW_ALL = "payroll.view_all"
    PAYROLL_MANAGE = "payroll.manage"

    # Tasks
    TASKS_VIEW_OWN = "tasks.view_own"
    TASKS_VIEW_TEAM = "tasks.view_team"
    TASKS_VIEW_ALL = "tasks.view_all"
    TASKS_MANAGE = "tasks.manage"

    # Training
    TRAINING_VIEW = "training.view"
    TRAINING_REGISTER = "training.register"
    TRAINING_MANAGE = "training.manage"

    # Performance
    PERFORMANCE_VIEW_OWN = "performance.view_own"
    PERFORMANCE_VIEW_TEAM = "performance.view_team"
    PERFORMANCE_VIEW_ALL = "performance.view_all"
    PERFORMANCE_REVIEWS = "performance.reviews"
    PERFORMANCE_MANAGE = "performance.manage"

    # Notifications / announcements
    NOTIFICATIONS_VIEW = "notifications.view"
    ANNOUNCEMENTS_VIEW = "announcements.view"
    ANNOUNCEMENTS_MANAGE = "announcements.manage"

    # Reports / analytics
    REPORTS_VIEW = "reports.view"
    REPORTS_CREATE = "reports.create"
    ANALYTICS_VIEW = "analytics.view"

    # Organization
    ORGCHART_VIEW = "orgchart.view"

    # Roles & permissions
    ROLES_VIEW = "roles.view"
    ROLES_MANAGE = "roles.manage"
    PERMISSIONS_MANAGE = "permissions.manage"

    # System
    SYSTEM_SETTINGS = "system.settings"
    SYSTEM_LOGS = "system.logs"

    # Profile
    PROFILE_VIEW_OWN = "profile.view_own"
    PROFILE_EDIT_OWN = "profile.edit_own"


CATEGORY_LABELS: dict[str, str] = {
    "users": "User management",
    "departments": "Departments",
    "positions": "Positions",
    "contracts": "Contracts",
    "leaves": "Leaves",
    "expenses": "Expenses",
    "attendance": "Attendance",
    "budget": "Budget",
    "payroll": "Payroll",
    "tasks": "Tasks",
    "training": "Training",
    "performance": "Performance",
    "notifications": "Notifications",
    "announcements": "Announcements",
    "reports": "Reports",
    "analytics": "Analytics",
    "orgchart": "Organization",
    "roles": "Roles",
    "permissions": "Permissions",
    "system": "System administration",
    "profile": "Personal profile",
}


_ACTION_NAMES: dict[str, str] = {
    "view": "View",
    "view_own": "View own",
    "view_team": "View team",
    "view_all": "View all",
    "create": "Create",
    "edit": "Edit",
    "delete": "Delete",
    "manage": "Manage",
    "approve": "Approve",
    "reject": "Reject",
    "cancel": "Cancel",
    "register": "Register for",
    "reviews": "Review",
    "manage_roles": "Manage roles of",
    "view_salary": "View salaries of",
    "edit_salary": "Edit salaries of",
    "settings": "Configure",
    "logs": "Read logs of",
    "edit_own": "Edit own",
}


def _describe(code: str) -> PermissionDefinition:
    category, action = code.split(".", 1)
    label = CATEGORY_LABELS.get(category, category)
    verb = _ACTION_NAMES.get(action, action.replace("_", " ").capitalize())
    return PermissionDefinition(
        code=code,
        name=f"{verb} {category}",
        description=f"{verb} access in {label.lower()}",
        category=category,
    )


DEFAULT_PERMISSIONS: tuple[PermissionDefinition, ...] = tuple(
    _describe(value)
    for key, value in vars(Permissions).items()
    if key.isupper() and isinstance(value, str)
)

# Resources whose view permissions come in own/team/all tiers
SCOPED_RESOURCES: tuple[str, ...] = (
    "contracts",
    "leaves",
    "expenses",
    "attendance",
    "budget",
    "payroll",
    "tasks",
    "performance",
)
