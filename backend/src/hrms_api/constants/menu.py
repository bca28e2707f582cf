"""Default sidebar menu of the dashboard."""

from typing import Final

from hrms_api.constants.permissions import Permissions as P
from hrms_api.models.domain.menu import MenuItem

DEFAULT_MENU: Final[tuple[MenuItem, ...]] = (
    MenuItem(key="dashboard", label="Dashboard", path="/dashboard", section="main"),
    MenuItem(
        key="organization",
        label="Organization",
        section="main",
        sort_order=10,
        children=[
            MenuItem(key="orgchart", label="Org chart", path="/orgchart", permission=P.ORGCHART_VIEW),
            MenuItem(key="users", label="Employees", path="/users", permission=P.USERS_VIEW, sort_order=1),
            MenuItem(
                key="departments",
                label="Departments",
                path="/departments",
                permission=P.DEPARTMENTS_VIEW,
                sort_order=2,
            ),
            MenuItem(
                key="positions",
                label="Positions",
                path="/positions",
                permission=P.POSITIONS_VIEW,
                sort_order=3,
            ),
        ],
    ),
    MenuItem(
        key="time_off",
        label="Time off",
        section="main",
        sort_order=20,
        children=[
            MenuItem(key="my_leaves", label="My leaves", path="/leaves", permission=P.LEAVES_VIEW_OWN),
            MenuItem(
                key="leave_review",
                label="Leave review",
                path="/leaves/review",
                permission=P.LEAVES_APPROVE,
                sort_order=1,
            ),
            MenuItem(
                key="attendance",
                label="Attendance",
                path="/attendance",
                permission=P.ATTENDANCE_VIEW_OWN,
                sort_order=2,
            ),
        ],
    ),
    MenuItem(
        key="finance",
        label="Finance",
        section="main",
        sort_order=30,
        children=[
            MenuItem(key="expenses", label="Expenses", path="/expenses", permission=P.EXPENSES_VIEW_OWN),
            MenuItem(key="payroll", label="Payroll", path="/payroll", permission=P.PAYROLL_VIEW_OWN, sort_order=1),
            MenuItem(key="budget", label="Budget", path="/budget", permission=P.BUDGET_VIEW_ALL, sort_order=2),
        ],
    ),
    MenuItem(
        key="talent",
        label="Talent",
        section="main",
        sort_order=40,
        children=[
            MenuItem(key="training", label="Training", path="/training", permission=P.TRAINING_VIEW),
            MenuItem(
                key="performance",
                label="Performance",
                path="/performance",
                permission=P.PERFORMANCE_VIEW_OWN,
                sort_order=1,
            ),
            MenuItem(key="tasks", label="Tasks", path="/tasks", permission=P.TASKS_VIEW_OWN, sort_order=2),
        ],
    ),
    MenuItem(
        key="administration",
        label="Administration",
        section="admin",
        sort_order=90,
        children=[
            MenuItem(key="roles", label="Roles", path="/roles", permission=P.ROLES_VIEW),
            MenuItem(
                key="settings",
                label="Settings",
                path="/settings",
                permission=P.SYSTEM_SETTINGS,
                sort_order=1,
            ),
        ],
    ),
)
