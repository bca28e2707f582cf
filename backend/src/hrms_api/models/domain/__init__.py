"""Domain models package."""

from hrms_api.models.domain.access import AccessDecision, DenialReason, ScopeFilter, ScopeTier
from hrms_api.models.domain.menu import MenuItem
from hrms_api.models.domain.org_chart import OrgChartNode
from hrms_api.models.domain.principal import AssignedRole, LegacyRole, Principal
from hrms_api.models.domain.role import Role

__all__ = [
    "AccessDecision",
    "AssignedRole",
    "DenialReason",
    "LegacyRole",
    "MenuItem",
    "OrgChartNode",
    "Principal",
    "Role",
    "ScopeFilter",
    "ScopeTier",
]
