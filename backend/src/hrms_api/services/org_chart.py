"""Org chart builder."""

from collections.abc import Iterable
from uuid import UUID

from hrms_api.models.domain.org_chart import OrgChartNode
from hrms_api.models.domain.principal import Principal
from hrms_api.services.hierarchy_directory import HierarchyDirectory


def _node(principal: Principal) -> OrgChartNode:
    return OrgChartNode(
        id=principal.id,
        full_name=principal.full_name,
        position=principal.position,
        department=principal.department,
        profile_photo_url=principal.profile_photo_url,
        work_email=principal.email,
    )


def build_forest_from_directory(directory: HierarchyDirectory) -> list[OrgChartNode]:
    """Materialize the directory's forest as display nodes.

    Children follow the directory's snapshot order. The directory has already
    applied the orphan and cycle policies, so every active principal appears
    exactly once.
    """
    nodes: dict[UUID, OrgChartNode] = {
        principal.id: _node(principal) for principal in directory.active_principals()
    }

    for principal_id, node in nodes.items():
        for report_id in directory.ordered_reports(principal_id):
            node.children.append(nodes[report_id])

    return [nodes[root_id] for root_id in directory.roots()]


def build_forest(principals: Iterable[Principal]) -> list[OrgChartNode]:
    """Build the org chart forest of the active principals.

    Inactive principals are left out; anyone reporting to them becomes a root.
    Roots and children are ordered by full name.

    Args:
        principals: Snapshot of one tenant's principals

    Returns:
        Root nodes of the forest
    """
    ordered = sorted(principals, key=lambda p: (p.full_name.casefold(), str(p.id)))
    return build_forest_from_directory(HierarchyDirectory(ordered))
