"""Scope resolver: turns a scope tier into the principal ids a caller may access."""

from hrms_api.models.domain.access import ScopeFilter, ScopeTier
from hrms_api.models.domain.principal import Principal
from hrms_api.services.hierarchy_directory import HierarchyDirectory


class ScopeResolver:
    """Computes scope filters over a hierarchy snapshot.

    The resolver does not check whether the caller holds the tier; the
    authorization gate does that before the resolver is asked.
    """

    def __init__(self, directory: HierarchyDirectory, team_transitive: bool = True) -> None:
        self.directory = directory
        self.team_transitive = team_transitive

    def resolve(self, principal: Principal, tier: ScopeTier | str) -> ScopeFilter:
        """Resolve a tier for a principal.

        Args:
            principal: Caller whose tier has already been authorized
            tier: ``own``, ``team`` or ``all``

        Returns:
            ScopeFilter bound to the caller's tenant
        """
        tier = ScopeTier(tier)

        if tier is ScopeTier.ALL:
            return ScopeFilter(tenant_id=principal.tenant_id, tier=tier, unrestricted=True)

        ids = {principal.id}
        if tier is ScopeTier.TEAM:
            for report_id in self.directory.descendants(
                principal.id, transitive=self.team_transitive
            ):
                report = self.directory.get(report_id)
                # Never widen a team across a tenant boundary
                if report is not None and report.tenant_id == principal.tenant_id:
                    ids.add(report_id)

        return ScopeFilter(
            tenant_id=principal.tenant_id,
            tier=tier,
            principal_ids=frozenset(ids),
        )
