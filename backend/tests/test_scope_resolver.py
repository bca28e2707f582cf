"""Scope resolver tests."""

from uuid import uuid4

import pytest

from hrms_api.models.domain.access import ScopeTier
from hrms_api.services.hierarchy_directory import HierarchyDirectory
from hrms_api.services.scope_resolver import ScopeResolver

from conftest import TENANT_A, TENANT_B


@pytest.fixture
def team(make_principal):
    """M manages X and Y; Y manages Z; W is unrelated."""
    m = make_principal()
    x = make_principal(manager_id=m.id)
    y = make_principal(manager_id=m.id)
    z = make_principal(manager_id=y.id)
    w = make_principal()
    return HierarchyDirectory([m, x, y, z, w]), m, x, y, z, w


class TestOwnScope:
    """The own tier ignores the hierarchy."""

    def test_own_is_just_the_caller(self, team) -> None:
        """Own scope is exactly the caller."""
        directory, m, *_ = team
        scope = ScopeResolver(directory).resolve(m, ScopeTier.OWN)

        assert scope.principal_ids == {m.id}
        assert not scope.unrestricted
        assert scope.tenant_id == TENANT_A

    def test_own_for_principal_in_a_cycle(self, make_principal) -> None:
        """Own scope is the caller even inside a loop."""
        a = make_principal()
        b = make_principal(manager_id=a.id)
        a = a.model_copy(update={"manager_id": b.id})
        scope = ScopeResolver(HierarchyDirectory([a, b])).resolve(a, "own")

        assert scope.principal_ids == {a.id}


class TestTeamScope:
    """The team tier follows the reporting subtree."""

    def test_manager_team_includes_reports(self, team) -> None:
        """M's team is M, its reports and theirs."""
        directory, m, x, y, z, w = team
        scope = ScopeResolver(directory).resolve(m, ScopeTier.TEAM)

        assert scope.principal_ids == {m.id, x.id, y.id, z.id}
        assert w.id not in scope.principal_ids

    def test_direct_only_team(self, team) -> None:
        """With transitive resolution off, only direct reports count."""
        directory, m, x, y, _z, _w = team
        scope = ScopeResolver(directory, team_transitive=False).resolve(m, ScopeTier.TEAM)

        assert scope.principal_ids == {m.id, x.id, y.id}

    def test_team_of_leaf_is_self(self, team) -> None:
        """A principal without reports sees only themselves."""
        directory, _m, x, *_ = team
        assert ScopeResolver(directory).resolve(x, ScopeTier.TEAM).principal_ids == {x.id}

    def test_team_is_idempotent(self, team) -> None:
        """Resolving twice gives the same set."""
        directory, m, *_ = team
        resolver = ScopeResolver(directory)
        assert resolver.resolve(m, "team") == resolver.resolve(m, "team")

    def test_team_members_descend_from_caller(self, team) -> None:
        """Each member is the caller or has the caller among its ancestors."""
        directory, m, *_ = team
        for member in ScopeResolver(directory).resolve(m, "team").principal_ids:
            assert member == m.id or m.id in directory.ancestors(member)

    def test_team_inside_a_cycle_terminates(self, make_principal) -> None:
        """Loop members are roots and their team is themselves."""
        a = make_principal()
        b = make_principal(manager_id=a.id)
        a = a.model_copy(update={"manager_id": b.id})
        directory = HierarchyDirectory([a, b])

        assert ScopeResolver(directory).resolve(a, "team").principal_ids == {a.id}

    def test_team_never_crosses_tenants(self, make_principal) -> None:
        """A report stored under another tenant is left out."""
        m = make_principal()
        outsider = make_principal(manager_id=m.id, tenant_id=TENANT_B)
        directory = HierarchyDirectory([m, outsider])

        assert ScopeResolver(directory).resolve(m, "team").principal_ids == {m.id}


class TestAllScope:
    """The all tier lifts the id filter, never the tenant filter."""

    def test_all_is_unrestricted_within_tenant(self, team) -> None:
        """All scope allows any record of the caller's tenant only."""
        directory, m, *_ = team
        scope = ScopeResolver(directory).resolve(m, ScopeTier.ALL)

        assert scope.unrestricted
        assert scope.allows(uuid4(), TENANT_A)
        assert not scope.allows(uuid4(), TENANT_B)

    def test_restricted_scope_allows_members_only(self, team) -> None:
        """A team scope admits members and rejects outsiders."""
        directory, m, x, _y, _z, w = team
        scope = ScopeResolver(directory).resolve(m, ScopeTier.TEAM)

        assert scope.allows(x.id, TENANT_A)
        assert not scope.allows(w.id, TENANT_A)
        assert not scope.allows(None, TENANT_A)
        assert not scope.allows(x.id, TENANT_B)

    def test_record_without_tenant_is_outside_every_scope(self, team) -> None:
        """An unknown owning tenant fails closed, even for the all tier."""
        directory, m, x, *_ = team
        resolver = ScopeResolver(directory)

        assert not resolver.resolve(m, ScopeTier.ALL).allows(x.id, None)
        assert not resolver.resolve(m, ScopeTier.TEAM).allows(x.id, None)
