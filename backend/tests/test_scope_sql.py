"""Scope filter to SQL predicate translation."""

from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from hrms_api.models.domain.access import ScopeFilter, ScopeTier
from hrms_api.models.orm.principal import PrincipalORM
from hrms_api.repositories.scope import apply_scope

from conftest import TENANT_A


def _compile(scope: ScopeFilter):
    stmt = apply_scope(select(PrincipalORM.id), scope, PrincipalORM.id, PrincipalORM.tenant_id)
    return stmt.compile(dialect=postgresql.dialect())


class TestApplyScope:
    """apply_scope predicates."""

    def test_unrestricted_keeps_tenant_filter(self) -> None:
        """The all tier still filters by tenant."""
        compiled = _compile(ScopeFilter(tenant_id=TENANT_A, tier=ScopeTier.ALL, unrestricted=True))
        sql = str(compiled)

        assert "users.tenant_id =" in sql
        assert " IN " not in sql
        assert TENANT_A in compiled.params.values()

    def test_id_set_adds_in_predicate(self) -> None:
        """A team scope becomes an IN over the allowed owners."""
        ids = frozenset({uuid4(), uuid4()})
        compiled = _compile(ScopeFilter(tenant_id=TENANT_A, tier=ScopeTier.TEAM, principal_ids=ids))
        sql = str(compiled)

        assert "users.tenant_id =" in sql
        assert "users.id IN" in sql
        assert sorted(ids) in compiled.params.values()

    def test_empty_id_set_matches_nothing(self) -> None:
        """An empty scope never widens to the tenant."""
        compiled = _compile(ScopeFilter(tenant_id=TENANT_A, tier=ScopeTier.OWN))
        assert "false" in str(compiled)

    def test_values_are_bound_parameters(self) -> None:
        """Ids are never inlined into the statement text."""
        owner = uuid4()
        compiled = _compile(
            ScopeFilter(tenant_id=TENANT_A, tier=ScopeTier.OWN, principal_ids=frozenset({owner}))
        )
        assert str(owner) not in str(compiled)
        assert str(TENANT_A) not in str(compiled)
