"""Translate a scope filter into a SQL predicate."""

from typing import TypeVar

from sqlalchemy import Select, false
from sqlalchemy.orm import InstrumentedAttribute

from hrms_api.models.domain.access import ScopeFilter

S = TypeVar("S", bound=Select)


def apply_scope(
    stmt: S,
    scope: ScopeFilter,
    owner_column: InstrumentedAttribute,
    tenant_column: InstrumentedAttribute,
) -> S:
    """Narrow a select to the records a scope filter allows.

    The tenant predicate is always applied, even for an unrestricted scope.

    Args:
        stmt: Feature query to narrow
        scope: Resolved scope of the caller
        owner_column: Column holding the owning principal id
        tenant_column: Column holding the owning tenant id

    Returns:
        Narrowed statement
    """
    stmt = stmt.where(tenant_column == scope.tenant_id)
    if scope.unrestricted:
        return stmt
    if not scope.principal_ids:
        return stmt.where(false())
    return stmt.where(owner_column.in_(sorted(scope.principal_ids)))
