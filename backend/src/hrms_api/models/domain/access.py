"""Access control domain models: decisions and scope filters."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ScopeTier(StrEnum):
    """Breadth of a scoped permission."""

    OWN = "own"
    TEAM = "team"
    ALL = "all"


class DenialReason(StrEnum):
    """Machine-readable denial reasons, kept distinct for audit logging."""

    MISSING_PERMISSION = "missing_permission"
    TENANT_VIOLATION = "tenant_violation"
    INACTIVE_PRINCIPAL = "inactive_principal"


class AccessDecision(BaseModel):
    """Outcome of an authorization check."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: DenialReason | None = None
    required: tuple[str, ...] = ()
    message: str = ""

    def __bool__(self) -> bool:
        return self.allowed


class ScopeFilter(BaseModel):
    """Records a caller may touch: a principal id set or the whole tenant.

    ``unrestricted`` only lifts the id filter; the tenant filter always applies.
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: UUID
    tier: ScopeTier
    unrestricted: bool = False
    principal_ids: frozenset[UUID] = frozenset()

    def allows(self, principal_id: UUID | None, tenant_id: UUID | None) -> bool:
        """Check whether a record owned by ``principal_id`` falls inside the scope.

        A record without a known tenant is never inside any scope.
        """
        if tenant_id is None or tenant_id != self.tenant_id:
            return False
        if self.unrestricted:
            return True
        return principal_id is not None and principal_id in self.principal_ids
