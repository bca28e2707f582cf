"""Authorization gate: the single enforcement point for permission checks.

The super-admin bypass lives here and nowhere else. Tenant isolation is a
second, mandatory check that even a tenant super-admin cannot skip; only a
platform operator holding super-admin is exempt.
"""

from collections.abc import Iterable
from uuid import UUID

from hrms_api.exceptions import AccessDeniedError
from hrms_api.models.domain.access import AccessDecision, DenialReason, ScopeTier
from hrms_api.models.domain.principal import Principal
from hrms_api.security.role_store import RoleStore
from hrms_api.utils.security_events import SecurityEventType, log_security_event

_DENIAL_EVENTS = {
    DenialReason.MISSING_PERMISSION: SecurityEventType.ACCESS_DENIED_PERMISSION,
    DenialReason.TENANT_VIOLATION: SecurityEventType.ACCESS_DENIED_TENANT,
    DenialReason.INACTIVE_PRINCIPAL: SecurityEventType.ACCESS_DENIED_INACTIVE,
}


def tier_permissions(resource: str, tier: ScopeTier | str) -> tuple[str, ...]:
    """Permission codes that satisfy a scope tier on a resource.

    A broader tier always satisfies a narrower one: ``manage`` and
    ``view_all`` cover ``team`` and ``own``, ``view_team`` covers ``own``.
    """
    tier = ScopeTier(tier)
    broadest = (f"{resource}.view_all", f"{resource}.manage")
    if tier is ScopeTier.ALL:
        return broadest
    if tier is ScopeTier.TEAM:
        return (f"{resource}.view_team", *broadest)
    return (f"{resource}.view_own", f"{resource}.view_team", *broadest)


def _normalize(required: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(required, str):
        return (required,)
    return tuple(dict.fromkeys(required))


class AuthorizationGate:
    """Pure decision function over a principal and a permission requirement."""

    def __init__(self, role_store: RoleStore) -> None:
        self.role_store = role_store

    def _deny(
        self,
        principal: Principal,
        reason: DenialReason,
        required: tuple[str, ...],
        message: str,
        target_tenant_id: UUID | None = None,
    ) -> AccessDecision:
        log_security_event(
            _DENIAL_EVENTS[reason],
            principal_id=principal.id,
            tenant_id=principal.tenant_id,
            target_tenant_id=target_tenant_id,
            details={"reason": reason.value, "required": list(required)},
            success=False,
        )
        return AccessDecision(allowed=False, reason=reason, required=required, message=message)

    def is_tenant_exempt(self, principal: Principal) -> bool:
        """Check if a principal may cross tenant boundaries."""
        return principal.is_platform_admin and self.role_store.is_super_admin(principal)

    def check_tenant(
        self,
        principal: Principal,
        target_tenant_id: UUID | None,
        *,
        is_super_admin: bool | None = None,
    ) -> AccessDecision:
        """Check tenant isolation for a target record.

        Args:
            principal: Acting principal
            target_tenant_id: Tenant owning the record, None when not tenant-scoped

        Returns:
            AccessDecision
        """
        if target_tenant_id is None or target_tenant_id == principal.tenant_id:
            return AccessDecision(allowed=True)
        if is_super_admin is None:
            is_super_admin = self.role_store.is_super_admin(principal)
        if principal.is_platform_admin and is_super_admin:
            return AccessDecision(allowed=True)
        return self._deny(
            principal,
            DenialReason.TENANT_VIOLATION,
            (),
            "Record belongs to another tenant",
            target_tenant_id=target_tenant_id,
        )

    def authorize(
        self,
        principal: Principal,
        required: str | Iterable[str],
        *,
        target_tenant_id: UUID | None = None,
    ) -> AccessDecision:
        """Authorize a principal for one permission or any of several.

        A collection of permissions uses OR semantics: holding any single one
        of them is enough.

        Args:
            principal: Acting principal
            required: A permission code, or codes of which one must be held
            target_tenant_id: Tenant owning the target record, if any

        Returns:
            AccessDecision carrying the denial reason when not allowed
        """
        codes = _normalize(required)

        if not principal.is_active:
            return self._deny(
                principal, DenialReason.INACTIVE_PRINCIPAL, codes, "Principal is inactive"
            )

        if not codes:
            # An operation without a declared requirement is a configuration error
            return self._deny(
                principal,
                DenialReason.MISSING_PERMISSION,
                codes,
                "No permission requirement declared",
            )

        access = self.role_store.resolve(principal)
        if not access.is_super_admin:
            if access.permissions.isdisjoint(codes):
                return self._deny(
                    principal,
                    DenialReason.MISSING_PERMISSION,
                    codes,
                    f"Missing permission: one of {', '.join(codes)}",
                )

        tenant_decision = self.check_tenant(
            principal, target_tenant_id, is_super_admin=access.is_super_admin
        )
        if not tenant_decision.allowed:
            return tenant_decision.model_copy(update={"required": codes})

        return AccessDecision(allowed=True, required=codes)

    def require(
        self,
        principal: Principal,
        required: str | Iterable[str],
        *,
        target_tenant_id: UUID | None = None,
    ) -> AccessDecision:
        """Authorize or raise.

        Raises:
            AccessDeniedError: If the gate denies the request
        """
        decision = self.authorize(principal, required, target_tenant_id=target_tenant_id)
        if not decision.allowed:
            raise AccessDeniedError(decision)
        return decision

    def authorize_scope(
        self,
        principal: Principal,
        resource: str,
        tier: ScopeTier | str,
        *,
        target_tenant_id: UUID | None = None,
    ) -> AccessDecision:
        """Authorize a principal to request a scope tier on a resource."""
        return self.authorize(
            principal,
            tier_permissions(resource, tier),
            target_tenant_id=target_tenant_id,
        )

    def highest_tier(self, principal: Principal, resource: str) -> ScopeTier | None:
        """Broadest tier the principal holds on a resource, None if none."""
        if not principal.is_active:
            return None
        access = self.role_store.resolve(principal)
        if access.is_super_admin:
            return ScopeTier.ALL

        for tier in (ScopeTier.ALL, ScopeTier.TEAM, ScopeTier.OWN):
            if not access.permissions.isdisjoint(tier_permissions(resource, tier)):
                return tier
        return None

    def require_super_admin(self, principal: Principal) -> AccessDecision:
        """Allow only an active super-admin.

        Raises:
            AccessDeniedError: If the principal is inactive or not a super-admin
        """
        if not principal.is_active:
            decision = self._deny(
                principal, DenialReason.INACTIVE_PRINCIPAL, (), "Principal is inactive"
            )
        elif not self.role_store.is_super_admin(principal):
            decision = self._deny(
                principal, DenialReason.MISSING_PERMISSION, (), "Super-admin required"
            )
        else:
            return AccessDecision(allowed=True)
        raise AccessDeniedError(decision)
