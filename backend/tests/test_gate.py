"""Authorization gate tests."""

import logging

import pytest

from hrms_api.constants.permissions import PermissionDefinition, Permissions
from hrms_api.constants.roles import LegacyRoleCode
from hrms_api.exceptions import AccessDeniedError
from hrms_api.models.domain.access import DenialReason, ScopeTier
from hrms_api.security.catalog import get_permission_catalog
from hrms_api.security.gate import tier_permissions

from conftest import TENANT_A, TENANT_B


class TestPermissionCheck:
    """OR semantics over the effective permission set."""

    def test_any_of_required_is_enough(self, build_gate, make_principal) -> None:
        """Holding one of several codes allows."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.LEAVES_VIEW_TEAM,))

        decision = gate.authorize(
            principal, [Permissions.LEAVES_VIEW_ALL, Permissions.LEAVES_VIEW_TEAM]
        )
        assert decision.allowed
        assert decision.reason is None

    def test_none_of_required_denies(self, build_gate, make_principal) -> None:
        """Holding none of the codes denies as missing permission."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.LEAVES_VIEW_OWN,))

        decision = gate.authorize(
            principal, [Permissions.LEAVES_VIEW_ALL, Permissions.LEAVES_VIEW_TEAM]
        )
        assert not decision
        assert decision.reason is DenialReason.MISSING_PERMISSION

    def test_decision_truthiness_follows_allowed(self, build_gate, make_principal) -> None:
        """A decision is truthy exactly when it allows."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.REPORTS_VIEW,))

        assert gate.authorize(principal, Permissions.REPORTS_VIEW)
        assert not gate.authorize(principal, Permissions.USERS_VIEW)

    def test_single_code_string(self, build_gate, make_principal) -> None:
        """A bare code string is one requirement, not a set of characters."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.REPORTS_VIEW,))

        assert gate.authorize(principal, Permissions.REPORTS_VIEW).required == (
            Permissions.REPORTS_VIEW,
        )

    def test_empty_requirement_fails_closed(self, build_gate, make_principal) -> None:
        """An operation without a requirement is denied, even to super-admins."""
        gate = build_gate()
        admin = make_principal(legacy=LegacyRoleCode.SUPER_ADMIN)

        assert gate.authorize(admin, []).reason is DenialReason.MISSING_PERMISSION

    def test_inactive_principal_is_denied_first(self, build_gate, make_principal) -> None:
        """Inactivity wins over any grant."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.REPORTS_VIEW,), is_active=False)

        assert gate.authorize(principal, Permissions.REPORTS_VIEW).reason is (
            DenialReason.INACTIVE_PRINCIPAL
        )

    def test_require_raises_with_generic_message(self, build_gate, make_principal) -> None:
        """require() raises a denial that keeps its reason out of the message."""
        gate = build_gate()
        with pytest.raises(AccessDeniedError) as exc_info:
            gate.require(make_principal(), Permissions.ROLES_MANAGE)

        assert exc_info.value.message == "Access denied"
        assert exc_info.value.decision.reason is DenialReason.MISSING_PERMISSION

    def test_denial_is_logged(self, build_gate, make_principal, caplog) -> None:
        """Denials go to the security logger with their reason."""
        gate = build_gate()
        with caplog.at_level(logging.WARNING, logger="security"):
            gate.authorize(make_principal(), Permissions.ROLES_MANAGE)
        assert "access_denied_permission" in caplog.text


class TestSuperAdminBypass:
    """The bypass is complete for permissions and bounded by tenants."""

    @pytest.mark.parametrize("code", get_permission_catalog().list_all())
    def test_superadmin_allowed_every_permission(
        self, build_gate, make_principal, superadmin_role, code: str
    ) -> None:
        """Every catalog permission is allowed to a super-admin."""
        gate = build_gate((superadmin_role,))
        assert gate.authorize(make_principal(roles=(superadmin_role,)), code).allowed

    def test_superadmin_allowed_permission_added_later(
        self, build_gate, catalog, make_principal, superadmin_role
    ) -> None:
        """A code registered after the role was created is covered too."""
        extended = catalog.extend(
            [PermissionDefinition("surveys.manage", "Manage surveys", "", "surveys")]
        )
        gate = build_gate((superadmin_role,), custom_catalog=extended)

        assert gate.authorize(make_principal(roles=(superadmin_role,)), "surveys.manage").allowed

    def test_tenant_superadmin_cannot_cross_tenants(
        self, build_gate, make_principal, superadmin_role
    ) -> None:
        """A super-admin of one company stays in that company."""
        gate = build_gate((superadmin_role,))
        admin = make_principal(roles=(superadmin_role,))

        decision = gate.authorize(admin, Permissions.USERS_VIEW, target_tenant_id=TENANT_B)
        assert decision.reason is DenialReason.TENANT_VIOLATION

    def test_platform_superadmin_crosses_tenants(
        self, build_gate, make_principal, superadmin_role
    ) -> None:
        """Only a platform operator with super-admin is exempt from isolation."""
        gate = build_gate((superadmin_role,))
        operator = make_principal(roles=(superadmin_role,), is_platform_admin=True)

        assert gate.authorize(operator, Permissions.USERS_VIEW, target_tenant_id=TENANT_B).allowed

    def test_platform_flag_alone_is_not_exempt(self, build_gate, make_principal) -> None:
        """The platform flag without super-admin gives no exemption."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.USERS_VIEW,), is_platform_admin=True)

        assert gate.authorize(
            principal, Permissions.USERS_VIEW, target_tenant_id=TENANT_B
        ).reason is DenialReason.TENANT_VIOLATION

    def test_require_super_admin(self, build_gate, make_principal, superadmin_role) -> None:
        """Only super-admins pass the super-admin check."""
        gate = build_gate((superadmin_role,))
        gate.require_super_admin(make_principal(roles=(superadmin_role,)))

        with pytest.raises(AccessDeniedError):
            gate.require_super_admin(make_principal(legacy=LegacyRoleCode.ADMIN))


class TestTenantIsolation:
    """Tenant checks apply on top of the permission check."""

    def test_same_tenant_allowed(self, build_gate, make_principal) -> None:
        """A record of the caller's own tenant passes."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.LEAVES_VIEW_ALL,))

        assert gate.authorize(
            principal, Permissions.LEAVES_VIEW_ALL, target_tenant_id=TENANT_A
        ).allowed

    def test_view_all_on_foreign_record_is_tenant_violation(
        self, build_gate, make_principal
    ) -> None:
        """view_all in tenant A does not reach a record of tenant B."""
        gate = build_gate()
        principal = make_principal(overrides=(Permissions.LEAVES_VIEW_ALL,))

        decision = gate.authorize(
            principal, Permissions.LEAVES_VIEW_ALL, target_tenant_id=TENANT_B
        )
        assert decision.reason is DenialReason.TENANT_VIOLATION
        assert decision.required == (Permissions.LEAVES_VIEW_ALL,)

    def test_tenant_admin_cannot_cross_tenants(self, build_gate, make_principal) -> None:
        """A tenant administrator holding the permission is still denied."""
        gate = build_gate()
        admin = make_principal(legacy=LegacyRoleCode.ADMIN)

        assert gate.authorize(
            admin, Permissions.USERS_VIEW, target_tenant_id=TENANT_B
        ).reason is DenialReason.TENANT_VIOLATION

    def test_missing_permission_reported_before_tenant(self, build_gate, make_principal) -> None:
        """Without the permission the denial says so, whatever the tenant."""
        gate = build_gate()
        decision = gate.authorize(
            make_principal(), Permissions.USERS_VIEW, target_tenant_id=TENANT_B
        )
        assert decision.reason is DenialReason.MISSING_PERMISSION


class TestScopeTiers:
    """Tier permissions and the broadest held tier."""

    def test_broader_tiers_satisfy_narrower(self) -> None:
        """view_all and manage satisfy team and own; view_team satisfies own."""
        assert set(tier_permissions("leaves", ScopeTier.ALL)) == {"leaves.view_all", "leaves.manage"}
        assert set(tier_permissions("leaves", ScopeTier.TEAM)) == {
            "leaves.view_team",
            "leaves.view_all",
            "leaves.manage",
        }
        assert "leaves.view_team" in tier_permissions("leaves", "own")

    def test_view_own_cannot_request_team(self, build_gate, make_principal) -> None:
        """X with only view_own is denied team before any resolution."""
        gate = build_gate()
        x = make_principal(overrides=(Permissions.LEAVES_VIEW_OWN,))

        decision = gate.authorize_scope(x, "leaves", ScopeTier.TEAM)
        assert decision.reason is DenialReason.MISSING_PERMISSION

    def test_highest_tier(self, build_gate, make_principal) -> None:
        """The broadest held tier is reported per resource."""
        gate = build_gate()
        manager = make_principal(legacy=LegacyRoleCode.MANAGER)

        assert gate.highest_tier(manager, "leaves") is ScopeTier.TEAM
        assert gate.highest_tier(manager, "budget") is None
        assert gate.highest_tier(make_principal(legacy=LegacyRoleCode.HR), "leaves") is ScopeTier.ALL

    def test_highest_tier_inactive(self, build_gate, make_principal) -> None:
        """Inactive principals hold no tier."""
        gate = build_gate()
        principal = make_principal(legacy=LegacyRoleCode.HR, is_active=False)
        assert gate.highest_tier(principal, "leaves") is None
