"""HTTP tests for the access router with overridden dependencies."""

from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from hrms_api.constants.permissions import Permissions
from hrms_api.constants.roles import LegacyRoleCode
from hrms_api.dependencies import get_access_service, get_rbac_service
from hrms_api.exceptions import HrmsAPIError
from hrms_api.main import create_app
from hrms_api.middleware.error_handler import domain_exception_handler
from hrms_api.models.domain.access import ScopeFilter
from hrms_api.security.dependencies import get_access_context, require_permission, require_scope
from hrms_api.services.access_service import AccessService
from hrms_api.services.rbac_service import RbacService

from conftest import TENANT_B


@pytest.fixture
def app():
    """Application without lifespan; tests never enter the client context."""
    application = create_app()
    application.dependency_overrides[get_access_service] = lambda: AccessService(AsyncMock())
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client_for(app, make_context):
    """Return a client acting as the given principal."""

    def factory(principal, others=()) -> TestClient:
        context = make_context(principal, others=others)
        app.dependency_overrides[get_access_context] = lambda: context
        return TestClient(app)

    return factory


class TestAuthentication:
    """Requests without credentials."""

    def test_missing_token(self) -> None:
        """No bearer token means 401, not 403."""
        client = TestClient(create_app())
        response = client.get("/api/v1/access/me")
        assert response.status_code == 401


class TestEffectiveAccess:
    """GET /me."""

    def test_employee_access(self, client_for, make_principal) -> None:
        """An employee sees own-tier scopes only."""
        principal = make_principal(legacy=LegacyRoleCode.EMPLOYEE)
        response = client_for(principal).get("/api/v1/access/me")

        assert response.status_code == 200
        body = response.json()
        assert body["principal_id"] == str(principal.id)
        assert body["is_superadmin"] is False
        assert Permissions.PROFILE_VIEW_OWN in body["permissions"]
        assert body["scopes"]["leaves"] == "own"

    def test_inactive_principal(self, client_for, make_principal) -> None:
        """Deactivated principals are denied everything."""
        principal = make_principal(legacy=LegacyRoleCode.ADMIN, is_active=False)
        response = client_for(principal).get("/api/v1/access/me")

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}


class TestPermissionCatalog:
    """GET /permissions."""

    def test_admin_lists_catalog(self, client_for, make_principal, catalog) -> None:
        """Admins get every permission grouped by category."""
        response = client_for(make_principal(legacy=LegacyRoleCode.ADMIN)).get(
            "/api/v1/access/permissions"
        )

        assert response.status_code == 200
        listed = [perm["code"] for group in response.json() for perm in group["permissions"]]
        assert sorted(listed) == sorted(catalog.list_all())

    def test_employee_is_denied(self, client_for, make_principal) -> None:
        """A missing permission yields the generic denial."""
        response = client_for(make_principal(legacy=LegacyRoleCode.EMPLOYEE)).get(
            "/api/v1/access/permissions"
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}


class TestScope:
    """GET /scope/{resource}."""

    def test_manager_team_scope(self, client_for, make_principal) -> None:
        """A manager's team scope lists the manager and their reports."""
        manager = make_principal(legacy=LegacyRoleCode.MANAGER)
        report = make_principal(legacy=LegacyRoleCode.EMPLOYEE, manager_id=manager.id)

        response = client_for(manager, others=(report,)).get(
            "/api/v1/access/scope/leaves", params={"scope": "team"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tier"] == "team"
        assert body["unrestricted"] is False
        assert sorted(body["principal_ids"]) == sorted([str(manager.id), str(report.id)])

    def test_tier_above_grant_is_denied(self, client_for, make_principal) -> None:
        """An employee cannot ask for the whole company."""
        response = client_for(make_principal(legacy=LegacyRoleCode.EMPLOYEE)).get(
            "/api/v1/access/scope/leaves", params={"scope": "all"}
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}

    def test_unknown_resource(self, client_for, make_principal) -> None:
        """Only scoped resources resolve."""
        response = client_for(make_principal(legacy=LegacyRoleCode.ADMIN)).get(
            "/api/v1/access/scope/spaceships"
        )
        assert response.status_code == 404


class TestMenuAndOrgChart:
    """GET /menu and GET /org-chart."""

    def test_menu_hides_administration_for_employees(self, client_for, make_principal) -> None:
        """Employees do not see the administration section."""
        response = client_for(make_principal(legacy=LegacyRoleCode.EMPLOYEE)).get(
            "/api/v1/access/menu"
        )

        assert response.status_code == 200
        keys = [item["key"] for item in response.json()["items"]]
        assert "dashboard" in keys
        assert "administration" not in keys

    def test_org_chart(self, client_for, make_principal) -> None:
        """The chart holds every active principal of the tenant."""
        boss = make_principal(legacy=LegacyRoleCode.ADMIN)
        report = make_principal(manager_id=boss.id)
        gone = make_principal(manager_id=boss.id, is_active=False)

        response = client_for(boss, others=(report, gone)).get("/api/v1/access/org-chart")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [root["id"] for root in body["roots"]] == [str(boss.id)]
        assert [child["id"] for child in body["roots"][0]["children"]] == [str(report.id)]


class TestRoleWrites:
    """Role endpoints surface domain errors with the right status."""

    def test_cross_tenant_role_delete_is_not_found(self, app, client_for, make_principal) -> None:
        """Another company's role answers exactly like a role that does not exist."""
        rbac = RbacService(AsyncMock())
        rbac.role_repo = AsyncMock()
        app.dependency_overrides[get_rbac_service] = lambda: rbac
        client = client_for(make_principal(legacy=LegacyRoleCode.ADMIN))
        role_id = uuid4()

        rbac.role_repo.get_with_permissions.return_value = SimpleNamespace(
            id=role_id, code="planner", tenant_id=TENANT_B, is_system=False, permissions=[]
        )
        foreign = client.delete(f"/api/v1/access/roles/{role_id}")

        rbac.role_repo.get_with_permissions.return_value = None
        missing = client.delete(f"/api/v1/access/roles/{role_id}")

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()
        assert str(TENANT_B) not in foreign.text

    def test_unknown_permission_code(self, app, client_for, make_principal) -> None:
        """Unknown codes are a 400 naming the offending codes."""
        app.dependency_overrides[get_rbac_service] = lambda: RbacService(AsyncMock())

        response = client_for(make_principal(legacy=LegacyRoleCode.ADMIN)).put(
            f"/api/v1/access/roles/{uuid4()}/permissions",
            json={"permissions": ["leaves.teleport"]},
        )

        assert response.status_code == 400
        assert response.json()["details"]["codes"] == ["leaves.teleport"]


@pytest.fixture
def guarded_app(make_context):
    """Minimal app exercising the dependency factories directly."""
    application = FastAPI()
    application.add_exception_handler(HrmsAPIError, domain_exception_handler)

    reports_guard = require_permission(Permissions.REPORTS_VIEW, Permissions.REPORTS_CREATE)

    @application.get("/reports")
    async def reports(context=Depends(reports_guard)):
        return {"principal_id": str(context.principal.id)}

    @application.get("/leaves")
    async def leaves(scope: ScopeFilter = Depends(require_scope("leaves"))):
        return {"tier": scope.tier, "unrestricted": scope.unrestricted}

    @application.get("/leaves/team")
    async def team_leaves(scope: ScopeFilter = Depends(require_scope("leaves", "team"))):
        return {"tier": scope.tier}

    def act_as(principal) -> TestClient:
        context = make_context(principal)
        application.dependency_overrides[get_access_context] = lambda: context
        return TestClient(application)

    return act_as


class TestDependencyFactories:
    """require_permission and require_scope."""

    def test_any_listed_permission_is_enough(self, guarded_app, make_principal) -> None:
        """The listed permissions use OR semantics."""
        principal = make_principal(overrides=(Permissions.REPORTS_CREATE,))
        response = guarded_app(principal).get("/reports")

        assert response.status_code == 200
        assert response.json() == {"principal_id": str(principal.id)}

    def test_none_of_the_permissions(self, guarded_app, make_principal) -> None:
        """Holding none of them is a 403."""
        response = guarded_app(make_principal(legacy=LegacyRoleCode.EMPLOYEE)).get("/reports")
        assert response.status_code == 403

    def test_scope_defaults_to_broadest_tier(self, guarded_app, make_principal) -> None:
        """Without a query parameter the broadest held tier is used."""
        response = guarded_app(make_principal(legacy=LegacyRoleCode.HR)).get("/leaves")

        assert response.status_code == 200
        assert response.json() == {"tier": "all", "unrestricted": True}

    def test_scope_query_parameter_narrows(self, guarded_app, make_principal) -> None:
        """A caller may ask for less than they hold."""
        response = guarded_app(make_principal(legacy=LegacyRoleCode.HR)).get(
            "/leaves", params={"scope": "own"}
        )

        assert response.status_code == 200
        assert response.json()["tier"] == "own"

    def test_fixed_tier_is_enforced(self, guarded_app, make_principal) -> None:
        """A route fixed to the team tier rejects employees."""
        response = guarded_app(make_principal(legacy=LegacyRoleCode.EMPLOYEE)).get("/leaves/team")

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}

    def test_no_tier_at_all(self, guarded_app, make_principal) -> None:
        """A principal holding no leave permission is denied."""
        response = guarded_app(make_principal()).get("/leaves")
        assert response.status_code == 403
