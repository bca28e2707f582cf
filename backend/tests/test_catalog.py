"""Permission catalog tests."""

import pytest

from hrms_api.constants.permissions import DEFAULT_PERMISSIONS, PermissionDefinition, Permissions
from hrms_api.exceptions import UnknownPermissionError
from hrms_api.security.catalog import PermissionCatalog


def _definition(code: str, category: str | None = None) -> PermissionDefinition:
    return PermissionDefinition(code, code, "", category or code.split(".")[0])


class TestPermissionCatalog:
    """Catalog listing, lookup and validation."""

    def test_list_all_is_sorted_by_category_then_code(self) -> None:
        """Codes come out grouped by category, each group sorted."""
        catalog = PermissionCatalog(
            [_definition("leaves.view_all"), _definition("budget.manage"), _definition("leaves.create")]
        )
        assert catalog.list_all() == ("budget.manage", "leaves.create", "leaves.view_all")

    def test_duplicates_are_dropped_first_wins(self) -> None:
        """Registering a code twice keeps the first definition."""
        first = PermissionDefinition("tasks.manage", "First", "", "tasks")
        second = PermissionDefinition("tasks.manage", "Second", "", "tasks")
        catalog = PermissionCatalog([first, second])

        assert len(catalog) == 1
        assert catalog.get("tasks.manage").name == "First"

    @pytest.mark.parametrize("code", ["leaves", "leaves.", ".view", ""])
    def test_malformed_code_is_rejected(self, code: str) -> None:
        """Every code must follow resource.action."""
        with pytest.raises(ValueError):
            PermissionCatalog([PermissionDefinition(code, code, "", "misc")])

    def test_exists_and_contains(self, catalog) -> None:
        """Known codes are found, unknown ones are not."""
        assert catalog.exists(Permissions.LEAVES_VIEW_TEAM)
        assert Permissions.ORGCHART_VIEW in catalog
        assert not catalog.exists("leaves.teleport")

    def test_default_catalog_covers_every_constant(self, catalog) -> None:
        """Each permission constant is in the default catalog."""
        constants = {
            value
            for key, value in vars(Permissions).items()
            if key.isupper() and isinstance(value, str)
        }
        assert constants == catalog.codes
        assert len(DEFAULT_PERMISSIONS) == len(catalog)

    def test_by_category_groups_definitions(self, catalog) -> None:
        """Grouping puts every code under its resource."""
        grouped = catalog.by_category()
        assert {d.code for d in grouped["leaves"]} >= {
            Permissions.LEAVES_VIEW_OWN,
            Permissions.LEAVES_VIEW_TEAM,
            Permissions.LEAVES_VIEW_ALL,
        }
        assert all(d.category == category for category, defs in grouped.items() for d in defs)

    def test_validate_reports_unknown_codes(self, catalog) -> None:
        """Validation names every unknown code."""
        with pytest.raises(UnknownPermissionError) as exc_info:
            catalog.validate([Permissions.LEAVES_CREATE, "leaves.teleport", "ghost.haunt"])
        assert exc_info.value.codes == ["ghost.haunt", "leaves.teleport"]

    def test_validate_accepts_known_codes(self, catalog) -> None:
        """Validation passes silently for known codes."""
        catalog.validate([Permissions.LEAVES_CREATE, Permissions.ROLES_VIEW])

    def test_extend_and_without_return_new_catalogs(self, catalog) -> None:
        """Derived catalogs leave the original untouched."""
        extended = catalog.extend([_definition("surveys.view")])
        shrunk = catalog.without([Permissions.BUDGET_MANAGE])

        assert "surveys.view" in extended
        assert "surveys.view" not in catalog
        assert Permissions.BUDGET_MANAGE not in shrunk
        assert Permissions.BUDGET_MANAGE in catalog
