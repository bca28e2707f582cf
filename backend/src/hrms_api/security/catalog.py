"""Permission catalog: the vocabulary every permission check is made against."""

from collections.abc import Iterable
from functools import lru_cache

from hrms_api.constants.permissions import DEFAULT_PERMISSIONS, PermissionDefinition
from hrms_api.exceptions import UnknownPermissionError


class PermissionCatalog:
    """Read-only registry of permission definitions grouped by category.

    Codes are the unit of comparison; categories only drive display.
    """

    def __init__(self, definitions: Iterable[PermissionDefinition]) -> None:
        by_code: dict[str, PermissionDefinition] = {}
        for definition in definitions:
            category, sep, action = definition.code.partition(".")
            if not sep or not category or not action:
                raise ValueError(
                    f"Permission code '{definition.code}' must follow '<resource>.<action>'"
                )
            # First definition wins; re-registering a code is a no-op
            by_code.setdefault(definition.code, definition)

        ordered = sorted(by_code.values(), key=lambda d: (d.category, d.code))
        self._definitions: tuple[PermissionDefinition, ...] = tuple(ordered)
        self._by_code = by_code
        self._codes: frozenset[str] = frozenset(by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._definitions)

    def list_all(self) -> tuple[str, ...]:
        """List every permission code, ordered by category then code."""
        return tuple(d.code for d in self._definitions)

    @property
    def codes(self) -> frozenset[str]:
        """All permission codes as a set."""
        return self._codes

    def exists(self, code: str) -> bool:
        """Check whether a permission code is part of the catalog."""
        return code in self._codes

    def get(self, code: str) -> PermissionDefinition | None:
        """Get the definition of a permission code."""
        return self._by_code.get(code)

    def by_category(self) -> dict[str, list[PermissionDefinition]]:
        """Group definitions by category for display."""
        grouped: dict[str, list[PermissionDefinition]] = {}
        for definition in self._definitions:
            grouped.setdefault(definition.category, []).append(definition)
        return grouped

    def unknown(self, codes: Iterable[str]) -> set[str]:
        """Return the codes that are not part of the catalog."""
        return {code for code in codes if code not in self._codes}

    def validate(self, codes: Iterable[str]) -> None:
        """Validate permission codes against the catalog.

        Raises:
            UnknownPermissionError: If any code is not part of the catalog
        """
        missing = self.unknown(codes)
        if missing:
            raise UnknownPermissionError(missing)

    def extend(self, definitions: Iterable[PermissionDefinition]) -> "PermissionCatalog":
        """Return a new catalog with additional definitions."""
        return PermissionCatalog((*self._definitions, *definitions))

    def without(self, codes: Iterable[str]) -> "PermissionCatalog":
        """Return a new catalog with the given codes removed."""
        dropped = set(codes)
        return PermissionCatalog(d for d in self._definitions if d.code not in dropped)


@lru_cache
def get_permission_catalog() -> PermissionCatalog:
    """Get the catalog seeded from the platform permission constants."""
    return PermissionCatalog(DEFAULT_PERMISSIONS)
