"""Menu filtering by effective permissions."""

from collections.abc import Iterable

from hrms_api.models.domain.menu import MenuItem


def _visible(item: MenuItem, permissions: frozenset[str] | set[str]) -> bool:
    return item.is_active and (item.permission is None or item.permission in permissions)


def _filter_level(
    items: Iterable[MenuItem], permissions: frozenset[str] | set[str]
) -> list[MenuItem]:
    filtered: list[MenuItem] = []
    for item in items:
        if not _visible(item, permissions):
            continue
        children = _filter_level(
            sorted(item.children, key=lambda c: c.sort_order), permissions
        )
        if item.path or children:
            filtered.append(item.model_copy(update={"children": children}))
    return filtered


def filter_menu(items: Iterable[MenuItem], permissions: frozenset[str] | set[str]) -> list[MenuItem]:
    """Keep the menu entries a principal may see.

    Entries without a required permission are visible to everyone. A parent
    at any depth survives only if it links somewhere itself or keeps at least
    one visible child.

    Args:
        items: Root menu items
        permissions: Effective permissions of the principal

    Returns:
        Filtered copies, roots ordered by section and sort order
    """
    return _filter_level(
        sorted(items, key=lambda i: (i.section or "", i.sort_order)), permissions
    )
