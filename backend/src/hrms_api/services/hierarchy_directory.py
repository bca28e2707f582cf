"""Read-only view of the reporting hierarchy.

The ``manager_id`` pointers stored on principals are not guaranteed to form a
tree: a manager may be deactivated or deleted, and bad data entry can close a
loop. The directory resolves every principal to an *effective* manager once,
at construction, so that every consumer (scope resolution, org chart) sees
the same forest:

- a manager that is missing or inactive makes the principal a root;
- every principal whose manager chain loops back onto itself is a root
  (the cyclic edge is dropped), so A -> B -> A yields two roots.

Traversals still carry a visited set and never assume acyclicity.
"""

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from uuid import UUID

from hrms_api.models.domain.principal import Principal
from hrms_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


class HierarchyDirectory:
    """Arena of principals indexed by id with parent links."""

    def __init__(self, principals: Iterable[Principal]) -> None:
        """Build the directory from a snapshot of principals.

        Args:
            principals: All principals of one tenant, active or not. Iteration
                order is kept for report lists.
        """
        self._principals: dict[UUID, Principal] = {}
        for principal in principals:
            self._principals.setdefault(principal.id, principal)

        self._active: dict[UUID, Principal] = {
            pid: p for pid, p in self._principals.items() if p.is_active
        }

        self._orphaned: set[UUID] = set()
        linked: dict[UUID, UUID | None] = {}
        for pid, principal in self._active.items():
            manager_id = principal.manager_id
            if manager_id is not None and manager_id not in self._active:
                self._orphaned.add(pid)
                manager_id = None
            linked[pid] = manager_id

        self._cyclic: frozenset[UUID] = frozenset(_find_cycle_members(linked))

        self._manager: dict[UUID, UUID | None] = {
            pid: (None if pid in self._cyclic else manager_id)
            for pid, manager_id in linked.items()
        }

        self._reports: dict[UUID, list[UUID]] = {pid: [] for pid in self._active}
        self._roots: list[UUID] = []
        for pid, manager_id in self._manager.items():
            if manager_id is None:
                self._roots.append(pid)
            else:
                self._reports[manager_id].append(pid)

        if self._orphaned or self._cyclic:
            log_security_event(
                SecurityEventType.HIERARCHY_DEGRADED,
                details={
                    "orphaned": sorted(str(pid) for pid in self._orphaned),
                    "cyclic": sorted(str(pid) for pid in self._cyclic),
                },
                success=False,
            )

    def __contains__(self, principal_id: object) -> bool:
        return principal_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    @property
    def cyclic(self) -> frozenset[UUID]:
        """Principals whose manager chain loops back onto themselves."""
        return self._cyclic

    @property
    def orphaned(self) -> frozenset[UUID]:
        """Principals whose manager is missing or inactive."""
        return frozenset(self._orphaned)

    def get(self, principal_id: UUID) -> Principal | None:
        """Get an active principal by id."""
        return self._active.get(principal_id)

    def active_principals(self) -> list[Principal]:
        """Active principals in snapshot order."""
        return list(self._active.values())

    def effective_manager(self, principal_id: UUID) -> UUID | None:
        """Manager after applying the orphan and cycle policies."""
        return self._manager.get(principal_id)

    def roots(self) -> list[UUID]:
        """Forest roots: principals without an effective manager."""
        return list(self._roots)

    def direct_reports(self, principal_id: UUID) -> frozenset[UUID]:
        """Principals whose effective manager is ``principal_id``."""
        return frozenset(self._reports.get(principal_id, ()))

    def ordered_reports(self, principal_id: UUID) -> list[UUID]:
        """Direct reports in snapshot order."""
        return list(self._reports.get(principal_id, ()))

    def descendants(self, principal_id: UUID, transitive: bool = True) -> set[UUID]:
        """Collect the reports of a principal.

        Args:
            principal_id: Root of the subtree
            transitive: Include reports-of-reports when True

        Returns:
            Report ids, never including ``principal_id`` itself
        """
        if not transitive:
            return set(self._reports.get(principal_id, ()))

        visited: set[UUID] = {principal_id}
        queue = deque(self._reports.get(principal_id, ()))
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            queue.extend(self._reports.get(current, ()))
        visited.discard(principal_id)
        return visited

    def ancestors(self, principal_id: UUID) -> list[UUID]:
        """Walk from a principal up to its root.

        Returns:
            Ids ordered from the principal to its root; empty for principals
            that are not active members of the directory
        """
        if principal_id not in self._active:
            return []

        chain: list[UUID] = []
        visited: set[UUID] = set()
        current: UUID | None = principal_id
        while current is not None and current not in visited:
            visited.add(current)
            chain.append(current)
            current = self._manager.get(current)
        return chain

    def is_descendant(self, candidate_id: UUID, root_id: UUID) -> bool:
        """Check whether ``candidate_id`` reports to ``root_id``, directly or not."""
        if candidate_id == root_id:
            return False
        return root_id in self.ancestors(candidate_id)[1:]

    def would_create_cycle(self, principal_id: UUID, new_manager_id: UUID | None) -> bool:
        """Check whether pointing ``principal_id`` at ``new_manager_id`` closes a loop.

        Uses the stored edges of every known principal, inactive ones included,
        so that reactivating someone can never resurrect a loop.
        """
        edges = {pid: p.manager_id for pid, p in self._principals.items()}
        return closes_cycle(edges, principal_id, new_manager_id)


def closes_cycle(
    manager_of: Mapping[UUID, UUID | None],
    principal_id: UUID,
    new_manager_id: UUID | None,
) -> bool:
    """Check whether a new ``principal -> manager`` edge would close a loop.

    Walks up from the new manager over the stored edges; a visited set keeps
    the walk finite when the stored graph already contains a loop.
    """
    if new_manager_id is None:
        return False

    visited: set[UUID] = set()
    current: UUID | None = new_manager_id
    while current is not None and current not in visited:
        if current == principal_id:
            return True
        visited.add(current)
        current = manager_of.get(current)
    return False


def _find_cycle_members(manager_of: dict[UUID, UUID | None]) -> set[UUID]:
    """Find every node lying on a loop of the manager graph.

    Each node is walked at most once, so this is linear in the number of nodes.
    """
    on_cycle: set[UUID] = set()
    settled: set[UUID] = set()

    for start in manager_of:
        if start in settled:
            continue
        path: list[UUID] = []
        position: dict[UUID, int] = {}
        current: UUID | None = start
        while current is not None and current not in settled:
            if current in position:
                on_cycle.update(path[position[current]:])
                break
            position[current] = len(path)
            path.append(current)
            current = manager_of.get(current)
        settled.update(path)

    return on_cycle
