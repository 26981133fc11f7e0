"""Edit session - staged direct-permission selection for one user.

An ``EditSession`` is an immutable value; every transition returns a new
session and leaves the original untouched. Nothing is persisted until the
session is handed to the save use case.
"""

from dataclasses import dataclass, replace

from permatrix.domain.catalog import PermissionCatalog
from permatrix.domain.matrix import (
    PermissionMatrix,
    action_editable,
    aggregate_state,
    module_editable,
    present,
    toggle_group,
)
from permatrix.domain.resolution import ResolvedPermissions
from permatrix.domain.value_objects import AggregateState


@dataclass(frozen=True)
class EditSession:
    """Original and current direct selections over a resolved user."""

    catalog: PermissionCatalog
    resolved: ResolvedPermissions
    original: frozenset[str]
    current: frozenset[str]

    @classmethod
    def open(cls, catalog: PermissionCatalog, resolved: ResolvedPermissions) -> "EditSession":
        return cls(
            catalog=catalog,
            resolved=resolved,
            original=resolved.direct_only,
            current=resolved.direct_only,
        )

    @property
    def inherited(self) -> frozenset[str]:
        return self.resolved.inherited

    @property
    def has_changes(self) -> bool:
        return self.current != self.original

    @property
    def added(self) -> frozenset[str]:
        return self.current - self.original

    @property
    def removed(self) -> frozenset[str]:
        return self.original - self.current

    def toggle_one(self, name: str) -> "EditSession":
        """Flip one direct permission; inherited permissions are never toggled."""
        self.catalog.get(name)
        if name in self.inherited:
            return self
        return replace(self, current=self.current ^ {name})

    def toggle_module(self, module_key: str) -> "EditSession":
        editable = module_editable(self.catalog, self.inherited, module_key)
        return replace(self, current=toggle_group(editable, self.current))

    def toggle_action(self, action_key: str) -> "EditSession":
        editable = action_editable(self.catalog, self.inherited, action_key)
        return replace(self, current=toggle_group(editable, self.current))

    def discard(self) -> "EditSession":
        return replace(self, current=self.original)

    def rebase(self, catalog: PermissionCatalog, resolved: ResolvedPermissions) -> "EditSession":
        """Carry the pending selection over a freshly resolved user.

        ``original`` becomes the stored direct grants; the selection keeps
        every pick that is still in the catalog and not now inherited.
        """
        return EditSession(
            catalog=catalog,
            resolved=resolved,
            original=resolved.direct_only,
            current=(self.current - resolved.inherited) & catalog.names,
        )

    def module_state(self, module_key: str) -> AggregateState:
        return aggregate_state(
            module_editable(self.catalog, self.inherited, module_key), self.current
        )

    def action_state(self, action_key: str) -> AggregateState:
        return aggregate_state(
            action_editable(self.catalog, self.inherited, action_key), self.current
        )

    def matrix(self) -> PermissionMatrix:
        return present(self.catalog, self.resolved, self.current)

    def submission(self) -> frozenset[str]:
        """Names sent on save: everything the user should have."""
        return self.inherited | self.current
