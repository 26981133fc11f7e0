"""Module and Action entities - matrix rows and columns."""

from dataclasses import dataclass

from permatrix.domain.entities.permission import Permission


@dataclass(frozen=True)
class Action:
    """Operation kind (ver, crear, ...) - a matrix column."""

    key: str
    label: str


@dataclass(frozen=True)
class Module:
    """Functional area grouping permissions - a matrix row.

    Permission order is display order.
    """

    key: str
    label: str
    permissions: tuple[Permission, ...]

    def permission_for(self, action_key: str) -> Permission | None:
        for permission in self.permissions:
            if permission.action == action_key:
                return permission
        return None
