"""Permission matrix DTOs - wire shapes of the load/save responses."""

from dataclasses import dataclass

from permatrix.domain.catalog import PermissionCatalog
from permatrix.domain.entities import Role, User
from permatrix.domain.matrix import present
from permatrix.domain.resolution import ResolvedPermissions


@dataclass
class UserPermissions:
    """A user with their roles and resolved permissions over one catalog."""

    user: User
    roles: list[Role]
    catalog: PermissionCatalog
    resolved: ResolvedPermissions

    def to_dict(self) -> dict:
        """Matrix payload: user, modules with per-permission flags, labels, summary."""
        matrix = present(self.catalog, self.resolved)
        modules = []
        for row in matrix.rows:
            permissions = []
            for cell in row.cells:
                if cell is None:
                    continue
                name = cell.permission.name
                permissions.append({
                    "name": name,
                    "label": cell.permission.label,
                    "action": cell.permission.action,
                    "action_label": cell.permission.action_label,
                    "state": cell.state.value,
                    "assigned_directly": name in self.resolved.direct,
                    "inherited_from_role": name in self.resolved.inherited,
                    "inherited_from_role_labels": list(cell.inherited_from),
                })
            modules.append({
                "key": row.module.key,
                "label": row.module.label,
                "state": row.state.value,
                "permissions": permissions,
            })
        summary = self.resolved.summary
        return {
            "user": {
                "id": str(self.user.id),
                "label": self.user.name,
                "email": self.user.email,
                "roles": [r.name for r in self.roles],
                "role_labels": [r.label for r in self.roles],
            },
            "modules": modules,
            "action_labels": {a.key: a.label for a in self.catalog.actions},
            "action_states": {c.action.key: c.state.value for c in matrix.columns},
            "summary": {
                "total": summary.total,
                "inherited": summary.inherited,
                "direct": summary.direct,
                "effective": summary.effective,
            },
        }


@dataclass
class RoleEntry:
    """Role row of the role-management view."""

    role: Role
    permissions: frozenset[str]
    users_count: int
    is_protected: bool
    can_edit: bool


@dataclass
class RoleMatrix:
    """Roles with their permissions plus the catalog layout for editing."""

    roles: list[RoleEntry]
    catalog: PermissionCatalog

    def to_dict(self) -> dict:
        return {
            "roles": [
                {
                    "id": str(e.role.id),
                    "name": e.role.name,
                    "label": e.role.label,
                    "description": e.role.description,
                    "permissions": sorted(e.permissions),
                    "permissions_count": len(e.permissions),
                    "users_count": e.users_count,
                    "is_protected": e.is_protected,
                    "can_edit": e.can_edit,
                }
                for e in self.roles
            ],
            "modules": catalog_modules(self.catalog),
            "all_permissions": sorted(self.catalog.names),
            "action_labels": {a.key: a.label for a in self.catalog.actions},
        }


def catalog_modules(catalog: PermissionCatalog) -> list[dict]:
    """Module layout: key, label, actions and permission names in display order."""
    return [
        {
            "key": m.key,
            "label": m.label,
            "actions": [p.action for p in m.permissions],
            "permissions": [p.name for p in m.permissions],
        }
        for m in catalog.modules
    ]
