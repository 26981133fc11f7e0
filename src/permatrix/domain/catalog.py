"""Permission catalog - static enumeration of (module, action) pairs.

The catalog is the leaf of permission resolution: every other component
consults it to decide which permission names exist, in which order modules
and actions are displayed, and which labels they carry.
"""

from collections.abc import Iterable, Mapping, Sequence

from permatrix.domain.entities import Action, Module, Permission
from permatrix.domain.exceptions import NotFound, ValidationFailure
from permatrix.domain.value_objects import PermissionName

ACTION_LABELS: dict[str, str] = {
    "ver": "Ver",
    "crear": "Crear",
    "editar": "Editar",
    "eliminar": "Eliminar",
    "gestionar": "Gestionar",
    "exportar": "Exportar",
}

# module key -> (label, {action: description})
MODULE_DEFINITIONS: dict[str, tuple[str, dict[str, str]]] = {
    "inventario": ("Inventario", {
        "ver": "Ver productos y stock",
        "crear": "Crear productos",
        "editar": "Editar productos",
        "eliminar": "Eliminar productos",
    }),
    "categorias": ("Categorías", {
        "ver": "Ver categorías",
        "crear": "Crear categorías",
        "editar": "Editar categorías",
        "eliminar": "Eliminar categorías",
    }),
    "compras": ("Compras/Ingresos", {
        "ver": "Ver compras e ingresos",
        "crear": "Registrar compras",
        "editar": "Editar compras",
        "eliminar": "Eliminar compras",
    }),
    "egresos": ("Egresos/Desechos", {
        "ver": "Ver egresos",
        "crear": "Registrar egresos",
        "editar": "Editar egresos",
        "eliminar": "Eliminar egresos",
    }),
    "facturacion": ("Facturación", {
        "ver": "Ver facturas",
        "crear": "Crear facturas",
        "editar": "Editar facturas",
        "eliminar": "Anular facturas",
    }),
    "usuarios": ("Usuarios", {
        "ver": "Ver usuarios",
        "crear": "Crear usuarios",
        "editar": "Editar usuarios",
        "eliminar": "Eliminar usuarios",
    }),
    "roles": ("Roles y Permisos", {
        "ver": "Ver roles y permisos",
        "crear": "Crear roles",
        "editar": "Editar roles y permisos",
        "eliminar": "Eliminar roles",
    }),
    "reportes": ("Reportes", {
        "ver": "Ver reportes",
        "exportar": "Exportar reportes",
    }),
    "configuracion": ("Configuración", {
        "ver": "Ver configuración",
        "editar": "Editar configuración del sistema",
    }),
}


class PermissionCatalog:
    """Ordered modules x actions with unique permission names."""

    def __init__(self, modules: Sequence[Module], actions: Sequence[Action]) -> None:
        self._modules = tuple(modules)
        self._actions = tuple(actions)
        self._by_name: dict[str, Permission] = {}
        self._by_module: dict[str, Module] = {}
        for module in self._modules:
            if module.key in self._by_module:
                raise ValidationFailure(f"Duplicate module key: {module.key}")
            self._by_module[module.key] = module
            for permission in module.permissions:
                if permission.name in self._by_name:
                    raise ValidationFailure(f"Duplicate permission: {permission.name}")
                self._by_name[permission.name] = permission
        action_keys = [a.key for a in self._actions]
        if len(set(action_keys)) != len(action_keys):
            raise ValidationFailure("Duplicate action key")

    @property
    def modules(self) -> tuple[Module, ...]:
        return self._modules

    @property
    def actions(self) -> tuple[Action, ...]:
        """Matrix columns: catalog actions used by at least one module."""
        used = {p.action for p in self._by_name.values()}
        return tuple(a for a in self._actions if a.key in used)

    @property
    def action_labels(self) -> dict[str, str]:
        return {a.key: a.label for a in self._actions}

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def get(self, name: str) -> Permission:
        try:
            return self._by_name[name]
        except KeyError:
            raise NotFound("Permission", name) from None

    def module(self, key: str) -> Module:
        try:
            return self._by_module[key]
        except KeyError:
            raise NotFound("Module", key) from None

    def module_names(self, key: str) -> frozenset[str]:
        return frozenset(p.name for p in self.module(key).permissions)

    def action_names(self, key: str) -> frozenset[str]:
        return frozenset(p.name for p in self._by_name.values() if p.action == key)

    def known(self, names: Iterable[str]) -> frozenset[str]:
        """Drop names that are not in the catalog (read path)."""
        return frozenset(n for n in names if n in self._by_name)

    def validate(self, names: Iterable[str]) -> frozenset[str]:
        """Reject names that are not in the catalog (write path).

        Names that are not "module.action" at all are reported before
        well-formed names the catalog does not know.
        """
        names = frozenset(names)
        malformed = []
        for name in names:
            try:
                PermissionName.parse(name)
            except ValidationFailure:
                malformed.append(name)
        if malformed:
            raise ValidationFailure(
                "Malformed permission names: " + ", ".join(sorted(malformed)),
                invalid=malformed,
            )
        invalid = names - self.names
        if invalid:
            raise ValidationFailure(
                "Unknown permissions: " + ", ".join(sorted(invalid)),
                invalid=list(invalid),
            )
        return names

    def expand(self, patterns: Iterable[str]) -> frozenset[str]:
        """Expand "*" and "module.*" patterns; plain names are validated."""
        result: set[str] = set()
        plain: list[str] = []
        for pattern in patterns:
            if pattern == "*":
                result.update(self._by_name)
            elif pattern.endswith(".*"):
                result.update(self.module_names(pattern[:-2]))
            else:
                plain.append(pattern)
        result.update(self.validate(plain))
        return frozenset(result)

    def restricted_to(self, names: Iterable[str]) -> "PermissionCatalog":
        """Catalog limited to the given names; modules left empty are dropped."""
        keep = frozenset(names)
        modules = []
        for module in self._modules:
            permissions = tuple(p for p in module.permissions if p.name in keep)
            if permissions:
                modules.append(Module(key=module.key, label=module.label, permissions=permissions))
        return PermissionCatalog(modules, self._actions)


def build_catalog(
    definitions: Mapping[str, tuple[str, Mapping[str, str]]],
    action_labels: Mapping[str, str],
) -> PermissionCatalog:
    """Build a catalog from module definitions and action labels."""
    modules = []
    for module_key, (module_label, actions) in definitions.items():
        for action in actions:
            PermissionName(module_key, action)
        permissions = tuple(
            Permission(
                module=module_key,
                action=action,
                label=description,
                module_label=module_label,
                action_label=action_labels.get(action, action.capitalize()),
            )
            for action, description in actions.items()
        )
        modules.append(Module(key=module_key, label=module_label, permissions=permissions))
    actions = [Action(key=k, label=v) for k, v in action_labels.items()]
    known = set(action_labels)
    for _, acts in definitions.values():
        for action in acts:
            if action not in known:
                known.add(action)
                actions.append(Action(key=action, label=action.capitalize()))
    return PermissionCatalog(modules, actions)


def default_catalog() -> PermissionCatalog:
    """Catalog of the business-management application."""
    return build_catalog(MODULE_DEFINITIONS, ACTION_LABELS)
