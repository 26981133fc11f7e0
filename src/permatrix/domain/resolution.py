"""Permission resolver - merges role-inherited and direct grants."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from permatrix.domain.catalog import PermissionCatalog
from permatrix.domain.entities import Role
from permatrix.domain.value_objects import PermissionState


@dataclass(frozen=True)
class PermissionSummary:
    """Counts shown next to the matrix.

    ``inherited + direct == effective``: ``direct`` only counts grants that
    are not also inherited.
    """

    total: int
    inherited: int
    direct: int
    effective: int


@dataclass(frozen=True)
class ResolvedPermissions:
    """Inherited, direct and effective permission sets of one user."""

    inherited: frozenset[str]
    direct: frozenset[str]
    total: int
    sources: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def effective(self) -> frozenset[str]:
        return self.inherited | self.direct

    @property
    def direct_only(self) -> frozenset[str]:
        """Direct grants that would still apply if every role were removed."""
        return self.direct - self.inherited

    @property
    def summary(self) -> PermissionSummary:
        return PermissionSummary(
            total=self.total,
            inherited=len(self.inherited),
            direct=len(self.direct_only),
            effective=len(self.effective),
        )

    def state(self, name: str) -> PermissionState:
        if name in self.inherited:
            return PermissionState.INHERITED
        if name in self.direct:
            return PermissionState.DIRECT
        return PermissionState.NONE

    def inherited_from(self, name: str) -> tuple[str, ...]:
        return self.sources.get(name, ())


def inherited_permissions(roles: Iterable[Role]) -> frozenset[str]:
    """Union of the permission sets of all roles."""
    result: set[str] = set()
    for role in roles:
        result |= role.permissions
    return frozenset(result)


def resolve(
    catalog: PermissionCatalog,
    roles: Iterable[Role],
    direct: Iterable[str],
) -> ResolvedPermissions:
    """Resolve a user's permissions against the current catalog.

    Names missing from the catalog are dropped on both sides.
    """
    roles = list(roles)
    sources: dict[str, list[str]] = {}
    for role in roles:
        for name in catalog.known(role.permissions):
            labels = sources.setdefault(name, [])
            if role.label not in labels:
                labels.append(role.label)
    return ResolvedPermissions(
        inherited=catalog.known(inherited_permissions(roles)),
        direct=catalog.known(direct),
        total=len(catalog),
        sources={name: tuple(labels) for name, labels in sources.items()},
    )


def role_matrix(catalog: PermissionCatalog, roles: Iterable[Role]) -> dict[str, frozenset[str]]:
    """Role-assignment view: role name -> catalog permissions it grants."""
    return {role.name: catalog.known(role.permissions) for role in roles}
