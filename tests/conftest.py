"""Pytest fixtures for permatrix tests."""

from __future__ import annotations

import copy
from contextlib import asynccontextmanager
from dataclasses import replace
from uuid import UUID, uuid4

import pytest

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.domain.catalog import PermissionCatalog, build_catalog, default_catalog
from permatrix.domain.entities import Role, User
from permatrix.domain.exceptions import PersistenceFailure


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository; records lock calls."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, User] = {}
        self.locked: list[UUID] = []

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._by_id.get(user_id)

    async def lock(self, user_id: UUID) -> User | None:
        self.locked.append(user_id)
        return self._by_id.get(user_id)

    def add_user(self, user: User) -> User:
        self._by_id[user.id] = user
        return user


class FakeRoleRepository:
    """In-memory role repository with user_role M:N."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Role] = {}
        self._user_roles: dict[UUID, list[UUID]] = {}  # user_id -> [role_id]

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        return next((r for r in self._by_id.values() if r.name == name), None)

    async def list_all(self) -> list[Role]:
        return sorted(self._by_id.values(), key=lambda r: r.name)

    async def list_for_user(self, user_id: UUID) -> list[Role]:
        return [
            self._by_id[rid] for rid in self._user_roles.get(user_id, []) if rid in self._by_id
        ]

    async def count_users(self, role_id: UUID) -> int:
        return sum(1 for ids in self._user_roles.values() if role_id in ids)

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def set_permissions(self, role_id: UUID, names: frozenset[str]) -> None:
        self._by_id[role_id] = replace(self._by_id[role_id], permissions=frozenset(names))

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)

    async def assign_to_user(self, user_id: UUID, role_ids: list[UUID]) -> None:
        self._user_roles[user_id] = list(role_ids)

    def add_role(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    def give(self, user_id: UUID, *roles: Role) -> None:
        self._user_roles.setdefault(user_id, []).extend(r.id for r in roles)

    def take(self, user_id: UUID, role: Role) -> None:
        self._user_roles[user_id] = [
            rid for rid in self._user_roles.get(user_id, []) if rid != role.id
        ]


class FakeGrantRepository:
    """In-memory user_permission relation; ``fail_writes`` simulates an outage mid-write."""

    def __init__(self) -> None:
        self._direct: dict[UUID, set[str]] = {}
        self.fail_writes = False

    async def list_direct(self, user_id: UUID) -> frozenset[str]:
        return frozenset(self._direct.get(user_id, set()))

    async def replace_direct(self, user_id: UUID, names: frozenset[str]) -> None:
        # delete happens before the failing insert, like the SQL implementation
        self._direct[user_id] = set()
        if self.fail_writes:
            raise PersistenceFailure("Grant store unavailable")
        self._direct[user_id] = set(names)

    async def revoke(self, user_id: UUID, name: str) -> None:
        if self.fail_writes:
            raise PersistenceFailure("Grant store unavailable")
        self._direct.get(user_id, set()).discard(name)

    def grant(self, user_id: UUID, *names: str) -> None:
        self._direct.setdefault(user_id, set()).update(names)


class FakePermissionRepository:
    """In-memory permission table (names only)."""

    def __init__(self, names: frozenset[str] = frozenset()) -> None:
        self._names: set[str] = set(names)

    async def list_names(self) -> frozenset[str]:
        return frozenset(self._names)

    async def ensure(self, permissions) -> int:
        added = 0
        for p in permissions:
            if p.name not in self._names:
                self._names.add(p.name)
                added += 1
        return added


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories.

    State lives on the instance, so one UoW shared by a factory behaves like
    a database: rollback restores the snapshot taken when the work began.
    """

    def __init__(self, permission_names: frozenset[str] = frozenset()) -> None:
        self.users = FakeUserRepository()
        self.roles = FakeRoleRepository()
        self.grants = FakeGrantRepository()
        self.permissions = FakePermissionRepository(permission_names)
        self.seeded_roles: dict[str, Role] = {}
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: tuple | None = None

    def _state(self) -> tuple:
        return (
            self.users._by_id,
            self.roles._by_id,
            self.roles._user_roles,
            self.grants._direct,
            self.permissions._names,
        )

    def begin(self) -> None:
        self._snapshot = copy.deepcopy(self._state())

    async def commit(self) -> None:
        self.commits += 1
        self._snapshot = None

    async def rollback(self) -> None:
        self.rollbacks += 1
        if self._snapshot is None:
            return
        (
            self.users._by_id,
            self.roles._by_id,
            self.roles._user_roles,
            self.grants._direct,
            self.permissions._names,
        ) = self._snapshot
        self._snapshot = None


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW, committing on success and rolling back on error."""

    @asynccontextmanager
    async def _factory():
        uow.begin()
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


# --- Seed data ---


SEED_ROLES = {
    "super_admin": ("Super Administrador", ["*"]),
    "administrador": (
        "Administrador",
        [
            "inventario.*",
            "categorias.*",
            "compras.*",
            "egresos.*",
            "facturacion.*",
            "usuarios.ver",
            "usuarios.crear",
            "usuarios.editar",
            "reportes.*",
            "configuracion.ver",
        ],
    ),
    "empleado": (
        "Empleado",
        [
            "inventario.ver",
            "inventario.editar",
            "categorias.ver",
            "compras.ver",
            "compras.crear",
            "egresos.ver",
            "egresos.crear",
            "facturacion.ver",
            "facturacion.crear",
            "reportes.ver",
        ],
    ),
    "proveedor": ("Proveedor", ["compras.ver"]),
}


def seed(uow: FakeUnitOfWork, catalog: PermissionCatalog) -> dict[str, Role]:
    """Add the system roles to uow and return them by name."""
    roles = {}
    for name, (label, patterns) in SEED_ROLES.items():
        roles[name] = uow.roles.add_role(
            Role(id=uuid4(), name=name, label=label, permissions=catalog.expand(patterns))
        )
    uow.seeded_roles = roles
    return roles


def productos_catalog() -> PermissionCatalog:
    """Small catalog: productos (4 actions), clientes and ventas (both with eliminar)."""
    return build_catalog(
        {
            "productos": ("Productos", {
                "ver": "Ver productos",
                "crear": "Crear productos",
                "editar": "Editar productos",
                "eliminar": "Eliminar productos",
            }),
            "clientes": ("Clientes", {
                "ver": "Ver clientes",
                "eliminar": "Eliminar clientes",
            }),
            "ventas": ("Ventas", {
                "ver": "Ver ventas",
                "eliminar": "Anular ventas",
                "exportar": "Exportar ventas",
            }),
        },
        {
            "ver": "Ver",
            "crear": "Crear",
            "editar": "Editar",
            "eliminar": "Eliminar",
            "gestionar": "Gestionar",
            "exportar": "Exportar",
        },
    )


# --- Fixtures ---


@pytest.fixture
def catalog() -> PermissionCatalog:
    """Default business-management catalog."""
    return default_catalog()


@pytest.fixture
def fake_uow(catalog) -> FakeUnitOfWork:
    """UoW whose permission table holds the full catalog, seeded with the system roles."""
    uow = FakeUnitOfWork(catalog.names)
    seed(uow, catalog)
    return uow


@pytest.fixture
def uow_factory(fake_uow):
    """Factory returning async context manager with the shared FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def catalog_loader(catalog) -> CatalogLoader:
    return CatalogLoader(catalog)


@pytest.fixture
def access_policy() -> AccessPolicy:
    return AccessPolicy()


@pytest.fixture
def super_admin() -> AuthContext:
    return AuthContext(actor_id="root", is_super_admin=True)


@pytest.fixture
def manager() -> AuthContext:
    """Non-super-admin allowed to manage permissions, holding a few others."""
    return AuthContext(
        actor_id="manager",
        permissions=frozenset({
            "roles.ver",
            "roles.editar",
            "inventario.ver",
            "inventario.editar",
            "compras.ver",
            "compras.crear",
        }),
    )


@pytest.fixture
def outsider() -> AuthContext:
    return AuthContext(actor_id="outsider", permissions=frozenset({"inventario.ver"}))


@pytest.fixture
def employee(fake_uow) -> User:
    """User holding the empleado role and no direct grants."""
    user = fake_uow.users.add_user(User(id=uuid4(), name="Ana Pérez", email="ana@example.com"))
    fake_uow.roles.give(user.id, fake_uow.seeded_roles["empleado"])
    return user
