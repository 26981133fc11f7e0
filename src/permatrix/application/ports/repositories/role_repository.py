"""Role repository port."""

from typing import Protocol
from uuid import UUID

from permatrix.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence and user -> role assignments."""

    async def get_by_id(self, role_id: UUID) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def list_all(self) -> list[Role]: ...

    async def list_for_user(self, user_id: UUID) -> list[Role]: ...

    async def count_users(self, role_id: UUID) -> int: ...

    async def create(self, role: Role) -> Role: ...

    async def set_permissions(self, role_id: UUID, names: frozenset[str]) -> None: ...

    async def delete(self, role_id: UUID) -> None: ...

    async def assign_to_user(self, user_id: UUID, role_ids: list[UUID]) -> None: ...
