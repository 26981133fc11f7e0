"""User repository port."""

from typing import Protocol
from uuid import UUID

from permatrix.domain.entities import User


class UserRepository(Protocol):
    """Port for user lookup."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def lock(self, user_id: UUID) -> User | None: ...
