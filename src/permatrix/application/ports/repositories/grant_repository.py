"""Direct grant repository port - user -> permission relation."""

from typing import Protocol
from uuid import UUID


class GrantRepository(Protocol):
    """Port for permissions granted directly to a user."""

    async def list_direct(self, user_id: UUID) -> frozenset[str]: ...

    async def replace_direct(self, user_id: UUID, names: frozenset[str]) -> None: ...

    async def revoke(self, user_id: UUID, name: str) -> None: ...
