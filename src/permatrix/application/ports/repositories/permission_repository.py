"""Permission repository port - catalog rows present in the store."""

from collections.abc import Iterable
from typing import Protocol

from permatrix.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for the stored permission catalog."""

    async def list_names(self) -> frozenset[str]: ...

    async def ensure(self, permissions: Iterable[Permission]) -> int: ...
