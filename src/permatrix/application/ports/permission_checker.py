"""Permission checker port - builds the caller's authorization context."""

from typing import Protocol

from permatrix.application.dto.auth_context import AuthContext


class PermissionChecker(Protocol):
    """Port for resolving who is calling and what they may do."""

    async def context_for(
        self, user_id: str, realm_roles: list[str] | None = None
    ) -> AuthContext: ...
