"""Auth middleware - validates bearer tokens and builds the caller's AuthContext."""

from dataclasses import dataclass, field

import falcon.asgi

from permatrix.application.ports import PermissionChecker


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None
    realm_roles: list[str] = field(default_factory=list)


class AuthMiddleware:
    """Sets req.context.user and req.context.actor; both None when unauthenticated."""

    def __init__(self, keycloak_provider=None, permission_checker: PermissionChecker | None = None) -> None:
        self._keycloak = keycloak_provider
        self._permission_checker = permission_checker

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        req.context.actor = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        user = self._keycloak.decode_token(auth[7:])
        if not user:
            return
        req.context.user = RequestUser(
            user_id=user.user_id,
            email=user.email,
            username=user.username,
            realm_roles=user.realm_roles,
        )
        if self._permission_checker:
            req.context.actor = await self._permission_checker.context_for(
                user.user_id, user.realm_roles
            )
