"""Shared request helpers for API resources."""

from uuid import UUID

import falcon
import falcon.asgi

from permatrix.application.dto.auth_context import AuthContext
from permatrix.domain.exceptions import ValidationFailure


def require_actor(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> AuthContext | None:
    """Return the caller's AuthContext or answer 401."""
    actor = getattr(req.context, "actor", None)
    if not actor:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "unauthenticated", "message": "Authentication required"}
        return None
    return actor


def parse_uuid(value: str, resp: falcon.asgi.Response, what: str) -> UUID | None:
    """Parse a path UUID or answer 400."""
    try:
        return UUID(value)
    except ValueError:
        resp.status = falcon.HTTP_400
        resp.media = {"error": "bad_request", "message": f"Invalid {what} ID"}
        return None


def string_list(body: object, key: str) -> list[str]:
    """Extract a list of strings from a JSON body."""
    if not isinstance(body, dict) or key not in body:
        raise ValidationFailure(f"Missing required field: {key}")
    value = body[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationFailure(f"Field {key} must be a list of strings")
    return value
