"""Error handlers - map domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi
import psycopg

from permatrix.domain.exceptions import (
    Conflict,
    NotFound,
    PermatrixError,
    PersistenceFailure,
    Unauthorized,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[PermatrixError], str] = {
    NotFound: falcon.HTTP_404,
    Unauthorized: falcon.HTTP_403,
    ValidationFailure: falcon.HTTP_422,
    Conflict: falcon.HTTP_422,
    PersistenceFailure: falcon.HTTP_503,
}


def error_body(ex: PermatrixError) -> dict:
    body: dict = {"error": ex.kind, "message": str(ex)}
    if isinstance(ex, ValidationFailure) and ex.invalid:
        body["invalid_permissions"] = ex.invalid
    if isinstance(ex, Conflict) and ex.permissions:
        body["permissions"] = ex.permissions
    return body


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: PermatrixError, params: dict
) -> None:
    """Answer with the status of the exception kind and a JSON body."""
    resp.status = STATUS_BY_ERROR.get(type(ex), falcon.HTTP_500)
    resp.media = error_body(ex)


async def handle_store_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: psycopg.Error, params: dict
) -> None:
    """Store errors that escaped a unit of work answer like PersistenceFailure."""
    logger.error("Store error on %s %s: %s", req.method, req.path, ex)
    await handle_domain_error(req, resp, PersistenceFailure("Permission store unavailable"), params)


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "internal_error", "message": "Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(PermatrixError, handle_domain_error)
    app.add_error_handler(psycopg.Error, handle_store_error)
