"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from permatrix.interfaces.api.errors import register_error_handlers
from permatrix.interfaces.api.resources.catalog import CatalogResource
from permatrix.interfaces.api.resources.health import HealthResource
from permatrix.interfaces.api.resources.permissions import (
    UserPermissionResource,
    UserPermissionsMatrixResource,
    UserPermissionsResource,
    UserRoleResource,
)
from permatrix.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)


def create_app(
    health_resource: HealthResource,
    catalog_resource: CatalogResource,
    matrix_resource: UserPermissionsMatrixResource,
    user_permissions_resource: UserPermissionsResource,
    user_permission_resource: UserPermissionResource,
    user_role_resource: UserRoleResource,
    roles_resource: RolesResource,
    role_resource: RoleResource,
    role_permissions_resource: RolePermissionsResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/permissions", catalog_resource)
    app.add_route("/v1/users/{user_id}/permissions-matrix", matrix_resource)
    app.add_route("/v1/users/{user_id}/permissions", user_permissions_resource)
    app.add_route("/v1/users/{user_id}/permissions/{name}", user_permission_resource)
    app.add_route("/v1/users/{user_id}/role", user_role_resource)
    app.add_route("/v1/roles", roles_resource)
    app.add_route("/v1/roles/{role_id}", role_resource)
    app.add_route("/v1/roles/{role_id}/permissions", role_permissions_resource)
    return app
