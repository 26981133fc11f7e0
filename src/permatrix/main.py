"""Application entry point and composition root."""

import argparse
import asyncio
import logging

import falcon.asgi

from permatrix import __version__
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.application.use_cases.catalog.sync_catalog import SyncCatalogUseCase
from permatrix.application.use_cases.permission.load_matrix import LoadUserMatrixUseCase
from permatrix.application.use_cases.permission.revoke_direct_grant import (
    RevokeDirectGrantUseCase,
)
from permatrix.application.use_cases.permission.save_direct_grants import (
    SaveDirectGrantsUseCase,
)
from permatrix.application.use_cases.role.assign_role import AssignRoleUseCase
from permatrix.application.use_cases.role.create_role import CreateRoleUseCase
from permatrix.application.use_cases.role.delete_role import DeleteRoleUseCase
from permatrix.application.use_cases.role.list_roles import ListRolesUseCase
from permatrix.application.use_cases.role.update_role_permissions import (
    UpdateRolePermissionsUseCase,
)
from permatrix.config import get_settings
from permatrix.domain.catalog import default_catalog
from permatrix.infrastructure.auth.keycloak_provider import KeycloakProvider
from permatrix.infrastructure.permission.permission_checker import GrantPermissionChecker
from permatrix.infrastructure.persistence.postgres.connection import create_pool
from permatrix.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from permatrix.interfaces.api.app import create_app
from permatrix.interfaces.api.middleware.auth import AuthMiddleware
from permatrix.interfaces.api.middleware.cors import CORSMiddleware
from permatrix.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from permatrix.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_permatrix_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if not keycloak:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; all requests are unauthenticated")

    permission_checker = GrantPermissionChecker(uow_factory, settings.super_admin_role)
    access_policy = AccessPolicy(
        super_admin_role=settings.super_admin_role,
        manage_permission=settings.manage_permission,
        protected_roles=tuple(sorted(settings.protected_role_names)),
    )
    catalog_loader = CatalogLoader(default_catalog())

    load_matrix = LoadUserMatrixUseCase(
        unit_of_work_factory=uow_factory,
        catalog_loader=catalog_loader,
        access_policy=access_policy,
    )
    save_direct_grants = SaveDirectGrantsUseCase(
        unit_of_work_factory=uow_factory,
        catalog_loader=catalog_loader,
        access_policy=access_policy,
    )
    revoke_direct_grant = RevokeDirectGrantUseCase(
        unit_of_work_factory=uow_factory,
        catalog_loader=catalog_loader,
        access_policy=access_policy,
    )
    list_roles = ListRolesUseCase(
        unit_of_work_factory=uow_factory,
        catalog_loader=catalog_loader,
        access_policy=access_policy,
    )
    create_role = CreateRoleUseCase(
        unit_of_work_factory=uow_factory,
        catalog_loader=catalog_loader,
        access_policy=access_policy,
    )
    update_role_permissions = UpdateRolePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        catalog_loader=catalog_loader,
        access_policy=access_policy,
    )
    delete_role = DeleteRoleUseCase(uow_factory, access_policy)
    assign_role = AssignRoleUseCase(uow_factory, access_policy)

    return create_app(
        health_resource=HealthResource(uow_factory),
        catalog_resource=CatalogResource(uow_factory, catalog_loader),
        matrix_resource=UserPermissionsMatrixResource(load_matrix),
        user_permissions_resource=UserPermissionsResource(save_direct_grants),
        user_permission_resource=UserPermissionResource(revoke_direct_grant),
        user_role_resource=UserRoleResource(assign_role),
        roles_resource=RolesResource(list_roles, create_role),
        role_resource=RoleResource(delete_role),
        role_permissions_resource=RolePermissionsResource(update_role_permissions),
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak, permission_checker),
        ],
    )


async def sync_catalog() -> int:
    """Insert catalog permissions missing from the database."""
    settings = get_settings()
    configure_logging(settings)
    pool = create_pool(settings.database_url, min_size=1, max_size=1)
    await pool.open()
    try:
        return await SyncCatalogUseCase(create_uow_factory(pool), default_catalog()).execute()
    finally:
        await pool.close()


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_permatrix_app()
    uvicorn.run(app, host=host, port=port, log_config=None)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="permatrix")
    parser.add_argument("--version", action="version", version=f"Permatrix v{__version__}")
    sub = parser.add_subparsers(dest="command")
    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    sub.add_parser("sync-catalog", help="Insert missing catalog permissions")
    args = parser.parse_args()

    if args.command == "serve":
        run_server(args.host, args.port)
    elif args.command == "sync-catalog":
        inserted = asyncio.run(sync_catalog())
        print(f"{inserted} permissions added")
    else:
        print(f"Permatrix v{__version__}")
