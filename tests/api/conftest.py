"""Fixtures for API tests."""

import pytest

from permatrix.application.dto.auth_context import AuthContext
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
from permatrix.interfaces.api.app import create_app
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


class AuthBypassMiddleware:
    """Middleware that sets context.actor from the X-Test-Actor header."""

    def __init__(self, actors: dict[str, AuthContext]) -> None:
        self._actors = actors

    async def process_request(self, req, resp):
        req.context.user = None
        req.context.actor = self._actors.get(req.get_header("X-Test-Actor") or "super")


@pytest.fixture
def app(uow_factory, catalog_loader, access_policy, super_admin, manager, outsider):
    """Falcon ASGI app with API resources for testing."""
    deps = {
        "unit_of_work_factory": uow_factory,
        "catalog_loader": catalog_loader,
        "access_policy": access_policy,
    }
    return create_app(
        health_resource=HealthResource(),
        catalog_resource=CatalogResource(uow_factory, catalog_loader),
        matrix_resource=UserPermissionsMatrixResource(LoadUserMatrixUseCase(**deps)),
        user_permissions_resource=UserPermissionsResource(SaveDirectGrantsUseCase(**deps)),
        user_permission_resource=UserPermissionResource(RevokeDirectGrantUseCase(**deps)),
        user_role_resource=UserRoleResource(AssignRoleUseCase(uow_factory, access_policy)),
        roles_resource=RolesResource(ListRolesUseCase(**deps), CreateRoleUseCase(**deps)),
        role_resource=RoleResource(DeleteRoleUseCase(uow_factory, access_policy)),
        role_permissions_resource=RolePermissionsResource(UpdateRolePermissionsUseCase(**deps)),
        middleware=[
            AuthBypassMiddleware(
                {"super": super_admin, "manager": manager, "outsider": outsider}
            )
        ],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
