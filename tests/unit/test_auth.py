"""Unit tests for the auth middleware and the grant-based permission checker."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from permatrix.infrastructure.auth.keycloak_provider import OIDCUser
from permatrix.infrastructure.permission.permission_checker import GrantPermissionChecker
from permatrix.interfaces.api.middleware.auth import AuthMiddleware


class FakeKeycloak:
    def __init__(self, user: OIDCUser | None) -> None:
        self._user = user
        self.tokens: list[str] = []

    def decode_token(self, token: str) -> OIDCUser | None:
        self.tokens.append(token)
        return self._user


class FakeRequest:
    def __init__(self, authorization: str | None = None) -> None:
        self._headers = {"Authorization": authorization} if authorization else {}
        self.context = SimpleNamespace()

    def get_header(self, name: str):
        return self._headers.get(name)


@pytest.mark.asyncio
async def test_checker_resolves_roles_and_direct(uow_factory, fake_uow, employee) -> None:
    fake_uow.grants.grant(employee.id, "roles.editar")

    ctx = await GrantPermissionChecker(uow_factory).context_for(str(employee.id))

    assert not ctx.is_super_admin
    assert ctx.has("roles.editar")
    assert ctx.has("inventario.ver")
    assert not ctx.has("usuarios.eliminar")


@pytest.mark.asyncio
async def test_checker_super_admin_role(uow_factory, fake_uow, employee) -> None:
    fake_uow.roles.give(employee.id, fake_uow.seeded_roles["super_admin"])
    ctx = await GrantPermissionChecker(uow_factory).context_for(str(employee.id))
    assert ctx.is_super_admin


@pytest.mark.asyncio
async def test_checker_realm_role_grants_super_admin(uow_factory) -> None:
    ctx = await GrantPermissionChecker(uow_factory).context_for("service-account", ["super_admin"])
    assert ctx.is_super_admin
    assert ctx.permissions == frozenset()


@pytest.mark.asyncio
async def test_checker_unknown_user_gets_empty_context(uow_factory) -> None:
    ctx = await GrantPermissionChecker(uow_factory).context_for(str(uuid4()))
    assert not ctx.is_super_admin
    assert not ctx.has("roles.editar")


@pytest.mark.asyncio
async def test_middleware_without_header() -> None:
    req = FakeRequest()
    await AuthMiddleware(FakeKeycloak(None)).process_request(req, None)
    assert req.context.user is None
    assert req.context.actor is None


@pytest.mark.asyncio
async def test_middleware_builds_actor(uow_factory, employee) -> None:
    keycloak = FakeKeycloak(OIDCUser(user_id=str(employee.id), email="ana@example.com", username="ana"))
    req = FakeRequest("Bearer abc")

    await AuthMiddleware(keycloak, GrantPermissionChecker(uow_factory)).process_request(req, None)

    assert keycloak.tokens == ["abc"]
    assert req.context.user.username == "ana"
    assert req.context.actor.actor_id == str(employee.id)
    assert req.context.actor.has("compras.crear")


@pytest.mark.asyncio
async def test_middleware_rejected_token() -> None:
    req = FakeRequest("Bearer expired")
    await AuthMiddleware(FakeKeycloak(None)).process_request(req, None)
    assert req.context.actor is None
