"""Role management API resources."""

import falcon.asgi

from permatrix.application.use_cases.role.create_role import CreateRoleUseCase
from permatrix.application.use_cases.role.delete_role import DeleteRoleUseCase
from permatrix.application.use_cases.role.list_roles import ListRolesUseCase
from permatrix.application.use_cases.role.update_role_permissions import (
    UpdateRolePermissionsUseCase,
)
from permatrix.domain.entities import Role
from permatrix.domain.exceptions import ValidationFailure
from permatrix.interfaces.api.resources._params import parse_uuid, require_actor, string_list


def _role_media(role: Role) -> dict:
    return {
        "id": str(role.id),
        "name": role.name,
        "label": role.label,
        "description": role.description,
        "permissions": sorted(role.permissions),
    }


class RolesResource:
    """GET/POST /v1/roles - role matrix and role creation."""

    def __init__(self, list_roles: ListRolesUseCase, create_role: CreateRoleUseCase) -> None:
        self._list = list_roles
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return
        result = await self._list.execute(actor)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return

        body = await req.get_media()
        name = body.get("name") if isinstance(body, dict) else None
        if not isinstance(name, str):
            raise ValidationFailure("Missing required field: name")
        permissions = string_list(body, "permissions") if "permissions" in body else []

        role = await self._create.execute(
            actor,
            name,
            label=body.get("label"),
            description=body.get("description") or "",
            permissions=permissions,
        )
        resp.media = _role_media(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """DELETE /v1/roles/{role_id}."""

    def __init__(self, delete_role: DeleteRoleUseCase) -> None:
        self._delete = delete_role

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return
        rid = parse_uuid(role_id, resp, "role")
        if not rid:
            return
        await self._delete.execute(actor, rid)
        resp.status = falcon.HTTP_204


class RolePermissionsResource:
    """PUT /v1/roles/{role_id}/permissions - replace a role's permissions."""

    def __init__(self, update_role_permissions: UpdateRolePermissionsUseCase) -> None:
        self._update = update_role_permissions

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return
        rid = parse_uuid(role_id, resp, "role")
        if not rid:
            return

        body = await req.get_media()
        role = await self._update.execute(actor, rid, string_list(body, "permissions"))
        resp.media = _role_media(role)
        resp.status = falcon.HTTP_200
