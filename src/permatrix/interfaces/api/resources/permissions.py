"""User permission API resources - matrix load, save and revoke."""

import falcon.asgi

from permatrix.application.use_cases.permission.load_matrix import LoadUserMatrixUseCase
from permatrix.application.use_cases.permission.revoke_direct_grant import (
    RevokeDirectGrantUseCase,
)
from permatrix.application.use_cases.permission.save_direct_grants import (
    SaveDirectGrantsUseCase,
)
from permatrix.application.use_cases.role.assign_role import AssignRoleUseCase
from permatrix.domain.exceptions import ValidationFailure
from permatrix.interfaces.api.resources._params import parse_uuid, require_actor, string_list


class UserPermissionsMatrixResource:
    """GET /v1/users/{user_id}/permissions-matrix - resolved matrix for editing."""

    def __init__(self, load_matrix: LoadUserMatrixUseCase) -> None:
        self._load = load_matrix

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return
        uid = parse_uuid(user_id, resp, "user")
        if not uid:
            return

        result = await self._load.execute(actor, uid)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class UserPermissionsResource:
    """PUT /v1/users/{user_id}/permissions - replace direct grants."""

    def __init__(self, save_direct_grants: SaveDirectGrantsUseCase) -> None:
        self._save = save_direct_grants

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Body: {"permissions": [...], "expected_inherited": [...]?}.

        ``expected_inherited`` is the inherited set the client loaded. Send it
        to get a 422 conflict when a role was removed while editing; without
        it, names no longer inherited are stored as direct grants.
        """
        actor = require_actor(req, resp)
        if not actor:
            return
        uid = parse_uuid(user_id, resp, "user")
        if not uid:
            return

        body = await req.get_media()
        names = string_list(body, "permissions")
        expected = (
            string_list(body, "expected_inherited")
            if body.get("expected_inherited") is not None
            else None
        )

        result = await self._save.execute(actor, uid, names, expected_inherited=expected)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class UserPermissionResource:
    """DELETE /v1/users/{user_id}/permissions/{name} - revoke one direct grant."""

    def __init__(self, revoke_direct_grant: RevokeDirectGrantUseCase) -> None:
        self._revoke = revoke_direct_grant

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str, name: str
    ) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return
        uid = parse_uuid(user_id, resp, "user")
        if not uid:
            return

        result = await self._revoke.execute(actor, uid, name)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class UserRoleResource:
    """PUT /v1/users/{user_id}/role - replace the user's role."""

    def __init__(self, assign_role: AssignRoleUseCase) -> None:
        self._assign = assign_role

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        actor = require_actor(req, resp)
        if not actor:
            return
        uid = parse_uuid(user_id, resp, "user")
        if not uid:
            return

        body = await req.get_media()
        role_name = body.get("role") if isinstance(body, dict) else None
        if not isinstance(role_name, str) or not role_name:
            raise ValidationFailure("Missing required field: role")

        role = await self._assign.execute(actor, uid, role_name)
        resp.media = {"user_id": str(uid), "role": role.name, "role_label": role.label}
        resp.status = falcon.HTTP_200
