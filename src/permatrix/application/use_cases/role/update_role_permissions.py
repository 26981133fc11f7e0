"""Update role permissions use case."""

import logging
from collections.abc import Iterable
from dataclasses import replace
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.domain.entities import Role
from permatrix.domain.exceptions import NotFound, Unauthorized

logger = logging.getLogger(__name__)


class UpdateRolePermissionsUseCase:
    """Replace the permission set of a role."""

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog_loader: CatalogLoader,
        access_policy: AccessPolicy,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog_loader = catalog_loader
        self._policy = access_policy

    async def execute(
        self, actor: AuthContext, role_id: UUID, permissions: Iterable[str]
    ) -> Role:
        self._policy.ensure_can_manage(actor)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if role.name == self._policy.super_admin_role:
                raise Unauthorized("The super administrator role cannot be modified")
            if not self._policy.can_edit_role(actor, role):
                raise Unauthorized("User cannot edit this role")

            catalog = await self._catalog_loader.load(uow)
            names = catalog.expand(permissions)
            if not actor.is_super_admin:
                missing = names - actor.permissions
                if missing:
                    logger.warning(
                        "Actor %s tried to grant permissions they lack: %s",
                        actor.actor_id,
                        sorted(missing),
                    )
                    raise Unauthorized(
                        "Cannot assign permissions you do not hold: "
                        + ", ".join(sorted(missing))
                    )

            await uow.roles.set_permissions(role.id, names)
            logger.info("Actor %s set %d permissions on role %s", actor.actor_id, len(names), role.name)
            return replace(role, permissions=names)
