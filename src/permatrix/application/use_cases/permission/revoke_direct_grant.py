"""Revoke one direct grant use case."""

import logging
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.dto.permission_dto import UserPermissions
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.application.use_cases.permission.load_matrix import read_user_permissions
from permatrix.domain.exceptions import NotFound, ValidationFailure
from permatrix.domain.resolution import resolve

logger = logging.getLogger(__name__)


class RevokeDirectGrantUseCase:
    """Remove a single directly assigned permission from a user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog_loader: CatalogLoader,
        access_policy: AccessPolicy,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog_loader = catalog_loader
        self._policy = access_policy

    async def execute(self, actor: AuthContext, user_id: UUID, name: str) -> UserPermissions:
        """Revoke name from user_id. Inherited permissions must be changed via roles."""
        self._policy.ensure_can_manage(actor)

        async with self._uow_factory() as uow:
            current = await read_user_permissions(
                uow, self._catalog_loader, user_id, lock=True
            )
            if name not in current.catalog:
                raise NotFound("Permission", name)
            self._policy.ensure_can_edit_user(actor, current.roles)
            if name not in current.resolved.direct:
                raise ValidationFailure(
                    "Permission is not assigned directly to the user; "
                    "inherited permissions change with the user's role",
                    invalid=[name],
                )
            await uow.grants.revoke(user_id, name)

            logger.info("Actor %s revoked %s from user %s", actor.actor_id, name, user_id)
            return UserPermissions(
                user=current.user,
                roles=current.roles,
                catalog=current.catalog,
                resolved=resolve(
                    current.catalog, current.roles, current.resolved.direct - {name}
                ),
            )
