"""Delete role use case."""

import logging
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.domain.exceptions import Conflict, NotFound, Unauthorized

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a role that is neither protected nor assigned to anyone."""

    def __init__(self, unit_of_work_factory: type, access_policy: AccessPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = access_policy

    async def execute(self, actor: AuthContext, role_id: UUID) -> None:
        self._policy.ensure_can_manage(actor)

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", str(role_id))
            if self._policy.is_protected(role):
                logger.warning("Actor %s tried to delete system role %s", actor.actor_id, role.name)
                raise Unauthorized(f"System role cannot be deleted: {role.name}")
            users_count = await uow.roles.count_users(role.id)
            if users_count > 0:
                raise Conflict(f"Role is assigned to {users_count} user(s)")
            await uow.roles.delete(role.id)
            logger.info("Actor %s deleted role %s", actor.actor_id, role.name)
