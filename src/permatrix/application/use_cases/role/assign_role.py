"""Assign role to user use case."""

import logging
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.domain.entities import Role
from permatrix.domain.exceptions import NotFound, Unauthorized, ValidationFailure

logger = logging.getLogger(__name__)


class AssignRoleUseCase:
    """Replace a user's roles with a single role."""

    def __init__(self, unit_of_work_factory: type, access_policy: AccessPolicy) -> None:
        self._uow_factory = unit_of_work_factory
        self._policy = access_policy

    async def execute(self, actor: AuthContext, user_id: UUID, role_name: str) -> Role:
        self._policy.ensure_can_manage(actor)
        if role_name == self._policy.super_admin_role and not actor.is_super_admin:
            logger.warning("Actor %s tried to assign %s", actor.actor_id, role_name)
            raise Unauthorized("Only a super administrator can assign this role")

        async with self._uow_factory() as uow:
            user = await uow.users.lock(user_id)
            if not user:
                raise NotFound("User", str(user_id))
            role = await uow.roles.get_by_name(role_name)
            if not role:
                raise ValidationFailure(f"Unknown role: {role_name}", invalid=[role_name])
            await uow.roles.assign_to_user(user_id, [role.id])
            logger.info("Actor %s assigned role %s to user %s", actor.actor_id, role_name, user_id)
            return role
