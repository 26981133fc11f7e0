"""Permission checker implementation - builds AuthContext from stored grants."""

import logging
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.domain.resolution import inherited_permissions

logger = logging.getLogger(__name__)


class GrantPermissionChecker:
    """Resolves the caller's effective permissions and super-admin status."""

    def __init__(self, unit_of_work_factory: type, super_admin_role: str = "super_admin") -> None:
        self._uow_factory = unit_of_work_factory
        self._super_admin_role = super_admin_role

    async def context_for(
        self, user_id: str, realm_roles: list[str] | None = None
    ) -> AuthContext:
        """Build the caller context. Unknown callers get an empty context."""
        realm_super = self._super_admin_role in (realm_roles or [])
        try:
            uid = UUID(user_id)
        except ValueError:
            logger.debug("Caller %s is not an application user", user_id)
            return AuthContext(actor_id=user_id, is_super_admin=realm_super)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(uid)
            if not user:
                return AuthContext(actor_id=user_id, is_super_admin=realm_super)
            roles = await uow.roles.list_for_user(uid)
            direct = await uow.grants.list_direct(uid)

        return AuthContext(
            actor_id=user_id,
            is_super_admin=realm_super or any(r.name == self._super_admin_role for r in roles),
            permissions=inherited_permissions(roles) | direct,
        )
