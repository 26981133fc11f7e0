"""Access policy - who may view and edit which permissions."""

import logging

from permatrix.application.dto.auth_context import AuthContext
from permatrix.domain.entities import Role
from permatrix.domain.exceptions import Unauthorized

logger = logging.getLogger(__name__)


class AccessPolicy:
    """Rules for managing roles and direct grants.

    The super-admin override is taken from the caller's ``AuthContext``;
    nothing here reads ambient state.
    """

    def __init__(
        self,
        super_admin_role: str = "super_admin",
        admin_role: str = "administrador",
        manage_permission: str = "roles.editar",
        protected_roles: tuple[str, ...] = ("super_admin", "administrador", "empleado"),
    ) -> None:
        self.super_admin_role = super_admin_role
        self.admin_role = admin_role
        self.manage_permission = manage_permission
        self.protected_roles = frozenset(protected_roles)

    def ensure_can_manage(self, actor: AuthContext) -> None:
        if not actor.has(self.manage_permission):
            logger.warning("Actor %s denied permission management", actor.actor_id)
            raise Unauthorized("User does not have permission to manage permissions")

    def ensure_can_edit_user(self, actor: AuthContext, roles: list[Role]) -> None:
        """Super admins' grants are immutable; administrators need a super admin."""
        names = {r.name for r in roles}
        if self.super_admin_role in names:
            logger.warning("Actor %s tried to edit a super administrator", actor.actor_id)
            raise Unauthorized("Permissions of a super administrator cannot be modified")
        if not actor.is_super_admin and self.admin_role in names:
            logger.warning("Actor %s tried to edit an administrator", actor.actor_id)
            raise Unauthorized("Only a super administrator can modify an administrator")

    def can_edit_role(self, actor: AuthContext, role: Role) -> bool:
        if role.name == self.super_admin_role:
            return False
        if actor.is_super_admin:
            return True
        return role.name != self.admin_role

    def is_protected(self, role: Role) -> bool:
        return role.name in self.protected_roles
