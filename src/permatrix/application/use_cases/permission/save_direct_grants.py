"""Save direct grants use case - the save coordinator."""

import logging
from collections.abc import Iterable
from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.dto.permission_dto import UserPermissions
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.application.use_cases.permission.load_matrix import read_user_permissions
from permatrix.domain.exceptions import Conflict
from permatrix.domain.resolution import resolve

logger = logging.getLogger(__name__)


class SaveDirectGrantsUseCase:
    """Replace a user's direct grants in one transaction.

    ``permission_names`` is everything the user should have (inherited plus
    selected direct). The inherited set is re-read under a lock on the user
    row and filtered out; only the remainder is stored as direct grants.
    """

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
        self,
        actor: AuthContext,
        user_id: UUID,
        permission_names: Iterable[str],
        expected_inherited: Iterable[str] | None = None,
    ) -> UserPermissions:
        """Persist the direct grants and return the refreshed resolution."""
        self._policy.ensure_can_manage(actor)
        requested = frozenset(permission_names)

        async with self._uow_factory() as uow:
            current = await read_user_permissions(
                uow, self._catalog_loader, user_id, lock=True
            )
            self._policy.ensure_can_edit_user(actor, current.roles)
            requested = current.catalog.validate(requested)
            inherited = current.resolved.inherited

            if expected_inherited is not None:
                lost = frozenset(expected_inherited) - inherited
                stale = lost & requested
                if stale:
                    logger.warning(
                        "Inherited permissions of user %s changed during edit: %s",
                        user_id,
                        sorted(stale),
                    )
                    raise Conflict(
                        "Role permissions changed while editing; reload before saving",
                        permissions=list(stale),
                    )

            direct = requested - inherited
            await uow.grants.replace_direct(user_id, direct)

            logger.info(
                "Actor %s saved %d direct grants for user %s",
                actor.actor_id,
                len(direct),
                user_id,
            )
            return UserPermissions(
                user=current.user,
                roles=current.roles,
                catalog=current.catalog,
                resolved=resolve(current.catalog, current.roles, direct),
            )
