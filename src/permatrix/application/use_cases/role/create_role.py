"""Create role use case."""

import logging
from collections.abc import Iterable
from uuid import uuid4

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.domain.entities import Role
from permatrix.domain.exceptions import ValidationFailure

logger = logging.getLogger(__name__)

MAX_ROLE_NAME_LENGTH = 50


class CreateRoleUseCase:
    """Create a role, optionally with an initial permission set."""

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
        name: str,
        label: str | None = None,
        description: str = "",
        permissions: Iterable[str] = (),
    ) -> Role:
        """Create role. Non-super-admins only pass on permissions they hold."""
        self._policy.ensure_can_manage(actor)
        name = name.strip()
        if not name or len(name) > MAX_ROLE_NAME_LENGTH:
            raise ValidationFailure(
                f"Role name must be 1-{MAX_ROLE_NAME_LENGTH} characters"
            )

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise ValidationFailure(f"Role already exists: {name}")
            catalog = await self._catalog_loader.load(uow)
            names = catalog.expand(permissions)
            if not actor.is_super_admin:
                names &= actor.permissions

            role = Role(
                id=uuid4(),
                name=name,
                label=(label or "").strip() or name.capitalize(),
                description=description,
                permissions=names,
            )
            await uow.roles.create(role)
            logger.info(
                "Actor %s created role %s with %d permissions",
                actor.actor_id,
                name,
                len(names),
            )
            return role
