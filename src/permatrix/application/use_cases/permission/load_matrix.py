"""Load user permission matrix use case."""

from uuid import UUID

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.dto.permission_dto import UserPermissions
from permatrix.application.ports import UnitOfWork
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.domain.exceptions import NotFound
from permatrix.domain.resolution import resolve


async def read_user_permissions(
    uow: UnitOfWork, catalog_loader: CatalogLoader, user_id: UUID, lock: bool = False
) -> UserPermissions:
    """Resolve a user's permissions inside an open Unit of Work."""
    user = await (uow.users.lock(user_id) if lock else uow.users.get_by_id(user_id))
    if not user:
        raise NotFound("User", str(user_id))
    catalog = await catalog_loader.load(uow)
    roles = await uow.roles.list_for_user(user_id)
    direct = await uow.grants.list_direct(user_id)
    return UserPermissions(
        user=user,
        roles=roles,
        catalog=catalog,
        resolved=resolve(catalog, roles, direct),
    )


class LoadUserMatrixUseCase:
    """Resolve inherited, direct and effective permissions of one user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog_loader: CatalogLoader,
        access_policy: AccessPolicy,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog_loader = catalog_loader
        self._policy = access_policy

    async def execute(self, actor: AuthContext, user_id: UUID) -> UserPermissions:
        """Load the matrix data for user_id. Actor must be able to manage permissions."""
        self._policy.ensure_can_manage(actor)
        async with self._uow_factory() as uow:
            return await read_user_permissions(uow, self._catalog_loader, user_id)
