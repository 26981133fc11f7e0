"""List roles use case - role-management matrix."""

from permatrix.application.dto.auth_context import AuthContext
from permatrix.application.dto.permission_dto import RoleEntry, RoleMatrix
from permatrix.application.services.access_policy import AccessPolicy
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.domain.resolution import role_matrix


class ListRolesUseCase:
    """Roles with their permission sets, user counts and editability."""

    def __init__(
        self,
        unit_of_work_factory: type,
        catalog_loader: CatalogLoader,
        access_policy: AccessPolicy,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog_loader = catalog_loader
        self._policy = access_policy

    async def execute(self, actor: AuthContext) -> RoleMatrix:
        self._policy.ensure_can_manage(actor)
        async with self._uow_factory() as uow:
            catalog = await self._catalog_loader.load(uow)
            roles = await uow.roles.list_all()
            granted = role_matrix(catalog, roles)
            entries = [
                RoleEntry(
                    role=role,
                    permissions=granted[role.name],
                    users_count=await uow.roles.count_users(role.id),
                    is_protected=self._policy.is_protected(role),
                    can_edit=self._policy.can_edit_role(actor, role),
                )
                for role in roles
            ]
        return RoleMatrix(roles=entries, catalog=catalog)
