"""Catalog loader - static catalog limited to the permissions in the store."""

from permatrix.application.ports import UnitOfWork
from permatrix.domain.catalog import PermissionCatalog


class CatalogLoader:
    """Loads the permission catalog once per resolution request."""

    def __init__(self, base: PermissionCatalog) -> None:
        self._base = base

    async def load(self, uow: UnitOfWork) -> PermissionCatalog:
        names = await uow.permissions.list_names()
        return self._base.restricted_to(names)
