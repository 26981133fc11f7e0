"""Sync catalog use case - make the stored permission names match the catalog."""

import logging

from permatrix.domain.catalog import PermissionCatalog

logger = logging.getLogger(__name__)


class SyncCatalogUseCase:
    """Insert catalog permissions missing from the grant store."""

    def __init__(self, unit_of_work_factory: type, catalog: PermissionCatalog) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog = catalog

    async def execute(self) -> int:
        """Returns the number of permissions inserted."""
        async with self._uow_factory() as uow:
            inserted = await uow.permissions.ensure(
                [p for m in self._catalog.modules for p in m.permissions]
            )
        logger.info("Catalog synced: %d new permissions", inserted)
        return inserted
