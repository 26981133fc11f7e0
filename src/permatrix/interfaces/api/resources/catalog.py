"""Permission catalog API resource."""

import falcon.asgi

from permatrix.application.dto.permission_dto import catalog_modules
from permatrix.application.services.catalog_loader import CatalogLoader
from permatrix.interfaces.api.resources._params import require_actor


class CatalogResource:
    """GET /v1/permissions - modules, actions and permission names."""

    def __init__(self, unit_of_work_factory: type, catalog_loader: CatalogLoader) -> None:
        self._uow_factory = unit_of_work_factory
        self._catalog_loader = catalog_loader

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not require_actor(req, resp):
            return
        async with self._uow_factory() as uow:
            catalog = await self._catalog_loader.load(uow)
        resp.media = {
            "modules": catalog_modules(catalog),
            "action_labels": {a.key: a.label for a in catalog.actions},
            "all_permissions": sorted(catalog.names),
            "total": len(catalog),
        }
        resp.status = falcon.HTTP_200
