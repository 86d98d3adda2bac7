"""Direct storage access for the client library: the entity façades in-process."""

from typing import Any

from pydantic import BaseModel

from portal.application.interfaces import PortalGateway
from portal.application.services import EntityServices
from portal.domain.entities import EntityName, Page, TransportMode


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json", exclude_none=True)


class DirectGateway(PortalGateway):
    mode = TransportMode.DIRECT_BACKEND

    def __init__(self, services: EntityServices, probe_entity: EntityName = EntityName.CLIENTS):
        self._services = services
        self._probe_entity = probe_entity

    async def health(self) -> bool:
        return await self._services.data_access.ping(self._probe_entity)

    async def create(self, entity: EntityName, payload: BaseModel | dict[str, Any]) -> dict[str, Any]:
        return _dump(await self._services.for_entity(entity).create(payload))

    async def get(self, entity: EntityName, item_id: str) -> dict[str, Any] | None:
        found = await self._services.for_entity(entity).find(item_id)
        return _dump(found) if found is not None else None

    async def list(
        self, entity: EntityName, *, limit: int = 50, cursor: str | None = None
    ) -> Page:
        page = await self._services.for_entity(entity).list(limit=limit, cursor=cursor)
        return Page(
            items=[_dump(item) for item in page.items],
            cursor=page.cursor,
            scanned_count=page.scanned_count,
        )

    async def update(
        self, entity: EntityName, item_id: str, fields: BaseModel | dict[str, Any]
    ) -> dict[str, Any]:
        return _dump(await self._services.for_entity(entity).update(item_id, fields))

    async def delete(self, entity: EntityName, item_id: str) -> None:
        await self._services.for_entity(entity).delete(item_id)
