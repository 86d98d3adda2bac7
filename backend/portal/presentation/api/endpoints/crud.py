"""Router factory for the standard per-entity CRUD endpoints.

Every entity gets the same five routes plus a secondary-index lookup:

    GET    /<entity>                       list (limit, cursor, filter=attr:value)
    GET    /<entity>/{item_id}             read
    POST   /<entity>                       create
    PUT    /<entity>/{item_id}             update
    DELETE /<entity>/{item_id}             delete
    GET    /<entity>/by/{index}/{value}    query a secondary index
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from portal.application.schemas import ApiResponse, DeleteResult, PageResponse
from portal.application.services import EntityService, EntityServices
from portal.application.validation import parse_filters
from portal.domain.entities import EntityName
from portal.infrastructure.dependencies import get_entity_services
from portal.presentation.api.envelope import ok


def crud_router(
    entity: EntityName,
    *,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
    tag: str,
) -> APIRouter:
    router = APIRouter(prefix=f"/{entity.value}", tags=[tag])

    def get_service(
        services: EntityServices = Depends(get_entity_services),
    ) -> EntityService:
        return services.for_entity(entity)

    @router.get("", response_model=ApiResponse[PageResponse[response_schema]])
    async def list_items(
        limit: int = Query(50, ge=1, description="Clamped to 100"),
        cursor: str | None = None,
        filter: list[str] | None = Query(None, description="Equality filter, attr:value"),
        service: EntityService = Depends(get_service),
    ) -> ApiResponse:
        """List one page of records."""
        filters = parse_filters(filter, response_schema)
        page = await service.list(limit=limit, cursor=cursor, filters=filters)
        return ok(page)

    @router.get("/by/{index}/{value}", response_model=ApiResponse[PageResponse[response_schema]])
    async def query_index(
        index: str,
        value: str,
        limit: int = Query(50, ge=1),
        cursor: str | None = None,
        ascending: bool = True,
        service: EntityService = Depends(get_service),
    ) -> ApiResponse:
        """Records whose index partition attribute equals ``value``."""
        page = await service.query_by(
            index, value, limit=limit, cursor=cursor, ascending=ascending,
        )
        return ok(page)

    @router.get("/{item_id}", response_model=ApiResponse[response_schema])
    async def get_item(
        item_id: str,
        service: EntityService = Depends(get_service),
    ) -> ApiResponse:
        return ok(await service.get(item_id))

    @router.post(
        "",
        response_model=ApiResponse[response_schema],
        status_code=status.HTTP_201_CREATED,
    )
    async def create_item(
        data: create_schema,
        service: EntityService = Depends(get_service),
    ) -> ApiResponse:
        return ok(await service.create(data))

    @router.put("/{item_id}", response_model=ApiResponse[response_schema])
    async def update_item(
        item_id: str,
        data: update_schema,
        service: EntityService = Depends(get_service),
    ) -> ApiResponse:
        return ok(await service.update(item_id, data))

    @router.delete("/{item_id}", response_model=ApiResponse[DeleteResult])
    async def delete_item(
        item_id: str,
        service: EntityService = Depends(get_service),
    ) -> ApiResponse:
        await service.delete(item_id)
        return ok(DeleteResult(key=item_id))

    return router
