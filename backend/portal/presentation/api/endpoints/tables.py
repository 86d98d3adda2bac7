"""Generic table access by table name.

Payloads still go through the owning entity's validation.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from portal.application.schemas import ApiResponse
from portal.application.services import EntityServices
from portal.application.validation import parse_filters
from portal.infrastructure.dependencies import get_entity_services
from portal.presentation.api.envelope import ok

router = APIRouter(prefix="/tables", tags=["Tables"])


@router.post("/{table}/items", status_code=status.HTTP_201_CREATED)
async def create_table_item(
    table: str,
    payload: dict[str, Any] = Body(...),
    services: EntityServices = Depends(get_entity_services),
) -> ApiResponse:
    return ok(await services.for_entity(table).create(payload))


@router.get("/{table}/items")
async def list_table_items(
    table: str,
    limit: int = Query(50, ge=1),
    cursor: str | None = None,
    filter: list[str] | None = Query(None),
    services: EntityServices = Depends(get_entity_services),
) -> ApiResponse:
    service = services.for_entity(table)
    page = await service.list(
        limit=limit, cursor=cursor, filters=parse_filters(filter, service.response_schema)
    )
    return ok(page)
