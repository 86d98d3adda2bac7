"""Server info and health checks."""

import logging

from fastapi import APIRouter, Depends

from portal.application.schemas import ApiResponse
from portal.application.services import DataAccessService
from portal.config import Settings
from portal.domain.entities import EntityName
from portal.domain.exceptions import BackendUnavailableError
from portal.infrastructure.dependencies import get_app_settings, get_data_access
from portal.presentation.api.envelope import ok

logger = logging.getLogger(__name__)

public_router = APIRouter(tags=["Health"])
router = APIRouter(tags=["Health"])


@public_router.get("/")
async def server_info(settings: Settings = Depends(get_app_settings)) -> ApiResponse:
    return ok({
        "message": settings.app_title,
        "version": settings.app_version,
        "environment": settings.app_env,
    })


@public_router.get("/health")
async def health_check(
    data_access: DataAccessService = Depends(get_data_access),
) -> ApiResponse:
    """Public liveness plus storage reachability. 503 when storage is unreachable."""
    if not await data_access.ping(EntityName.CLIENTS):
        raise BackendUnavailableError("Storage backend unavailable")
    return ok({
        "status": "healthy",
        "services": {"server": "running", "storage": "available"},
    })


@router.get("/health")
async def table_health(
    data_access: DataAccessService = Depends(get_data_access),
) -> ApiResponse:
    """Probe every registered table."""
    tables = {}
    for definition in data_access.registry:
        available = await data_access.ping(definition)
        tables[definition.entity.value] = {
            "table": definition.table_name,
            "status": "available" if available else "unavailable",
        }

    healthy = sum(1 for t in tables.values() if t["status"] == "available")
    if healthy == len(tables):
        overall = "healthy"
    elif healthy:
        overall = "partial"
    else:
        overall = "unhealthy"
    if overall != "healthy":
        logger.warning("Table health %s: %d/%d tables available", overall, healthy, len(tables))
    return ok({"overall": overall, "tables": tables})
