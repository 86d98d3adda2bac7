"""Top-level router: public routes, auth routes and the key-protected ``/api`` tree."""

from fastapi import APIRouter, Depends

from portal.presentation.api.endpoints import (
    auth,
    entities,
    feature_requests,
    health,
    qr_codes,
    tables,
    tickets,
)
from portal.presentation.api.security import require_api_key

api_router = APIRouter(prefix="/api", dependencies=[Depends(require_api_key)])
api_router.include_router(health.router)
# Entity extras first so fixed paths win over /{item_id}
api_router.include_router(tickets.router)
api_router.include_router(feature_requests.router)
api_router.include_router(qr_codes.router)
api_router.include_router(entities.router)
api_router.include_router(tables.router)

router = APIRouter()
router.include_router(health.public_router)
router.include_router(auth.router)
router.include_router(api_router)
