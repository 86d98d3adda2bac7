"""Standard CRUD routers for every entity."""

from fastapi import APIRouter

from portal.application import schemas
from portal.domain.entities import EntityName

from .crud import crud_router

_ENTITY_ROUTES = [
    (EntityName.CLIENTS, schemas.ClientCreate, schemas.ClientUpdate, schemas.ClientResponse, "Clients"),
    (EntityName.TICKETS, schemas.TicketCreate, schemas.TicketUpdate, schemas.TicketResponse, "Tickets"),
    (EntityName.APPS, schemas.AppCreate, schemas.AppUpdate, schemas.AppResponse, "Apps"),
    (
        EntityName.FEATURE_REQUESTS,
        schemas.FeatureRequestCreate,
        schemas.FeatureRequestUpdate,
        schemas.FeatureRequestResponse,
        "Feature Requests",
    ),
    (
        EntityName.KNOWLEDGE_BASE,
        schemas.ArticleCreate,
        schemas.ArticleUpdate,
        schemas.ArticleResponse,
        "Knowledge Base",
    ),
    (EntityName.USERS, schemas.UserCreate, schemas.UserUpdate, schemas.UserResponse, "Users"),
    (EntityName.ADMIN_USERS, schemas.UserCreate, schemas.UserUpdate, schemas.UserResponse, "Admin Users"),
    (
        EntityName.RECENT_UPDATES,
        schemas.RecentUpdateCreate,
        schemas.RecentUpdateUpdate,
        schemas.RecentUpdateResponse,
        "Content",
    ),
    (
        EntityName.POPULAR_TOPICS,
        schemas.PopularTopicCreate,
        schemas.PopularTopicUpdate,
        schemas.PopularTopicResponse,
        "Content",
    ),
    (EntityName.INVOICES, schemas.InvoiceCreate, schemas.InvoiceUpdate, schemas.InvoiceResponse, "Invoices"),
    (EntityName.QR_CODES, schemas.QRCodeCreate, schemas.QRCodeUpdate, schemas.QRCodeResponse, "QR Codes"),
]

router = APIRouter()
for entity, create_schema, update_schema, response_schema, tag in _ENTITY_ROUTES:
    router.include_router(
        crud_router(
            entity,
            create_schema=create_schema,
            update_schema=update_schema,
            response_schema=response_schema,
            tag=tag,
        )
    )
