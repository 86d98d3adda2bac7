"""FastAPI dependency injection: wires infrastructure to the application layer.

Long-lived objects (item store, services, token issuer) are built once in the
application lifespan and kept on ``app.state``; these providers hand them to
endpoints.
"""

import logging
import secrets

from fastapi import Depends, Request

from portal.application.interfaces import ItemStore
from portal.application.services import (
    AuthService,
    ClientService,
    DataAccessService,
    EntityServices,
    FeatureRequestService,
    QRCodeService,
    TableRegistry,
    TicketService,
)
from portal.config import Settings
from portal.infrastructure.security import JwtTokenIssuer

logger = logging.getLogger(__name__)


def build_entity_services(settings: Settings, store: ItemStore) -> EntityServices:
    """Registry, data access and every façade over ``store``."""
    registry = TableRegistry.from_settings(settings)
    data_access = DataAccessService(registry, store)
    return EntityServices.build(
        data_access, ticket_number_prefix=settings.ticket_number_prefix
    )


def build_auth_service(settings: Settings) -> AuthService:
    secret = settings.jwt_secret
    if not secret:
        logger.warning(
            "JWT_SECRET is not configured; using a per-process secret, "
            "tokens will not survive a restart"
        )
        secret = secrets.token_urlsafe(32)
    return AuthService.from_settings(settings, JwtTokenIssuer(secret))


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_entity_services(request: Request) -> EntityServices:
    return request.app.state.services


def get_data_access(
    services: EntityServices = Depends(get_entity_services),
) -> DataAccessService:
    return services.data_access


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_client_service(
    services: EntityServices = Depends(get_entity_services),
) -> ClientService:
    return services.clients


def get_ticket_service(
    services: EntityServices = Depends(get_entity_services),
) -> TicketService:
    return services.tickets


def get_feature_request_service(
    services: EntityServices = Depends(get_entity_services),
) -> FeatureRequestService:
    return services.feature_requests


def get_qr_code_service(
    services: EntityServices = Depends(get_entity_services),
) -> QRCodeService:
    return services.qr_codes
