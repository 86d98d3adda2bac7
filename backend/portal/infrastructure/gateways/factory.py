"""Builds a TransportSelector wired to all three gateways from settings."""

import logging

import httpx

from portal.application.interfaces import PortalGateway
from portal.application.services import TransportSelector
from portal.config import Settings
from portal.domain.entities import TransportMode
from portal.infrastructure.dependencies import build_entity_services
from portal.infrastructure.dynamodb import DynamoDBItemStore, create_dynamodb_resource

from .direct_gateway import DirectGateway
from .fixture_gateway import FixtureGateway
from .proxy_gateway import ProxyGateway

logger = logging.getLogger(__name__)


def build_transport_selector(
    settings: Settings, *, http_client: httpx.AsyncClient | None = None
) -> TransportSelector:
    """Proxy at ``settings.proxy_base_url``, DynamoDB when credentials exist, fixtures last."""
    gateways: dict[TransportMode, PortalGateway] = {
        TransportMode.REMOTE_PROXY: ProxyGateway(
            settings.proxy_base_url, settings.api_key, http_client=http_client,
        ),
        TransportMode.LOCAL_FIXTURE: FixtureGateway.from_file(settings.fixtures_file),
    }
    if settings.has_aws_credentials:
        store = DynamoDBItemStore(create_dynamodb_resource(settings))
        gateways[TransportMode.DIRECT_BACKEND] = DirectGateway(
            build_entity_services(settings, store)
        )
    else:
        logger.info("No AWS credentials configured; direct-backend mode disabled")

    return TransportSelector(
        gateways,
        direct_available=settings.has_aws_credentials,
        probe_attempts=settings.proxy_probe_attempts,
    )
