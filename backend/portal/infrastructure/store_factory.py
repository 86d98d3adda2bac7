"""Selects the ItemStore adapter for the configured storage backend."""

import logging

from portal.application.interfaces import ItemStore
from portal.config import Settings
from portal.domain.exceptions import ConfigurationError

from .database import SQLAlchemyItemStore
from .dynamodb import DynamoDBItemStore, create_dynamodb_resource

logger = logging.getLogger(__name__)


def build_item_store(settings: Settings) -> ItemStore:
    """Build the store named by ``settings.storage_backend``.

    Raises ConfigurationError for the DynamoDB backend when no AWS
    credentials are configured.
    """
    if settings.storage_backend == "sql":
        logger.info("Using SQL item store")
        return SQLAlchemyItemStore.from_url(
            settings.database_url,
            echo=settings.log_level_sql.upper() == "DEBUG",
        )

    if not settings.has_aws_credentials:
        raise ConfigurationError(
            "AWS credentials are not configured: set AWS_ACCESS_KEY_ID and "
            "AWS_SECRET_ACCESS_KEY, or STORAGE_BACKEND=sql for local development"
        )
    logger.info("Using DynamoDB item store in %s", settings.aws_region)
    return DynamoDBItemStore(create_dynamodb_resource(settings))
