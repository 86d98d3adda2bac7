"""DynamoDB table provisioning from the table registry.

Creates every registered table with its key schema and global secondary
indexes, skipping tables that already exist. Run once per AWS account and
region before starting the API with ``STORAGE_BACKEND=dynamodb``:

    portal-create-tables
    python -m portal.infrastructure.dynamodb.provisioning
"""

import logging
import sys
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from portal.application.services import TableRegistry
from portal.config import get_settings
from portal.domain.entities import TableDefinition
from portal.infrastructure.logging.log_config import setup_logging

from .client import create_dynamodb_resource

logger = logging.getLogger(__name__)

BILLING_MODE = "PAY_PER_REQUEST"


def table_spec(definition: TableDefinition) -> dict[str, Any]:
    """``create_table`` arguments for one registered table."""
    # Key attribute first; shared index attributes declared once
    attributes = dict.fromkeys([definition.key_attribute, *definition.indexes.values()])
    spec: dict[str, Any] = {
        "TableName": definition.table_name,
        "KeySchema": [{"AttributeName": definition.key_attribute, "KeyType": "HASH"}],
        "AttributeDefinitions": [
            {"AttributeName": name, "AttributeType": definition.attribute_type(name)}
            for name in attributes
        ],
        "BillingMode": BILLING_MODE,
    }
    if definition.indexes:
        spec["GlobalSecondaryIndexes"] = [
            {
                "IndexName": index,
                "KeySchema": [{"AttributeName": attribute, "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            }
            for index, attribute in definition.indexes.items()
        ]
    return spec


def _table_exists(client, table_name: str) -> bool:
    try:
        client.describe_table(TableName=table_name)
    except ClientError as exc:
        if exc.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
            return False
        raise
    return True


def create_tables(
    resource,
    registry: TableRegistry,
    *,
    wait_delay: int = 5,
    wait_attempts: int = 60,
) -> list[str]:
    """Create the registered tables that do not exist yet.

    Each new table is waited on until it is ACTIVE. Returns the names of the
    tables created; botocore errors propagate.
    """
    client = resource.meta.client
    created: list[str] = []
    for definition in registry:
        if _table_exists(client, definition.table_name):
            logger.info("Table %s already exists, skipping", definition.table_name)
            continue

        logger.info("Creating table %s", definition.table_name)
        client.create_table(**table_spec(definition))
        client.get_waiter("table_exists").wait(
            TableName=definition.table_name,
            WaiterConfig={"Delay": wait_delay, "MaxAttempts": wait_attempts},
        )
        created.append(definition.table_name)
    return created


def main() -> int:
    settings = get_settings()
    setup_logging(settings)

    if not settings.has_aws_credentials:
        logger.error("AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY must be set to create tables")
        return 1

    registry = TableRegistry.from_settings(settings)
    try:
        created = create_tables(create_dynamodb_resource(settings), registry)
    except (ClientError, BotoCoreError) as exc:
        logger.error("DynamoDB table setup failed: %s", exc)
        return 1

    logger.info(
        "DynamoDB setup complete: %d created, %d already present",
        len(created), len(registry) - len(created),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
