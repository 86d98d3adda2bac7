"""DynamoDB implementation of the ItemStore port.

boto3 is blocking, so every table call runs in a worker thread. Conditional
write guards give create its uniqueness check and update/delete their
existence check; botocore errors are translated into domain errors here.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
    ReadTimeoutError,
)

from portal.application.interfaces import ItemStore, StorePage
from portal.domain.entities import TableDefinition
from portal.domain.exceptions import (
    AlreadyExistsError,
    BackendUnavailableError,
    ConflictError,
    NotFoundError,
    OperationFailedError,
    PortalError,
)

from .serialization import from_dynamo, to_dynamo

logger = logging.getLogger(__name__)

_CONDITIONAL_FAILURE = "ConditionalCheckFailedException"

# ClientError codes meaning "cannot reach or authenticate to DynamoDB right now"
_UNAVAILABLE_CODES = frozenset({
    "UnrecognizedClientException",
    "InvalidSignatureException",
    "AccessDeniedException",
    "ExpiredTokenException",
    "MissingAuthenticationTokenException",
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "ServiceUnavailable",
    "InternalServerError",
})

_UNAVAILABLE_ERRORS = (
    NoCredentialsError,
    PartialCredentialsError,
    EndpointConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
    ConnectionClosedError,
)


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def _filter_expression(filters: dict[str, Any] | None):
    condition = None
    for name, value in (filters or {}).items():
        clause = Attr(name).eq(to_dynamo(value))
        condition = clause if condition is None else condition & clause
    return condition


class DynamoDBItemStore(ItemStore):
    """Infrastructure adapter over a boto3 DynamoDB service resource."""

    def __init__(self, resource):
        self._resource = resource
        self._tables: dict[str, Any] = {}

    def _table(self, definition: TableDefinition):
        table = self._tables.get(definition.table_name)
        if table is None:
            table = self._resource.Table(definition.table_name)
            self._tables[definition.table_name] = table
        return table

    async def put_new(self, table: TableDefinition, item: dict[str, Any]) -> None:
        key_value = str(item[table.key_attribute])
        await self._call(
            "create item",
            table,
            self._table(table).put_item,
            conditional_error=AlreadyExistsError(table.entity.value, key_value),
            Item=to_dynamo(item),
            ConditionExpression="attribute_not_exists(#pk)",
            ExpressionAttributeNames={"#pk": table.key_attribute},
        )

    async def get(self, table: TableDefinition, key_value: str) -> dict[str, Any] | None:
        response = await self._call(
            "get item", table, self._table(table).get_item, Key=table.key_for(key_value),
        )
        item = response.get("Item")
        return from_dynamo(item) if item is not None else None

    async def update_existing(
        self,
        table: TableDefinition,
        key_value: str,
        fields: dict[str, Any],
        *,
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        # Placeholders only: attribute names never appear in the expression text
        names = {"#pk": table.key_attribute}
        values: dict[str, Any] = {}
        assignments = []
        for position, (name, value) in enumerate(fields.items()):
            names[f"#f{position}"] = name
            values[f":v{position}"] = value
            assignments.append(f"#f{position} = :v{position}")

        conditions = ["attribute_exists(#pk)"]
        for position, (name, value) in enumerate((expected or {}).items()):
            names[f"#e{position}"] = name
            if value is None:
                conditions.append(f"attribute_not_exists(#e{position})")
            else:
                values[f":e{position}"] = value
                conditions.append(f"#e{position} = :e{position}")

        extra: dict[str, Any] = {}
        if expected:
            # A failed check then returns the current item: present means a lost race, absent a missing key
            extra["ReturnValuesOnConditionCheckFailure"] = "ALL_OLD"

        response = await self._call(
            "update item",
            table,
            self._table(table).update_item,
            conditional_error=NotFoundError(table.entity.value, key_value),
            conflict_error=ConflictError(table.entity.value, key_value) if expected else None,
            Key=table.key_for(key_value),
            UpdateExpression="SET " + ", ".join(assignments),
            ConditionExpression=" AND ".join(conditions),
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=to_dynamo(values),
            ReturnValues="ALL_NEW",
            **extra,
        )
        return from_dynamo(response.get("Attributes", {}))

    async def delete_existing(self, table: TableDefinition, key_value: str) -> None:
        await self._call(
            "delete item",
            table,
            self._table(table).delete_item,
            conditional_error=NotFoundError(table.entity.value, key_value),
            Key=table.key_for(key_value),
            ConditionExpression="attribute_exists(#pk)",
            ExpressionAttributeNames={"#pk": table.key_attribute},
        )

    async def scan(
        self,
        table: TableDefinition,
        *,
        limit: int,
        start_key: dict[str, Any] | None = None,
        filters: dict[str, Any] | None = None,
    ) -> StorePage:
        kwargs: dict[str, Any] = {"Limit": limit}
        if start_key:
            kwargs["ExclusiveStartKey"] = to_dynamo(start_key)
        condition = _filter_expression(filters)
        if condition is not None:
            kwargs["FilterExpression"] = condition

        response = await self._call("scan items", table, self._table(table).scan, **kwargs)
        return self._to_store_page(response)

    async def query(
        self,
        table: TableDefinition,
        *,
        attribute: str,
        value: Any,
        index: str | None = None,
        limit: int,
        start_key: dict[str, Any] | None = None,
        filters: dict[str, Any] | None = None,
        ascending: bool = True,
    ) -> StorePage:
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": Key(attribute).eq(to_dynamo(value)),
            "Limit": limit,
            "ScanIndexForward": ascending,
        }
        if index:
            kwargs["IndexName"] = index
        if start_key:
            kwargs["ExclusiveStartKey"] = to_dynamo(start_key)
        condition = _filter_expression(filters)
        if condition is not None:
            kwargs["FilterExpression"] = condition

        response = await self._call("query items", table, self._table(table).query, **kwargs)
        return self._to_store_page(response)

    @staticmethod
    def _to_store_page(response: dict[str, Any]) -> StorePage:
        last_key = response.get("LastEvaluatedKey")
        return StorePage(
            items=[from_dynamo(item) for item in response.get("Items", [])],
            last_key=from_dynamo(last_key) if last_key else None,
            scanned_count=int(response.get("ScannedCount", 0)),
        )

    async def _call(
        self,
        operation: str,
        table: TableDefinition,
        method: Callable[..., dict[str, Any]],
        *,
        conditional_error: PortalError | None = None,
        conflict_error: PortalError | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(method, **kwargs)
        except ClientError as exc:
            if _error_code(exc) == _CONDITIONAL_FAILURE:
                if conflict_error is not None and exc.response.get("Item"):
                    raise conflict_error from exc
                if conditional_error is not None:
                    raise conditional_error from exc
            raise self._translate(operation, table, exc) from exc
        except BotoCoreError as exc:
            raise self._translate(operation, table, exc) from exc

    @staticmethod
    def _translate(operation: str, table: TableDefinition, exc: Exception) -> PortalError:
        if isinstance(exc, ClientError):
            code = _error_code(exc)
            message = exc.response.get("Error", {}).get("Message") or str(exc)
            if code in _UNAVAILABLE_CODES:
                logger.error("DynamoDB unavailable during %s on %s: %s", operation, table.table_name, code)
                return BackendUnavailableError(f"DynamoDB unavailable ({code}): {message}")
            logger.error("DynamoDB %s failed on %s: %s %s", operation, table.table_name, code, message)
            return OperationFailedError(operation, message)
        if isinstance(exc, _UNAVAILABLE_ERRORS):
            logger.error("DynamoDB unreachable during %s on %s: %s", operation, table.table_name, exc)
            return BackendUnavailableError(f"DynamoDB unreachable: {exc}")
        logger.error("DynamoDB %s failed on %s: %s", operation, table.table_name, exc)
        return OperationFailedError(operation, str(exc))
