"""Unit tests for DynamoDBItemStore, using botocore's Stubber in place of AWS."""

from decimal import Decimal

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from portal.domain.entities import EntityName, TableDefinition
from portal.domain.exceptions import (
    AlreadyExistsError,
    BackendUnavailableError,
    ConflictError,
    NotFoundError,
    OperationFailedError,
)
from portal.infrastructure.dynamodb import DynamoDBItemStore
from portal.infrastructure.dynamodb.serialization import from_dynamo, to_dynamo

CLIENTS = TableDefinition(
    entity=EntityName.CLIENTS,
    table_name="holdings-ctc-clients",
    indexes={"EmailIndex": "email"},
)


@pytest.fixture
def resource():
    return boto3.resource(
        "dynamodb",
        region_name="ap-southeast-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(resource):
    with Stubber(resource.meta.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def dynamo_store(resource) -> DynamoDBItemStore:
    return DynamoDBItemStore(resource)


class _UnreachableTable:
    def get_item(self, **kwargs):
        raise EndpointConnectionError(endpoint_url="https://dynamodb.ap-southeast-2.amazonaws.com")


class _UnreachableResource:
    def Table(self, name):
        return _UnreachableTable()


# ── Serialization ──


def test_to_dynamo_converts_floats_to_decimal():
    assert to_dynamo({"price": 0.1, "tags": [1.5], "n": 2}) == {
        "price": Decimal("0.1"),
        "tags": [Decimal("1.5")],
        "n": 2,
    }


def test_from_dynamo_restores_numbers():
    assert from_dynamo({"votes": Decimal("3"), "total": Decimal("12.5"), "s": {"b", "a"}}) == {
        "votes": 3,
        "total": 12.5,
        "s": ["a", "b"],
    }


# ── Conditional writes ──


@pytest.mark.asyncio
async def test_put_new_succeeds(dynamo_store, stubber):
    stubber.add_response("put_item", {}, None)
    await dynamo_store.put_new(CLIENTS, {"id": "c-1", "companyName": "Acme", "score": 1.5})


@pytest.mark.asyncio
async def test_put_new_conditional_failure_is_already_exists(dynamo_store, stubber):
    stubber.add_client_error(
        "put_item",
        service_error_code="ConditionalCheckFailedException",
        service_message="The conditional request failed",
        http_status_code=400,
    )

    with pytest.raises(AlreadyExistsError) as exc_info:
        await dynamo_store.put_new(CLIENTS, {"id": "c-1"})

    assert exc_info.value.key == "c-1"


@pytest.mark.asyncio
async def test_update_existing_returns_new_record(dynamo_store, stubber):
    stubber.add_response(
        "update_item",
        {
            "Attributes": {
                "id": {"S": "c-1"},
                "status": {"S": "Inactive"},
                "votes": {"N": "4"},
            }
        },
        None,
    )

    record = await dynamo_store.update_existing(CLIENTS, "c-1", {"status": "Inactive"})

    assert record == {"id": "c-1", "status": "Inactive", "votes": 4}


@pytest.mark.asyncio
async def test_update_missing_record_is_not_found(dynamo_store, stubber):
    stubber.add_client_error(
        "update_item", service_error_code="ConditionalCheckFailedException", http_status_code=400
    )

    with pytest.raises(NotFoundError):
        await dynamo_store.update_existing(CLIENTS, "missing", {"status": "Inactive"})


@pytest.mark.asyncio
async def test_guarded_update_that_lost_a_race_is_conflict(dynamo_store, stubber):
    # The failed check hands back the current item, so the record still exists
    stubber.add_client_error(
        "update_item",
        service_error_code="ConditionalCheckFailedException",
        http_status_code=400,
        modeled_fields={"Item": {"id": {"S": "c-1"}, "votes": {"N": "5"}}},
    )

    with pytest.raises(ConflictError) as exc_info:
        await dynamo_store.update_existing(CLIENTS, "c-1", {"votes": 5}, expected={"votes": 4})

    assert exc_info.value.code == "ConflictError"


@pytest.mark.asyncio
async def test_guarded_update_of_missing_record_is_not_found(dynamo_store, stubber):
    stubber.add_client_error(
        "update_item", service_error_code="ConditionalCheckFailedException", http_status_code=400
    )

    with pytest.raises(NotFoundError):
        await dynamo_store.update_existing(CLIENTS, "missing", {"votes": 1}, expected={"votes": None})


@pytest.mark.asyncio
async def test_delete_missing_record_is_not_found(dynamo_store, stubber):
    stubber.add_client_error(
        "delete_item", service_error_code="ConditionalCheckFailedException", http_status_code=400
    )

    with pytest.raises(NotFoundError) as exc_info:
        await dynamo_store.delete_existing(CLIENTS, "missing")

    assert exc_info.value.code == "NotFoundError"


# ── Reads ──


@pytest.mark.asyncio
async def test_get_absent_item_returns_none(dynamo_store, stubber):
    stubber.add_response("get_item", {}, None)
    assert await dynamo_store.get(CLIENTS, "nope") is None


@pytest.mark.asyncio
async def test_get_converts_numbers(dynamo_store, stubber):
    stubber.add_response(
        "get_item",
        {"Item": {"id": {"S": "c-1"}, "score": {"N": "1.5"}, "active": {"BOOL": True}}},
        None,
    )

    assert await dynamo_store.get(CLIENTS, "c-1") == {"id": "c-1", "score": 1.5, "active": True}


@pytest.mark.asyncio
async def test_scan_returns_page_and_last_key(dynamo_store, stubber):
    stubber.add_response(
        "scan",
        {
            "Items": [{"id": {"S": "c-1"}, "status": {"S": "Active"}}],
            "Count": 1,
            "ScannedCount": 2,
            "LastEvaluatedKey": {"id": {"S": "c-2"}},
        },
        None,
    )

    page = await dynamo_store.scan(CLIENTS, limit=2, filters={"status": "Active"})

    assert page.items == [{"id": "c-1", "status": "Active"}]
    assert page.last_key == {"id": "c-2"}
    assert page.scanned_count == 2


@pytest.mark.asyncio
async def test_query_on_index(dynamo_store, stubber):
    stubber.add_response(
        "query",
        {"Items": [{"id": {"S": "c-1"}, "email": {"S": "jane@acme.com"}}], "Count": 1, "ScannedCount": 1},
        None,
    )

    page = await dynamo_store.query(
        CLIENTS, attribute="email", value="jane@acme.com", index="EmailIndex", limit=1
    )

    assert page.items[0]["id"] == "c-1"
    assert page.last_key is None


# ── Error translation ──


@pytest.mark.asyncio
async def test_bad_credentials_are_backend_unavailable(dynamo_store, stubber):
    stubber.add_client_error(
        "get_item",
        service_error_code="UnrecognizedClientException",
        service_message="The security token included in the request is invalid.",
        http_status_code=400,
    )

    with pytest.raises(BackendUnavailableError):
        await dynamo_store.get(CLIENTS, "c-1")


@pytest.mark.asyncio
async def test_other_client_errors_are_operation_failed(dynamo_store, stubber):
    stubber.add_client_error(
        "scan",
        service_error_code="ResourceNotFoundException",
        service_message="Requested resource not found",
        http_status_code=400,
    )

    with pytest.raises(OperationFailedError) as exc_info:
        await dynamo_store.scan(CLIENTS, limit=10)

    assert exc_info.value.message == "Failed to scan items: Requested resource not found"


@pytest.mark.asyncio
async def test_unreachable_endpoint_is_backend_unavailable():
    store = DynamoDBItemStore(_UnreachableResource())

    with pytest.raises(BackendUnavailableError):
        await store.get(CLIENTS, "c-1")
