"""Generic data access: storage-agnostic CRUD over any registered table.

Every record is a flat camelCase dict keyed by its table's key attribute.
This layer owns the record lifecycle rules:

* ``create`` assigns a UUID key when none is given and stamps ``createdAt``
  and ``updatedAt``; the store's uniqueness guard rejects duplicates.
* ``update`` strips ``None`` values and reserved attributes, stamps a new
  ``updatedAt`` and writes only the remaining fields, guarded by existence.
* ``scan`` / ``query`` clamp ``limit`` to 1..100 and hand out opaque cursors.

Stores raise only domain errors; anything else escaping a store is wrapped
into ``OperationFailedError`` so callers never see backend exception types.
"""

import base64
import json
import logging
import uuid
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

from portal.application.interfaces import ItemStore, StorePage
from portal.application.validation import check_attribute_name, clamp_limit
from portal.domain.clock import UtcClock
from portal.domain.entities import EntityName, Page, TableDefinition
from portal.domain.exceptions import (
    BackendUnavailableError,
    OperationFailedError,
    PortalError,
    ValidationError,
)

from .table_registry import TableRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

TableRef = EntityName | str | TableDefinition
KeyRef = str | Mapping[str, Any]

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"


def encode_cursor(last_key: Mapping[str, Any] | None) -> str | None:
    """URL-safe base64 of the JSON-encoded last evaluated key."""
    if not last_key:
        return None
    raw = json.dumps(dict(last_key), separators=(",", ":"), sort_keys=True)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(cursor: str | None) -> dict[str, Any] | None:
    if not cursor:
        return None
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        key = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except ValueError:
        raise ValidationError.single("cursor", "Malformed pagination cursor") from None
    if not isinstance(key, dict) or not key:
        raise ValidationError.single("cursor", "Malformed pagination cursor")
    return key


class DataAccessService:
    """CRUD primitives over an ``ItemStore`` and the table registry."""

    def __init__(
        self,
        registry: TableRegistry,
        store: ItemStore,
        clock: UtcClock | None = None,
    ):
        self._registry = registry
        self._store = store
        self._clock = clock or UtcClock()

    @property
    def registry(self) -> TableRegistry:
        return self._registry

    @property
    def clock(self) -> UtcClock:
        return self._clock

    async def create(self, table: TableRef, item: Mapping[str, Any]) -> dict[str, Any]:
        definition = self._registry.resolve(table)
        record = {k: v for k, v in item.items() if v is not None}
        key_attribute = definition.key_attribute
        if not record.get(key_attribute):
            record[key_attribute] = str(uuid.uuid4())
        else:
            record[key_attribute] = str(record[key_attribute])
        stamp = self._clock.stamp()
        record[CREATED_AT] = stamp
        record[UPDATED_AT] = stamp

        await self._guarded("create item", self._store.put_new(definition, record))
        logger.info(
            "Created %s in %s", record[key_attribute], definition.table_name
        )
        return record

    async def get(self, table: TableRef, key: KeyRef) -> dict[str, Any] | None:
        definition = self._registry.resolve(table)
        key_value = self._key_value(definition, key)
        return await self._guarded("get item", self._store.get(definition, key_value))

    async def update(
        self,
        table: TableRef,
        key: KeyRef,
        fields: Mapping[str, Any],
        *,
        expected: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Write ``fields`` onto an existing record.

        ``expected`` makes the write conditional on the listed attributes still
        holding those values; a mismatch raises ConflictError.
        """
        definition = self._registry.resolve(table)
        key_value = self._key_value(definition, key)
        reserved = {definition.key_attribute, CREATED_AT, UPDATED_AT}
        changes = {
            name: value
            for name, value in fields.items()
            if value is not None and name not in reserved
        }
        for name in changes:
            check_attribute_name(name, field=name)
        changes[UPDATED_AT] = self._clock.stamp()
        guard = dict(expected) if expected else None
        for name in guard or ():
            check_attribute_name(name, field=name)

        record = await self._guarded(
            "update item",
            self._store.update_existing(definition, key_value, changes, expected=guard),
        )
        logger.info(
            "Updated %s in %s (%s)",
            key_value, definition.table_name, ", ".join(sorted(changes)),
        )
        return record

    async def delete(self, table: TableRef, key: KeyRef) -> None:
        definition = self._registry.resolve(table)
        key_value = self._key_value(definition, key)
        await self._guarded("delete item", self._store.delete_existing(definition, key_value))
        logger.info("Deleted %s from %s", key_value, definition.table_name)

    async def scan(
        self,
        table: TableRef,
        *,
        limit: int | None = 50,
        cursor: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> Page:
        definition = self._registry.resolve(table)
        store_page = await self._guarded(
            "scan items",
            self._store.scan(
                definition,
                limit=clamp_limit(limit),
                start_key=decode_cursor(cursor),
                filters=self._checked_filters(filters),
            ),
        )
        return self._to_page(store_page)

    async def query(
        self,
        table: TableRef,
        key_condition: Mapping[str, Any],
        *,
        index: str | None = None,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = 50,
        cursor: str | None = None,
        ascending: bool = True,
    ) -> Page:
        """Read records whose partition attribute equals a value.

        ``key_condition`` is a one-entry mapping on the table key, or on the
        partition attribute of ``index`` when one is named.
        """
        definition = self._registry.resolve(table)
        if len(key_condition) != 1:
            raise ValidationError.single(
                "keyCondition", "Exactly one key attribute must be given"
            )
        attribute, value = next(iter(key_condition.items()))
        expected = (
            self._registry.index_attribute(definition, index)
            if index
            else definition.key_attribute
        )
        if attribute != expected:
            raise ValidationError.single(
                "keyCondition",
                f"Expected key attribute '{expected}', got '{attribute}'",
            )
        if value is None or value == "":
            raise ValidationError.single("keyCondition", "Key value is required")

        store_page = await self._guarded(
            "query items",
            self._store.query(
                definition,
                attribute=attribute,
                value=value,
                index=index,
                limit=clamp_limit(limit),
                start_key=decode_cursor(cursor),
                filters=self._checked_filters(filters),
                ascending=ascending,
            ),
        )
        return self._to_page(store_page)

    async def ping(self, table: TableRef) -> bool:
        """True when one-record scan of ``table`` succeeds."""
        definition = self._registry.resolve(table)
        try:
            await self.scan(definition, limit=1)
        except (BackendUnavailableError, OperationFailedError) as exc:
            logger.warning("Health probe failed for %s: %s", definition.table_name, exc)
            return False
        return True

    @staticmethod
    def _key_value(definition: TableDefinition, key: KeyRef) -> str:
        value = key.get(definition.key_attribute) if isinstance(key, Mapping) else key
        if value is None or str(value) == "":
            raise ValidationError.single(definition.key_attribute, "Key value is required")
        return str(value)

    @staticmethod
    def _checked_filters(filters: Mapping[str, Any] | None) -> dict[str, Any] | None:
        if not filters:
            return None
        return {check_attribute_name(name): value for name, value in filters.items()}

    @staticmethod
    def _to_page(store_page: StorePage) -> Page:
        return Page(
            items=store_page.items,
            cursor=encode_cursor(store_page.last_key),
            scanned_count=store_page.scanned_count,
        )

    @staticmethod
    async def _guarded(operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except PortalError:
            raise
        except Exception as exc:
            logger.exception("Unexpected storage failure during %s", operation)
            raise OperationFailedError(operation, str(exc)) from exc
