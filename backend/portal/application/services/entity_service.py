"""Base class for per-entity façades over ``DataAccessService``."""

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from portal.application.schemas import PageResponse
from portal.application.validation import coerce_value, to_record, validate_payload
from portal.domain.entities import EntityName, Page
from portal.domain.exceptions import ConflictError, NotFoundError, OperationFailedError

from .data_access_service import DataAccessService

logger = logging.getLogger(__name__)

CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)

# Guarded read-modify-write attempts before a ConflictError reaches the caller
MAX_UPDATE_ATTEMPTS = 10

# Maps the stored record to (fields, expected), or None to leave it untouched
Change = Callable[[dict[str, Any]], tuple[dict[str, Any], dict[str, Any]] | None]


class EntityService(Generic[CreateT, UpdateT, ResponseT]):
    """Fixed-table CRUD with typed request and response structs.

    Subclasses declare the entity, its label for error messages and the
    three schemas; ``_prepare_create`` / ``_prepare_update`` are the hooks
    for entity-specific side effects.
    """

    entity: ClassVar[EntityName]
    label: ClassVar[str]
    create_schema: ClassVar[type[BaseModel]]
    update_schema: ClassVar[type[BaseModel]]
    response_schema: ClassVar[type[BaseModel]]

    def __init__(self, data_access: DataAccessService):
        self._data = data_access

    @property
    def key_attribute(self) -> str:
        return self._data.registry.resolve(self.entity).key_attribute

    async def create(self, payload: CreateT | Mapping[str, Any]) -> ResponseT:
        data = validate_payload(self.create_schema, payload)
        record = self._prepare_create(to_record(data))
        created = await self._data.create(self.entity, record)
        return self._to_response(created)

    async def find(self, item_id: str) -> ResponseT | None:
        record = await self._data.get(self.entity, item_id)
        return self._to_response(record) if record is not None else None

    async def get(self, item_id: str) -> ResponseT:
        found = await self.find(item_id)
        if found is None:
            raise NotFoundError(self.label, item_id)
        return found

    async def list(
        self,
        *,
        limit: int | None = 50,
        cursor: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> PageResponse[ResponseT]:
        page = await self._data.scan(self.entity, limit=limit, cursor=cursor, filters=filters)
        return self._to_page(page)

    async def update(self, item_id: str, payload: UpdateT | Mapping[str, Any]) -> ResponseT:
        data = validate_payload(self.update_schema, payload)
        fields = self._prepare_update(to_record(data, partial=True))
        updated = await self._data.update(self.entity, item_id, fields)
        return self._to_response(updated)

    async def delete(self, item_id: str) -> None:
        await self._data.delete(self.entity, item_id)

    async def query_by(
        self,
        index: str,
        value: Any,
        *,
        limit: int | None = 50,
        cursor: str | None = None,
        filters: Mapping[str, Any] | None = None,
        ascending: bool = True,
    ) -> PageResponse[ResponseT]:
        """Records whose ``index`` partition attribute equals ``value``.

        A string ``value`` is converted to the attribute's declared type first.
        """
        attribute = self._data.registry.index_attribute(self.entity, index)
        if isinstance(value, str):
            value = coerce_value(self.response_schema, attribute, value, field="value")
        page = await self._data.query(
            self.entity,
            {attribute: value},
            index=index,
            filters=filters,
            limit=limit,
            cursor=cursor,
            ascending=ascending,
        )
        return self._to_page(page)

    async def _read_modify_write(self, item_id: str, change: Change) -> ResponseT:
        """Apply ``change`` to the current record without losing concurrent writes.

        Each attempt reads the record and writes conditionally on the
        ``expected`` values; a write that lost a race re-reads and tries again.
        """
        for _ in range(MAX_UPDATE_ATTEMPTS):
            record = await self._data.get(self.entity, item_id)
            if record is None:
                raise NotFoundError(self.label, item_id)
            planned = change(record)
            if planned is None:
                return self._to_response(record)
            fields, expected = planned
            try:
                updated = await self._data.update(self.entity, item_id, fields, expected=expected)
            except ConflictError:
                logger.info("%s %s changed concurrently, retrying", self.label, item_id)
                continue
            return self._to_response(updated)
        raise ConflictError(self.label, item_id)

    def _prepare_create(self, record: dict[str, Any]) -> dict[str, Any]:
        return record

    def _prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    def _to_response(self, record: Mapping[str, Any]) -> ResponseT:
        try:
            return self.response_schema.model_validate(record)  # type: ignore[return-value]
        except PydanticValidationError as exc:
            logger.error("Stored %s record does not match its schema: %s", self.label, exc)
            raise OperationFailedError(f"read {self.label}", str(exc)) from exc

    def _to_page(self, page: Page) -> PageResponse[ResponseT]:
        return PageResponse[self.response_schema](  # type: ignore[name-defined]
            items=[self._to_response(item) for item in page.items],
            cursor=page.cursor,
            count=page.count,
            scanned_count=page.scanned_count,
        )
