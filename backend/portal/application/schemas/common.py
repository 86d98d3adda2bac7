"""Shared DTO bases, paging and the HTTP response envelope."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from portal.domain.clock import format_timestamp

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase on the wire and in storage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSchema(CamelModel):
    """Base for create payloads. Unknown fields are stripped, not rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )

    id: str | None = Field(None, min_length=1, max_length=128)


class UpdateSchema(CamelModel):
    """Base for update payloads: the closed set of updatable fields.

    Anything not declared on the subclass (including ``id``, ``createdAt``
    and ``updatedAt``) is rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )


class RecordResponse(CamelModel):
    """Base for records returned to callers."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )

    created_at: str | None = None
    updated_at: str | None = None


class EntityResponse(RecordResponse):
    id: str


class PageResponse(CamelModel, Generic[T]):
    """One page of records plus the cursor for the next page."""

    items: list[T]
    cursor: str | None = None
    count: int = 0
    scanned_count: int = 0


class FieldErrorSchema(BaseModel):
    field: str
    message: str


def _now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: ``{success, data, timestamp}``."""

    success: bool = True
    data: T | None = None
    timestamp: str = Field(default_factory=_now)


class ErrorResponse(BaseModel):
    """Error envelope: ``{success, error, code, timestamp}`` plus validation details."""

    success: bool = False
    error: str
    code: str
    timestamp: str = Field(default_factory=_now)
    details: list[FieldErrorSchema] | None = None


class DeleteResult(BaseModel):
    deleted: bool = True
    key: str

