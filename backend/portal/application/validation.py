"""Request validation: pydantic schemas in, ``FieldError`` lists out.

Every payload is validated here before it reaches the data-access layer, so
a rejected request never produces a partial write.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from types import UnionType
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from portal.domain.exceptions import FieldError, ValidationError

M = TypeVar("M", bound=BaseModel)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

# Request locations FastAPI prepends to error paths
_LOCATION_PREFIXES = {"body", "query", "path", "header"}
_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z0-9_]+$")


def field_errors(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Convert pydantic/FastAPI error dicts into dot-joined ``FieldError`` entries."""
    result: list[FieldError] = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        result.append(FieldError(field=field, message=error.get("msg", "Invalid value")))
    return result


def validate_payload(schema: type[M], payload: Any) -> M:
    """Validate ``payload`` against ``schema``.

    Accepts an instance of the schema (returned as-is), any other pydantic
    model (re-validated from its explicitly set fields) or a mapping.
    Raises ValidationError listing every rejected field.
    """
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True, exclude_unset=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationError.single("body", "Expected a JSON object")
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc.errors())) from exc


def to_record(model: BaseModel, *, partial: bool = False) -> dict[str, Any]:
    """Dump a validated model to the stored camelCase shape.

    ``partial`` keeps only the fields the caller actually sent, for updates.
    """
    return model.model_dump(
        by_alias=True, mode="json", exclude_none=True, exclude_unset=partial,
    )


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(int(limit), MAX_PAGE_SIZE))


def check_attribute_name(name: str, field: str = "filter") -> str:
    if not _ATTRIBUTE_NAME.match(name):
        raise ValidationError.single(field, f"Invalid attribute name '{name}'")
    return name


def _scalar_type(schema: type[BaseModel], attribute: str) -> type | None:
    """The bool, int or float type ``schema`` declares for ``attribute``, if any."""
    for name, info in schema.model_fields.items():
        if attribute not in (name, info.alias):
            continue
        annotation = info.annotation
        if get_origin(annotation) in (Union, UnionType):
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            annotation = members[0] if len(members) == 1 else None
        return annotation if annotation in (bool, int, float) else None
    return None


def coerce_value(
    schema: type[BaseModel] | None, attribute: str, raw: str, field: str = "filter"
) -> Any:
    """Convert a query-string value to the type ``schema`` declares for ``attribute``.

    Attributes declared as strings, or not declared at all, keep the raw text,
    so ``clientId:1001`` still matches the stored string ``"1001"``.
    """
    target = _scalar_type(schema, attribute) if schema is not None else None
    if target is None:
        return raw
    try:
        return TypeAdapter(target).validate_python(raw)
    except PydanticValidationError as exc:
        raise ValidationError.single(
            field, f"'{attribute}' expects a {target.__name__} value, got '{raw}'"
        ) from exc


def parse_filters(
    raw_filters: Sequence[str] | None, schema: type[BaseModel] | None = None
) -> dict[str, Any]:
    """Parse repeated ``attr:value`` query parameters into an equality filter map.

    Values are typed from ``schema``: ``votes:3`` on a feature request
    filters on the number 3, ``clientId:1001`` on the string ``"1001"``.
    """
    filters: dict[str, Any] = {}
    for item in raw_filters or ():
        attribute, sep, value = item.partition(":")
        if not sep or not attribute:
            raise ValidationError.single("filter", f"Expected 'attribute:value', got '{item}'")
        name = check_attribute_name(attribute.strip())
        filters[name] = coerce_value(schema, name, value)
    return filters
