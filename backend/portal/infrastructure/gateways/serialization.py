"""Payload normalisation shared by the gateways."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def as_payload(payload: BaseModel | Mapping[str, Any] | None, *, partial: bool = False) -> dict[str, Any]:
    """Records cross gateways as camelCase dicts; pydantic models are dumped by alias."""
    if payload is None:
        return {}
    if isinstance(payload, BaseModel):
        return payload.model_dump(
            by_alias=True, mode="json", exclude_none=True, exclude_unset=partial,
        )
    return dict(payload)
