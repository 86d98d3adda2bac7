"""Pydantic DTOs for the App feature."""

from typing import Any

from pydantic import Field

from .common import CreateSchema, EntityResponse, UpdateSchema


class AppCreate(CreateSchema):
    name: str = Field(..., min_length=2, max_length=100, examples=["Inventory Manager"])
    description: str | None = Field(None, max_length=500)
    version: str | None = Field(None, max_length=40)
    platform: str | None = Field(None, max_length=40)
    client_id: str | None = Field(None, max_length=128)
    is_active: bool = True
    settings: dict[str, Any] | None = None


class AppUpdate(UpdateSchema):
    name: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = Field(None, max_length=500)
    version: str | None = Field(None, max_length=40)
    platform: str | None = Field(None, max_length=40)
    client_id: str | None = Field(None, max_length=128)
    is_active: bool | None = None
    settings: dict[str, Any] | None = None


class AppResponse(EntityResponse):
    name: str
    description: str | None = None
    version: str | None = None
    platform: str | None = None
    client_id: str | None = None
    is_active: bool = True
    settings: dict[str, Any] | None = None
