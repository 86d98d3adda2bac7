"""Pydantic DTOs for the home-page content tables: recent updates and popular topics."""

from typing import Literal

from pydantic import Field

from .common import CreateSchema, EntityResponse, UpdateSchema

UpdateType = Literal["update", "maintenance", "content", "feature"]


class RecentUpdateCreate(CreateSchema):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    type: UpdateType = "update"
    date: str = Field(..., min_length=1, examples=["2024-05-01"])
    is_active: bool = True
    created_by: str = Field(..., min_length=1, max_length=100)


class RecentUpdateUpdate(UpdateSchema):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=2000)
    type: UpdateType | None = None
    date: str | None = Field(None, min_length=1)
    is_active: bool | None = None


class RecentUpdateResponse(EntityResponse):
    title: str
    description: str | None = None
    type: str | None = None
    date: str | None = None
    is_active: bool = True
    created_by: str | None = None


class PopularTopicCreate(CreateSchema):
    title: str = Field(..., min_length=1, max_length=200)
    article_id: str = Field(..., min_length=1, max_length=128)
    views: int = Field(0, ge=0)
    is_active: bool = True
    order: int = Field(0, ge=0)
    created_by: str = Field(..., min_length=1, max_length=100)


class PopularTopicUpdate(UpdateSchema):
    title: str | None = Field(None, min_length=1, max_length=200)
    article_id: str | None = Field(None, min_length=1, max_length=128)
    views: int | None = Field(None, ge=0)
    is_active: bool | None = None
    order: int | None = Field(None, ge=0)


class PopularTopicResponse(EntityResponse):
    title: str
    article_id: str | None = None
    views: int = 0
    is_active: bool = True
    order: int = 0
    created_by: str | None = None
