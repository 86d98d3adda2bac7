"""Pydantic DTOs for knowledge-base articles."""

from typing import Literal

from pydantic import Field

from .common import CreateSchema, EntityResponse, UpdateSchema

Difficulty = Literal["Beginner", "Intermediate", "Advanced"]


class ArticleCreate(CreateSchema):
    title: str = Field(..., min_length=5, max_length=200)
    content: str = Field(..., min_length=50)
    category: str = Field(..., min_length=1, max_length=100)
    app_id: str | None = Field(None, max_length=128)
    tags: list[str] = Field(default_factory=list)
    author: str = Field(..., min_length=1, max_length=100)
    is_published: bool = False
    difficulty: Difficulty | None = None
    estimated_read_time: int | None = Field(None, ge=1)
    views: int = Field(0, ge=0)
    helpful: int = Field(0, ge=0)
    not_helpful: int = Field(0, ge=0)


class ArticleUpdate(UpdateSchema):
    title: str | None = Field(None, min_length=5, max_length=200)
    content: str | None = Field(None, min_length=50)
    category: str | None = Field(None, min_length=1, max_length=100)
    app_id: str | None = Field(None, max_length=128)
    tags: list[str] | None = None
    is_published: bool | None = None
    difficulty: Difficulty | None = None
    estimated_read_time: int | None = Field(None, ge=1)
    views: int | None = Field(None, ge=0)
    helpful: int | None = Field(None, ge=0)
    not_helpful: int | None = Field(None, ge=0)


class ArticleResponse(EntityResponse):
    title: str
    content: str | None = None
    category: str | None = None
    app_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    author: str | None = None
    is_published: bool = False
    difficulty: str | None = None
    estimated_read_time: int | None = None
    views: int = 0
    helpful: int = 0
    not_helpful: int = 0
