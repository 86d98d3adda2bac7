"""Pydantic DTOs for the FeatureRequest feature."""

from typing import Literal

from pydantic import Field

from .common import CamelModel, CreateSchema, EntityResponse, UpdateSchema

FeatureStatus = Literal[
    "Submitted", "Under Review", "Planned", "In Development", "Completed", "Rejected",
]
FeaturePriority = Literal["Low", "Medium", "High", "Urgent"]


class FeatureRequestCreate(CreateSchema):
    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    priority: FeaturePriority = "Medium"
    category: str = Field(..., min_length=1, max_length=100)
    app_id: str = Field(..., min_length=1, max_length=128)
    client_id: str | None = Field(None, max_length=128)
    submitted_by: str = Field(..., min_length=1, max_length=100)
    votes: int = Field(0, ge=0)
    upvoted_by: list[str] = Field(default_factory=list)
    status: FeatureStatus = "Submitted"
    is_pinned: bool = False
    admin_notes: str | None = Field(None, max_length=2000)


class FeatureRequestUpdate(UpdateSchema):
    title: str | None = Field(None, min_length=5, max_length=200)
    description: str | None = Field(None, min_length=10, max_length=2000)
    priority: FeaturePriority | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    status: FeatureStatus | None = None
    is_pinned: bool | None = None
    admin_notes: str | None = Field(None, max_length=2000)
    estimated_completion: str | None = None


class UpvoteRequest(CamelModel):
    client_id: str = Field(..., min_length=1, max_length=128)


class FeatureRequestResponse(EntityResponse):
    title: str
    description: str | None = None
    priority: str | None = None
    category: str | None = None
    app_id: str | None = None
    client_id: str | None = None
    submitted_by: str | None = None
    votes: int = 0
    upvoted_by: list[str] = Field(default_factory=list)
    status: str = "Submitted"
    is_pinned: bool = False
    admin_notes: str | None = None
    estimated_completion: str | None = None
