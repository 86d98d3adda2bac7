"""Pydantic DTOs for the Ticket feature."""

from typing import Literal

from pydantic import EmailStr, Field

from portal.domain.entities import Priority, TicketStatus

from .common import CamelModel, CreateSchema, EntityResponse, UpdateSchema

IssueType = Literal[
    "Bug Report",
    "Feature Request",
    "Login Issue",
    "Performance Issue",
    "Data Issue",
    "General Question",
    "Other",
]


class TicketReply(CamelModel):
    id: str | None = None
    author: str = Field(..., min_length=1, max_length=100)
    author_type: Literal["client", "admin"] = "client"
    message: str = Field(..., min_length=1, max_length=5000)
    is_internal: bool = False
    created_at: str | None = None


class InternalNote(CamelModel):
    id: str | None = None
    author: str = Field(..., min_length=1, max_length=100)
    note: str = Field(..., min_length=1, max_length=5000)
    created_at: str | None = None


class TicketCreate(CreateSchema):
    """Schema for submitting a ticket.

    ``status``, ``replies`` and ``ticketNumber`` are not accepted here; the
    service assigns them.
    """

    subject: str = Field(..., min_length=1, max_length=200, examples=["Cannot export reports"])
    description: str = Field(..., min_length=1, max_length=5000)
    priority: Priority
    email: EmailStr
    name: str | None = Field(None, min_length=2, max_length=100)
    issue_type: IssueType | None = None
    category: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=40)
    company: str | None = Field(None, max_length=100)
    app_id: str | None = Field(None, max_length=128)
    app_version: str | None = Field(None, max_length=40)
    client_id: str | None = Field(None, max_length=128)
    attachments: list[str] = Field(default_factory=list)


class TicketUpdate(UpdateSchema):
    """Updatable ticket fields."""

    status: TicketStatus | None = None
    priority: Priority | None = None
    assigned_to: str | None = Field(None, max_length=100)
    resolution: str | None = Field(None, max_length=5000)
    replies: list[TicketReply] | None = None
    internal_notes: list[InternalNote] | None = None


class TicketReplyCreate(CamelModel):
    """Schema for appending one reply to a ticket."""

    author: str = Field(..., min_length=1, max_length=100)
    author_type: Literal["client", "admin"] = "client"
    message: str = Field(..., min_length=1, max_length=5000)
    is_internal: bool = False


class TicketResponse(EntityResponse):
    ticket_number: str
    subject: str
    description: str | None = None
    priority: str
    status: str
    email: str | None = None
    name: str | None = None
    issue_type: str | None = None
    category: str | None = None
    phone: str | None = None
    company: str | None = None
    app_id: str | None = None
    app_version: str | None = None
    client_id: str | None = None
    attachments: list[str] = Field(default_factory=list)
    assigned_to: str | None = None
    resolution: str | None = None
    replies: list[TicketReply] = Field(default_factory=list)
    internal_notes: list[InternalNote] = Field(default_factory=list)


class TicketStatsResponse(CamelModel):
    total: int
    open: int
    in_progress: int
    waiting_for_response: int
    resolved: int
    closed: int
    urgent: int
