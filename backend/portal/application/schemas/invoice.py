"""Pydantic DTOs for the Invoice feature."""

from typing import Literal

from pydantic import Field

from .common import CamelModel, CreateSchema, EntityResponse, UpdateSchema

InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]


class InvoiceLineItem(CamelModel):
    description: str = Field(..., min_length=1, max_length=500)
    quantity: float = Field(..., gt=0)
    unit_price: float = Field(..., ge=0)
    app_id: str | None = Field(None, max_length=128)


class PricedLineItem(InvoiceLineItem):
    total: float = 0


class InvoiceCreate(CreateSchema):
    """Schema for drafting an invoice. Totals are always computed server-side."""

    client_id: str = Field(..., min_length=1, max_length=128)
    invoice_number: str | None = Field(None, max_length=40)
    issue_date: str = Field(..., min_length=1, examples=["2024-05-01"])
    due_date: str = Field(..., min_length=1, examples=["2024-05-31"])
    status: InvoiceStatus = "draft"
    items: list[InvoiceLineItem] = Field(default_factory=list)
    currency: str = Field("USD", min_length=3, max_length=3)
    payment_terms: str = Field("Net 30", max_length=100)
    notes: str | None = Field(None, max_length=2000)
    created_by: str = Field(..., min_length=1, max_length=100)


class InvoiceUpdate(UpdateSchema):
    status: InvoiceStatus | None = None
    due_date: str | None = Field(None, min_length=1)
    paid_date: str | None = None
    items: list[InvoiceLineItem] | None = None
    payment_terms: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=2000)


class InvoiceResponse(EntityResponse):
    client_id: str
    invoice_number: str
    issue_date: str | None = None
    due_date: str | None = None
    paid_date: str | None = None
    status: str = "draft"
    items: list[PricedLineItem] = Field(default_factory=list)
    subtotal: float = 0
    tax: float = 0
    total: float = 0
    currency: str = "USD"
    payment_terms: str | None = None
    notes: str | None = None
    created_by: str | None = None
