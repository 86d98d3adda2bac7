"""Pydantic DTOs for the Client feature."""

from typing import Literal

from pydantic import EmailStr, Field

from .common import CamelModel, CreateSchema, EntityResponse, UpdateSchema

ClientStatus = Literal["Active", "Inactive", "Archived"]


class Address(CamelModel):
    street: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)


class ClientCreate(CreateSchema):
    """Schema for registering a new client company."""

    company_name: str = Field(..., min_length=2, max_length=100, examples=["Acme Holdings"])
    contact_name: str = Field(..., min_length=2, max_length=100, examples=["Jane Smith"])
    email: EmailStr
    phone: str | None = Field(None, max_length=40)
    subscribed_apps: list[str] = Field(default_factory=list)
    status: ClientStatus = "Active"
    two_factor_enabled: bool = False
    industry: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255, pattern=r"^https?://")
    address: Address | None = None
    qr_code: str | None = Field(None, max_length=100)


class ClientUpdate(UpdateSchema):
    """Updatable client fields."""

    company_name: str | None = Field(None, min_length=2, max_length=100)
    contact_name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=40)
    subscribed_apps: list[str] | None = None
    status: ClientStatus | None = None
    two_factor_enabled: bool | None = None
    industry: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255, pattern=r"^https?://")
    address: Address | None = None
    qr_code: str | None = Field(None, max_length=100)
    last_activity: str | None = None


class ClientResponse(EntityResponse):
    company_name: str
    contact_name: str | None = None
    email: str
    phone: str | None = None
    subscribed_apps: list[str] = Field(default_factory=list)
    status: str = "Active"
    two_factor_enabled: bool = False
    industry: str | None = None
    website: str | None = None
    address: Address | None = None
    qr_code: str | None = None
    last_activity: str | None = None
