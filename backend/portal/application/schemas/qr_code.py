"""Pydantic DTOs for client onboarding QR codes."""

from pydantic import EmailStr, Field

from .common import CreateSchema, RecordResponse, UpdateSchema


class QRCodeCreate(CreateSchema):
    """Request to issue a code. The code itself and its expiry are generated."""

    client_id: str = Field(..., min_length=1, max_length=128)
    company_name: str = Field(..., min_length=1, max_length=100)
    contact_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class QRCodeUpdate(UpdateSchema):
    used: bool | None = None
    used_at: str | None = None
    expires_at: str | None = None


class QRCodeResponse(RecordResponse):
    code: str
    client_id: str
    company_name: str | None = None
    contact_name: str | None = None
    email: str | None = None
    expires_at: str | None = None
    used: bool = False
    used_at: str | None = None
