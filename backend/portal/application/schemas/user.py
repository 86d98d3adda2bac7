"""Pydantic DTOs for portal users and admin users."""

from typing import Literal

from pydantic import EmailStr, Field

from .common import CreateSchema, EntityResponse, UpdateSchema

UserRole = Literal["admin", "user", "viewer", "client"]


class UserCreate(CreateSchema):
    """Schema for creating a user. Admin users share the same shape."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    role: UserRole = "user"
    client_id: str | None = Field(None, max_length=128)
    permissions: list[str] = Field(default_factory=list)
    is_active: bool = True
    two_factor_enabled: bool = False


class UserUpdate(UpdateSchema):
    name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr | None = None
    role: UserRole | None = None
    client_id: str | None = Field(None, max_length=128)
    permissions: list[str] | None = None
    is_active: bool | None = None
    two_factor_enabled: bool | None = None
    last_login: str | None = None


class UserResponse(EntityResponse):
    name: str
    email: str
    role: str
    client_id: str | None = None
    permissions: list[str] = Field(default_factory=list)
    is_active: bool = True
    two_factor_enabled: bool = False
    last_login: str | None = None
