"""Pydantic DTOs for login and token verification."""

from typing import Literal

from pydantic import BaseModel, Field

from .common import CamelModel

UserType = Literal["admin", "client"]


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)
    user_type: UserType = "admin"


class AuthUser(BaseModel):
    username: str
    role: UserType


class LoginResponse(BaseModel):
    token: str
    user: AuthUser
    expires_in: int


class VerifyResponse(BaseModel):
    valid: bool = True
    user: AuthUser
