"""Request guards: static API key for ``/api``, bearer token for ``/auth/verify``."""

import secrets

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from portal.config import Settings
from portal.domain.exceptions import AuthenticationError
from portal.infrastructure.dependencies import get_app_settings

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


async def require_api_key(
    api_key: str | None = Security(api_key_header),
    settings: Settings = Depends(get_app_settings),
) -> None:
    if not api_key:
        raise AuthenticationError("API key required", code="MISSING_API_KEY")
    # An unconfigured key matches nothing
    if not settings.api_key or not secrets.compare_digest(
        api_key.encode(), settings.api_key.encode()
    ):
        raise AuthenticationError("Invalid API key", code="INVALID_API_KEY")


async def bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials is not None else None
