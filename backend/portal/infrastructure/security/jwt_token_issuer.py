"""PyJWT implementation of the TokenIssuer port (HS256)."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from portal.application.interfaces import TokenIssuer
from portal.domain.exceptions import AuthenticationError, ConfigurationError

ALGORITHM = "HS256"


class JwtTokenIssuer(TokenIssuer):
    def __init__(self, secret: str):
        if not secret:
            raise ConfigurationError("JWT secret must not be empty")
        self._secret = secret

    def issue(self, claims: dict[str, Any], expires_in: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {**claims, "iat": now, "exp": now + expires_in}
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token has expired", code="INVALID_TOKEN") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid or expired token", code="INVALID_TOKEN") from exc
