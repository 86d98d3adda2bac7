"""Login and token verification against configured credentials.

Only credentials supplied through settings are accepted. A user type whose
username or password is unset cannot log in at all.
"""

import logging
import secrets
from datetime import timedelta

from portal.application.interfaces import TokenIssuer
from portal.application.schemas import AuthUser, LoginRequest, LoginResponse, VerifyResponse
from portal.config import Settings
from portal.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        token_issuer: TokenIssuer,
        credentials: dict[str, tuple[str, str]],
        expires_in: timedelta = timedelta(hours=24),
    ):
        self._issuer = token_issuer
        self._credentials = credentials
        self._expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings, token_issuer: TokenIssuer) -> "AuthService":
        return cls(
            token_issuer,
            credentials={
                "admin": (settings.admin_username, settings.admin_password),
                "client": (settings.client_username, settings.client_password),
            },
            expires_in=timedelta(hours=settings.jwt_expires_hours),
        )

    def login(self, request: LoginRequest) -> LoginResponse:
        username, password = self._credentials.get(request.user_type, ("", ""))
        if not username or not password:
            logger.warning("Login attempted for unconfigured user type '%s'", request.user_type)
            raise AuthenticationError("Invalid credentials", code="INVALID_CREDENTIALS")

        username_ok = secrets.compare_digest(request.username.encode(), username.encode())
        password_ok = secrets.compare_digest(request.password.encode(), password.encode())
        if not (username_ok and password_ok):
            logger.warning("Failed %s login for '%s'", request.user_type, request.username)
            raise AuthenticationError("Invalid credentials", code="INVALID_CREDENTIALS")

        token = self._issuer.issue(
            {"sub": username, "role": request.user_type}, self._expires_in
        )
        logger.info("Issued %s token for '%s'", request.user_type, username)
        return LoginResponse(
            token=token,
            user=AuthUser(username=username, role=request.user_type),
            expires_in=int(self._expires_in.total_seconds()),
        )

    def verify(self, token: str | None) -> VerifyResponse:
        if not token:
            raise AuthenticationError("Access token required", code="MISSING_TOKEN")
        claims = self._issuer.decode(token)
        username = claims.get("sub")
        role = claims.get("role")
        if not username or role not in ("admin", "client"):
            raise AuthenticationError("Invalid or expired token", code="INVALID_TOKEN")
        return VerifyResponse(user=AuthUser(username=username, role=role))
