"""Remote proxy client: implements the PortalGateway port over HTTP.

Talks to the portal's own HTTP API (``/api/<entity>``) with httpx, sending
the static API key and, when logged in, a bearer token. Envelopes are
unwrapped and their error codes mapped back to domain errors, so callers
see the same exceptions whichever transport served them.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from portal.application.interfaces import PortalGateway
from portal.domain.entities import EntityName, Page, TransportMode
from portal.domain.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    BackendUnavailableError,
    ConflictError,
    FieldError,
    NotFoundError,
    OperationFailedError,
    PortalError,
    ValidationError,
)

from .serialization import as_payload

logger = logging.getLogger(__name__)

_UNAVAILABLE_STATUSES = {502, 503, 504}


class ProxyGateway(PortalGateway):
    """Infrastructure adapter: connects to a running portal proxy."""

    mode = TransportMode.REMOTE_PROXY

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._http_client = http_client
        self._timeout = timeout
        self.token = token

    def _get_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "x-api-key": self._api_key}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        should_close = self._http_client is None
        try:
            return await client.request(
                method, f"{self._base_url}{path}", headers=self._get_headers(), **kwargs
            )
        except httpx.TransportError as exc:
            logger.warning("Proxy %s %s unreachable: %s", method, path, exc)
            raise BackendUnavailableError(f"Proxy unreachable: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

    async def health(self) -> bool:
        try:
            response = await self._send("GET", "/health")
        except BackendUnavailableError:
            return False
        if response.status_code != 200:
            return False
        try:
            body = response.json()
        except ValueError:
            return False
        return isinstance(body, dict) and body.get("success", True) is not False

    async def create(
        self, entity: EntityName, payload: BaseModel | dict[str, Any]
    ) -> dict[str, Any]:
        response = await self._send("POST", f"/api/{entity.value}", json=as_payload(payload))
        return self._unwrap(response, entity, payload_key(payload))

    async def get(self, entity: EntityName, item_id: str) -> dict[str, Any] | None:
        response = await self._send("GET", f"/api/{entity.value}/{item_id}")
        try:
            return self._unwrap(response, entity, item_id)
        except NotFoundError:
            return None

    async def list(
        self, entity: EntityName, *, limit: int = 50, cursor: str | None = None
    ) -> Page:
        params: dict[str, Any] = {"limit": limit}
        if cursor:
            params["cursor"] = cursor
        response = await self._send("GET", f"/api/{entity.value}", params=params)
        data = self._unwrap(response, entity, "") or {}
        return Page(
            items=list(data.get("items", [])),
            cursor=data.get("cursor"),
            scanned_count=int(data.get("scannedCount", 0)),
        )

    async def update(
        self, entity: EntityName, item_id: str, fields: BaseModel | dict[str, Any]
    ) -> dict[str, Any]:
        response = await self._send(
            "PUT", f"/api/{entity.value}/{item_id}", json=as_payload(fields, partial=True)
        )
        return self._unwrap(response, entity, item_id)

    async def delete(self, entity: EntityName, item_id: str) -> None:
        response = await self._send("DELETE", f"/api/{entity.value}/{item_id}")
        self._unwrap(response, entity, item_id)

    async def login(self, username: str, password: str, user_type: str = "admin") -> dict[str, Any]:
        """Log in through the proxy and keep the returned token for later calls."""
        response = await self._send(
            "POST",
            "/auth/login",
            json={"username": username, "password": password, "userType": user_type},
        )
        data = self._unwrap(response, None, username)
        self.token = data.get("token")
        return data

    async def verify(self) -> dict[str, Any]:
        response = await self._send("GET", "/auth/verify")
        return self._unwrap(response, None, "")

    def _unwrap(self, response: httpx.Response, entity: EntityName | None, key: str) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success and isinstance(body, dict) and body.get("success", True):
            return body.get("data")
        raise self._error_from(response, body, entity, key)

    @staticmethod
    def _error_from(
        response: httpx.Response, body: Any, entity: EntityName | None, key: str
    ) -> PortalError:
        envelope = body if isinstance(body, dict) else {}
        code = envelope.get("code")
        message = envelope.get("error") or response.text or response.reason_phrase
        entity_name = entity.value if entity is not None else "record"

        if code == ValidationError.code:
            details = envelope.get("details") or []
            return ValidationError(
                [FieldError(field=d.get("field", ""), message=d.get("message", "")) for d in details],
                message=message,
            )
        if code == AlreadyExistsError.code:
            return AlreadyExistsError(entity_name, key)
        if code == ConflictError.code:
            return ConflictError(entity_name, key)
        if code == NotFoundError.code or (code is None and response.status_code == 404):
            return NotFoundError(entity_name, key)
        if code == BackendUnavailableError.code or (
            code is None and response.status_code in _UNAVAILABLE_STATUSES
        ):
            return BackendUnavailableError(message)
        if response.status_code in (401, 403):
            return AuthenticationError(message, code=code or AuthenticationError.code)
        logger.error("Proxy call failed with %s: %s", response.status_code, message)
        return OperationFailedError("call proxy", message)


def payload_key(payload: BaseModel | dict[str, Any]) -> str:
    data = as_payload(payload)
    return str(data.get("id") or data.get("code") or "")
