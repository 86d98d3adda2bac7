"""Abstract gateway interface (port) the transport selector dispatches to."""

from abc import ABC, abstractmethod
from typing import Any

from portal.domain.entities import EntityName, Page, TransportMode


class PortalGateway(ABC):
    """One way of reaching portal data: remote proxy, direct storage or fixtures.

    Records cross this boundary as plain camelCase dicts, the same shape the
    HTTP API returns inside its envelope.
    """

    mode: TransportMode

    @abstractmethod
    async def health(self) -> bool:
        """Lightweight reachability check."""
        ...

    @abstractmethod
    async def create(self, entity: EntityName, payload: dict[str, Any]) -> dict[str, Any]:
        ...

    @abstractmethod
    async def get(self, entity: EntityName, item_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    async def list(
        self, entity: EntityName, *, limit: int = 50, cursor: str | None = None
    ) -> Page:
        ...

    @abstractmethod
    async def update(
        self, entity: EntityName, item_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        ...

    @abstractmethod
    async def delete(self, entity: EntityName, item_id: str) -> None:
        ...
