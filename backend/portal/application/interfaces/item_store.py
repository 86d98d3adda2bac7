"""Abstract storage interface (port) for flat key-value records."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from portal.domain.entities import TableDefinition


@dataclass
class StorePage:
    """Raw page as returned by a store; ``last_key`` is the backend's resume key."""

    items: list[dict[str, Any]] = field(default_factory=list)
    last_key: dict[str, Any] | None = None
    scanned_count: int = 0


class ItemStore(ABC):
    """Port for record persistence: implemented in the infrastructure layer.

    Implementations must raise only ``portal.domain.exceptions`` errors:
    ``AlreadyExistsError`` / ``NotFoundError`` when a conditional write guard
    trips, ``BackendUnavailableError`` for connectivity or credential
    failures and ``OperationFailedError`` for anything else.
    """

    @abstractmethod
    async def put_new(self, table: TableDefinition, item: dict[str, Any]) -> None:
        """Write ``item`` only if no record with the same key exists."""
        ...

    @abstractmethod
    async def get(self, table: TableDefinition, key_value: str) -> dict[str, Any] | None:
        """Return the record, or None when absent."""
        ...

    @abstractmethod
    async def update_existing(
        self,
        table: TableDefinition,
        key_value: str,
        fields: dict[str, Any],
        *,
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Set ``fields`` on an existing record and return the full new record.

        With ``expected``, the write happens only while every listed attribute
        still holds its expected value (``None`` meaning absent); otherwise
        ConflictError is raised and nothing is written.
        """
        ...

    @abstractmethod
    async def delete_existing(self, table: TableDefinition, key_value: str) -> None:
        """Delete an existing record."""
        ...

    @abstractmethod
    async def scan(
        self,
        table: TableDefinition,
        *,
        limit: int,
        start_key: dict[str, Any] | None = None,
        filters: dict[str, Any] | None = None,
    ) -> StorePage:
        """Read up to ``limit`` records, then apply equality ``filters``."""
        ...

    @abstractmethod
    async def query(
        self,
        table: TableDefinition,
        *,
        attribute: str,
        value: Any,
        index: str | None = None,
        limit: int,
        start_key: dict[str, Any] | None = None,
        filters: dict[str, Any] | None = None,
        ascending: bool = True,
    ) -> StorePage:
        """Read up to ``limit`` records whose ``attribute`` equals ``value``."""
        ...

    async def close(self) -> None:
        """Release backend resources. Default: nothing to release."""
        return None
