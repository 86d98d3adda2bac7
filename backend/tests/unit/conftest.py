"""Shared fixtures for unit tests: an in-memory item store and services over it."""

from typing import Any

import pytest

from portal.application.interfaces import ItemStore, StorePage
from portal.application.services import DataAccessService, EntityServices, TableRegistry
from portal.config import Settings
from portal.domain.entities import TableDefinition
from portal.domain.exceptions import AlreadyExistsError, ConflictError, NotFoundError


class FakeItemStore(ItemStore):
    """In-memory fake store with DynamoDB-like paging for unit testing."""

    def __init__(self):
        self.tables: dict[str, dict[str, dict[str, Any]]] = {}
        self.writes = 0

    def _rows(self, table: TableDefinition) -> dict[str, dict[str, Any]]:
        return self.tables.setdefault(table.table_name, {})

    async def put_new(self, table: TableDefinition, item: dict[str, Any]) -> None:
        rows = self._rows(table)
        key = str(item[table.key_attribute])
        if key in rows:
            raise AlreadyExistsError(table.entity.value, key)
        rows[key] = dict(item)
        self.writes += 1

    async def get(self, table: TableDefinition, key_value: str) -> dict[str, Any] | None:
        row = self._rows(table).get(key_value)
        return dict(row) if row is not None else None

    async def update_existing(
        self, table: TableDefinition, key_value: str, fields: dict[str, Any], *, expected=None
    ) -> dict[str, Any]:
        rows = self._rows(table)
        if key_value not in rows:
            raise NotFoundError(table.entity.value, key_value)
        if any(rows[key_value].get(name) != value for name, value in (expected or {}).items()):
            raise ConflictError(table.entity.value, key_value)
        rows[key_value] = {**rows[key_value], **fields}
        self.writes += 1
        return dict(rows[key_value])

    async def delete_existing(self, table: TableDefinition, key_value: str) -> None:
        rows = self._rows(table)
        if key_value not in rows:
            raise NotFoundError(table.entity.value, key_value)
        del rows[key_value]
        self.writes += 1

    async def scan(self, table, *, limit, start_key=None, filters=None) -> StorePage:
        keys = sorted(self._rows(table))
        if start_key:
            keys = [k for k in keys if k > start_key[table.key_attribute]]
        return self._page(table, [self._rows(table)[k] for k in keys], limit, filters)

    async def query(
        self, table, *, attribute, value, index=None, limit,
        start_key=None, filters=None, ascending=True,
    ) -> StorePage:
        rows = sorted(
            (r for r in self._rows(table).values() if r.get(attribute) == value),
            key=lambda r: (r.get("createdAt", ""), r[table.key_attribute]),
            reverse=not ascending,
        )
        if start_key:
            keys = [r[table.key_attribute] for r in rows]
            rows = rows[keys.index(start_key[table.key_attribute]) + 1:]
        return self._page(table, rows, limit, filters)

    @staticmethod
    def _page(table, rows, limit, filters) -> StorePage:
        evaluated = rows[:limit]
        items = [
            dict(r) for r in evaluated
            if all(r.get(k) == v for k, v in (filters or {}).items())
        ]
        last_key = None
        if len(rows) > limit:
            last_key = {table.key_attribute: evaluated[-1][table.key_attribute]}
        return StorePage(items=items, last_key=last_key, scanned_count=len(evaluated))


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, api_key="test-key")


@pytest.fixture
def registry(settings: Settings) -> TableRegistry:
    return TableRegistry.from_settings(settings)


@pytest.fixture
def store() -> FakeItemStore:
    return FakeItemStore()


@pytest.fixture
def data_access(registry: TableRegistry, store: FakeItemStore) -> DataAccessService:
    return DataAccessService(registry, store)


@pytest.fixture
def services(data_access: DataAccessService) -> EntityServices:
    return EntityServices.build(data_access)
