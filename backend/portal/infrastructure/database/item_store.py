"""SQLAlchemy implementation of the ItemStore port.

Used for local development and tests in place of DynamoDB. All tables share
``portal_items``; paging and filter semantics follow DynamoDB's: ``limit``
bounds the records evaluated, equality filters are applied afterwards.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from portal.application.interfaces import ItemStore, StorePage
from portal.domain.entities import TableDefinition
from portal.domain.exceptions import (
    AlreadyExistsError,
    BackendUnavailableError,
    ConflictError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)

from .base import Base
from .models import ItemModel
from .session import create_session_factory

logger = logging.getLogger(__name__)

CREATED_AT = "createdAt"


def _matches(data: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    return all(data.get(name) == value for name, value in (filters or {}).items())


def _start_value(start_key: dict[str, Any], attribute: str) -> str:
    value = start_key.get(attribute)
    if value is None:
        raise ValidationError.single("cursor", "Cursor does not belong to this table")
    return str(value)


class SQLAlchemyItemStore(ItemStore):
    """Infrastructure adapter: one JSON row per record in a SQL database."""

    def __init__(self, engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]):
        self._engine = engine
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str, *, echo: bool = False) -> "SQLAlchemyItemStore":
        engine, factory = create_session_factory(database_url, echo=echo)
        return cls(engine, factory)

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except (OperationalError, InterfaceError) as exc:
                await session.rollback()
                logger.error("Database unavailable during %s: %s", operation, exc)
                raise BackendUnavailableError(f"Database unavailable: {exc.orig}") from exc
            except IntegrityError:
                await session.rollback()
                raise
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Database %s failed: %s", operation, exc)
                raise OperationFailedError(operation, str(exc)) from exc

    async def put_new(self, table: TableDefinition, item: dict[str, Any]) -> None:
        key_value = str(item[table.key_attribute])
        async with self._session("create item") as session:
            session.add(ItemModel(
                table_name=table.table_name,
                item_key=key_value,
                data=item,
                created_at=str(item.get(CREATED_AT, "")),
            ))
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise AlreadyExistsError(table.entity.value, key_value) from exc

    async def get(self, table: TableDefinition, key_value: str) -> dict[str, Any] | None:
        async with self._session("get item") as session:
            row = await session.get(ItemModel, (table.table_name, key_value))
            return dict(row.data) if row is not None else None

    async def update_existing(
        self,
        table: TableDefinition,
        key_value: str,
        fields: dict[str, Any],
        *,
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        async with self._session("update item") as session:
            row = await session.get(ItemModel, (table.table_name, key_value))
            if row is None:
                raise NotFoundError(table.entity.value, key_value)
            if any(row.data.get(name) != value for name, value in (expected or {}).items()):
                raise ConflictError(table.entity.value, key_value)
            # New dict so the JSON column registers the change
            row.data = {**row.data, **fields}
            try:
                await session.commit()
            except StaleDataError as exc:
                await session.rollback()
                raise ConflictError(table.entity.value, key_value) from exc
            return dict(row.data)

    async def delete_existing(self, table: TableDefinition, key_value: str) -> None:
        async with self._session("delete item") as session:
            result = await session.execute(
                delete(ItemModel).where(
                    ItemModel.table_name == table.table_name,
                    ItemModel.item_key == key_value,
                )
            )
            if result.rowcount == 0:
                await session.rollback()
                raise NotFoundError(table.entity.value, key_value)
            await session.commit()

    async def scan(
        self,
        table: TableDefinition,
        *,
        limit: int,
        start_key: dict[str, Any] | None = None,
        filters: dict[str, Any] | None = None,
    ) -> StorePage:
        stmt = select(ItemModel).where(ItemModel.table_name == table.table_name)
        if start_key:
            stmt = stmt.where(
                ItemModel.item_key > _start_value(start_key, table.key_attribute)
            )
        stmt = stmt.order_by(ItemModel.item_key).limit(limit + 1)

        async with self._session("scan items") as session:
            rows = list((await session.execute(stmt)).scalars())

        evaluated = rows[:limit]
        last_key = None
        if len(rows) > limit:
            last_key = {table.key_attribute: evaluated[-1].item_key}
        return StorePage(
            items=[dict(row.data) for row in evaluated if _matches(row.data, filters)],
            last_key=last_key,
            scanned_count=len(evaluated),
        )

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
        # Key condition is matched on the decoded document
        order = (
            (ItemModel.created_at.asc(), ItemModel.item_key.asc())
            if ascending
            else (ItemModel.created_at.desc(), ItemModel.item_key.desc())
        )
        stmt = (
            select(ItemModel)
            .where(ItemModel.table_name == table.table_name)
            .order_by(*order)
        )
        async with self._session("query items") as session:
            rows = [
                row for row in (await session.execute(stmt)).scalars()
                if row.data.get(attribute) == value
            ]

        if start_key:
            position = (
                _start_value(start_key, CREATED_AT),
                _start_value(start_key, table.key_attribute),
            )
            if ascending:
                rows = [r for r in rows if (r.created_at, r.item_key) > position]
            else:
                rows = [r for r in rows if (r.created_at, r.item_key) < position]

        evaluated = rows[:limit]
        last_key = None
        if len(rows) > limit:
            last = evaluated[-1]
            last_key = {table.key_attribute: last.item_key, CREATED_AT: last.created_at}
        return StorePage(
            items=[dict(row.data) for row in evaluated if _matches(row.data, filters)],
            last_key=last_key,
            scanned_count=len(evaluated),
        )
