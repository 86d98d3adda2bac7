"""Local fixture data: the last fallback when no backend is reachable.

Nothing persists: ``create`` and ``update`` echo their input back, ``delete``
does nothing, reads come from a YAML file of sample records keyed by entity
slug.
"""

import logging
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from portal.application.interfaces import PortalGateway
from portal.application.services import decode_cursor, encode_cursor
from portal.application.validation import clamp_limit
from portal.domain.entities import EntityName, Page, TransportMode
from portal.domain.exceptions import ConfigurationError

from .serialization import as_payload

logger = logging.getLogger(__name__)


class FixtureGateway(PortalGateway):
    mode = TransportMode.LOCAL_FIXTURE

    def __init__(self, fixtures: Mapping[str, list[dict[str, Any]]] | None = None):
        self._fixtures = {str(k): list(v or []) for k, v in (fixtures or {}).items()}

    @classmethod
    def from_file(cls, path: str | Path) -> "FixtureGateway":
        path = Path(path)
        if not path.exists():
            logger.warning("Fixture file %s not found; fixture mode will serve no records", path)
            return cls()
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            raise ConfigurationError(
                f"Fixture file {path} must map entity names to lists of records"
            )
        logger.info("Loaded fixtures for %d entities from %s", len(data), path)
        return cls(data)

    def records(self, entity: EntityName) -> list[dict[str, Any]]:
        return self._fixtures.get(entity.value, [])

    async def health(self) -> bool:
        return True

    async def create(
        self, entity: EntityName, payload: BaseModel | dict[str, Any]
    ) -> dict[str, Any]:
        record = as_payload(payload)
        record.setdefault("id", str(uuid.uuid4()))
        return record

    async def get(self, entity: EntityName, item_id: str) -> dict[str, Any] | None:
        for record in self.records(entity):
            if str(record.get("id", record.get("code"))) == item_id:
                return dict(record)
        return None

    async def list(
        self, entity: EntityName, *, limit: int = 50, cursor: str | None = None
    ) -> Page:
        records = self.records(entity)
        start = int((decode_cursor(cursor) or {}).get("offset", 0))
        end = start + clamp_limit(limit)
        next_cursor = encode_cursor({"offset": end}) if end < len(records) else None
        items = [dict(r) for r in records[start:end]]
        return Page(items=items, cursor=next_cursor, scanned_count=len(items))

    async def update(
        self, entity: EntityName, item_id: str, fields: BaseModel | dict[str, Any]
    ) -> dict[str, Any]:
        return {**as_payload(fields, partial=True), "id": item_id}

    async def delete(self, entity: EntityName, item_id: str) -> None:
        return None
