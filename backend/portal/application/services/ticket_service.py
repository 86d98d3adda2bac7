"""Application service for support tickets.

Beyond plain CRUD a ticket gets a human-readable number on creation, always
starts ``Open`` with no replies, and accumulates replies over its life.
"""

import logging
import uuid
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from portal.application.schemas import (
    TicketCreate,
    TicketReplyCreate,
    TicketResponse,
    TicketStatsResponse,
    TicketUpdate,
)
from portal.application.validation import MAX_PAGE_SIZE, to_record, validate_payload
from portal.domain.entities import (
    EntityName,
    TicketStats,
    TicketStatus,
    generate_ticket_number,
)
from portal.domain.exceptions import NotFoundError

from .data_access_service import DataAccessService
from .entity_service import EntityService

logger = logging.getLogger(__name__)

STATS_SCAN_LIMIT = 1000


class TicketService(EntityService[TicketCreate, TicketUpdate, TicketResponse]):
    entity = EntityName.TICKETS
    label = "Ticket"
    create_schema = TicketCreate
    update_schema = TicketUpdate
    response_schema = TicketResponse

    def __init__(self, data_access: DataAccessService, ticket_number_prefix: str = "HCTC"):
        super().__init__(data_access)
        self._prefix = ticket_number_prefix

    def _prepare_create(self, record: dict[str, Any]) -> dict[str, Any]:
        record["ticketNumber"] = generate_ticket_number(self._prefix)
        record["status"] = TicketStatus.OPEN.value
        record["replies"] = []
        record["internalNotes"] = []
        return record

    async def add_reply(
        self, ticket_id: str, reply: TicketReplyCreate | Mapping[str, Any]
    ) -> TicketResponse:
        """Append a reply. An admin reply moves an Open ticket to In Progress."""
        data = validate_payload(TicketReplyCreate, reply)
        ticket = await self.get(ticket_id)

        entry = {
            "id": str(uuid.uuid4()),
            **to_record(data),
            "createdAt": self._data.clock.stamp(),
        }
        replies = [to_record(r) for r in ticket.replies] + [entry]
        fields: dict[str, Any] = {"replies": replies}
        if data.author_type == "admin" and ticket.status == TicketStatus.OPEN.value:
            fields["status"] = TicketStatus.IN_PROGRESS.value

        updated = await self._data.update(self.entity, ticket_id, fields)
        logger.info("Reply added to ticket %s by %s", ticket.ticket_number, data.author_type)
        return self._to_response(updated)

    async def get_by_number(self, ticket_number: str) -> TicketResponse:
        page = await self.query_by("TicketNumberIndex", ticket_number, limit=1)
        if not page.items:
            raise NotFoundError(self.label, ticket_number)
        return page.items[0]

    async def stats(self) -> TicketStatsResponse:
        """Status counts over the first ``STATS_SCAN_LIMIT`` tickets."""
        records: list[dict[str, Any]] = []
        cursor: str | None = None
        while len(records) < STATS_SCAN_LIMIT:
            page = await self._data.scan(self.entity, limit=MAX_PAGE_SIZE, cursor=cursor)
            records.extend(page.items)
            cursor = page.cursor
            if cursor is None:
                break
        stats = TicketStats.from_records(records[:STATS_SCAN_LIMIT])
        return TicketStatsResponse(**asdict(stats))
