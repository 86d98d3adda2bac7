"""Ticket vocabulary and ticket-number generation."""

import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any


class TicketStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    WAITING_FOR_RESPONSE = "Waiting for Response"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


TICKET_NUMBER_DIGITS = 8


def generate_ticket_number(prefix: str, now_ms: int | None = None) -> str:
    """Build a human-readable ticket number: ``<PREFIX>-<last 8 digits of epoch ms>``."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = str(now_ms)[-TICKET_NUMBER_DIGITS:].rjust(TICKET_NUMBER_DIGITS, "0")
    return f"{prefix}-{suffix}"


def ticket_number_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}-\d+$")


@dataclass
class TicketStats:
    """Counts over a set of tickets, as shown on the admin dashboard."""

    total: int = 0
    open: int = 0
    in_progress: int = 0
    waiting_for_response: int = 0
    resolved: int = 0
    closed: int = 0
    urgent: int = 0

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "TicketStats":
        stats = cls(total=len(records))
        for record in records:
            status = record.get("status")
            if status == TicketStatus.OPEN.value:
                stats.open += 1
            elif status == TicketStatus.IN_PROGRESS.value:
                stats.in_progress += 1
            elif status == TicketStatus.WAITING_FOR_RESPONSE.value:
                stats.waiting_for_response += 1
            elif status == TicketStatus.RESOLVED.value:
                stats.resolved += 1
            elif status == TicketStatus.CLOSED.value:
                stats.closed += 1
            if record.get("priority") == Priority.URGENT.value:
                stats.urgent += 1
        return stats
