"""Ticket endpoints beyond plain CRUD."""

from fastapi import APIRouter, Depends, status

from portal.application.schemas import (
    ApiResponse,
    TicketReplyCreate,
    TicketResponse,
    TicketStatsResponse,
)
from portal.application.services import TicketService
from portal.infrastructure.dependencies import get_ticket_service
from portal.presentation.api.envelope import ok

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("/stats", response_model=ApiResponse[TicketStatsResponse])
async def ticket_stats(
    service: TicketService = Depends(get_ticket_service),
) -> ApiResponse:
    """Ticket counts by status, plus urgent tickets."""
    return ok(await service.stats())


@router.get("/by-number/{ticket_number}", response_model=ApiResponse[TicketResponse])
async def get_ticket_by_number(
    ticket_number: str,
    service: TicketService = Depends(get_ticket_service),
) -> ApiResponse:
    """Look a ticket up by its human-readable number (e.g. HCTC-12345678)."""
    return ok(await service.get_by_number(ticket_number))


@router.post(
    "/{ticket_id}/replies",
    response_model=ApiResponse[TicketResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_ticket_reply(
    ticket_id: str,
    data: TicketReplyCreate,
    service: TicketService = Depends(get_ticket_service),
) -> ApiResponse:
    return ok(await service.add_reply(ticket_id, data))
