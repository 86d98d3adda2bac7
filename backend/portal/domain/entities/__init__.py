from .table import EntityName, TableDefinition
from .page import Page
from .ticket import Priority, TicketStats, TicketStatus, generate_ticket_number, ticket_number_pattern
from .invoice import InvoiceTotals, price_line_items
from .transport import TransportMode, TransportResult, TransportState

__all__ = [
    "EntityName",
    "TableDefinition",
    "Page",
    "Priority",
    "TicketStats",
    "TicketStatus",
    "generate_ticket_number",
    "ticket_number_pattern",
    "InvoiceTotals",
    "price_line_items",
    "TransportMode",
    "TransportResult",
    "TransportState",
]
