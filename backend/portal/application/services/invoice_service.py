"""Application service for invoices. Totals are always computed here."""

import uuid
from datetime import datetime, timezone
from typing import Any

from portal.application.schemas import InvoiceCreate, InvoiceResponse, InvoiceUpdate
from portal.domain.entities import EntityName, price_line_items
from portal.domain.entities.invoice import invoice_number

from .entity_service import EntityService


class InvoiceService(EntityService[InvoiceCreate, InvoiceUpdate, InvoiceResponse]):
    entity = EntityName.INVOICES
    label = "Invoice"
    create_schema = InvoiceCreate
    update_schema = InvoiceUpdate
    response_schema = InvoiceResponse

    def _prepare_create(self, record: dict[str, Any]) -> dict[str, Any]:
        record.setdefault("id", str(uuid.uuid4()))
        if not record.get("invoiceNumber"):
            year = datetime.now(timezone.utc).year
            record["invoiceNumber"] = invoice_number(year, record["id"])
        return self._priced(record)

    def _prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        if "items" in fields:
            fields = self._priced(fields)
        if fields.get("status") == "paid" and "paidDate" not in fields:
            fields["paidDate"] = datetime.now(timezone.utc).date().isoformat()
        return fields

    @staticmethod
    def _priced(record: dict[str, Any]) -> dict[str, Any]:
        items, totals = price_line_items(record.get("items", []))
        record["items"] = items
        record["subtotal"] = totals.subtotal
        record["tax"] = totals.tax
        record["total"] = totals.total
        return record
