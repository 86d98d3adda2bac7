"""Invoice arithmetic."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

TAX_RATE = Decimal("0.08")
_CENT = Decimal("0.01")


def _money(value: Decimal) -> float:
    return float(value.quantize(_CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: float
    tax: float
    total: float


def price_line_items(items: list[dict[str, Any]]) -> tuple[list[dict[str, Any]], InvoiceTotals]:
    """Compute each line's ``total`` and the invoice subtotal, tax and total."""
    priced: list[dict[str, Any]] = []
    subtotal = Decimal("0")
    for item in items:
        line_total = Decimal(str(item["quantity"])) * Decimal(str(item["unitPrice"]))
        subtotal += line_total
        priced.append({**item, "total": _money(line_total)})
    tax = subtotal * TAX_RATE
    return priced, InvoiceTotals(
        subtotal=_money(subtotal),
        tax=_money(tax),
        total=_money(subtotal + tax),
    )


def invoice_number(year: int, record_id: str) -> str:
    return f"INV-{year}-{record_id.replace('-', '')[:6].upper()}"
