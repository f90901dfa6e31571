from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from core.exceptions import EmptyLineList, InvalidLineQuantity
from core.utils.money import round2, to_decimal


@dataclass(frozen=True)
class SalesLineInput:
    product_id: int
    quantity: int
    unit_price: Decimal
    discount: Decimal | None = None


@dataclass(frozen=True)
class PurchaseLineInput:
    product_id: int
    quantity: int
    unit_cost: Decimal


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def default_tax_rate() -> Decimal:
    return to_decimal(getattr(settings, "BACKOFFICE_TAX_RATE", Decimal("0.15")))


def compute_totals(line_subtotals, tax_rate=None) -> Totals:
    """subtotal = sum of lines, tax = round2(subtotal * rate), total = round2(subtotal + tax)."""
    rate = default_tax_rate() if tax_rate is None else to_decimal(tax_rate)
    subtotal = sum(line_subtotals, Decimal("0.00"))
    tax = round2(subtotal * rate)
    total = round2(subtotal + tax)
    return Totals(subtotal=subtotal, tax=tax, total=total)


def ensure_lines(lines):
    """Lines must be non-empty and every quantity positive."""
    if not lines:
        raise EmptyLineList()
    for line in lines:
        if line.quantity is None or line.quantity <= 0:
            raise InvalidLineQuantity(line.product_id, line.quantity)
