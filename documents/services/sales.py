"""Sales order engine: create, void, and update the note of sales documents.

Every use case is one UnitOfWork (one transaction). Any error raised inside
it rolls back stock, ledger, header, lines and credit rows together.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from core.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    InvalidPaymentMethod,
    OrderAlreadyVoided,
    OrderNotFound,
)
from core.models import NumberSeries, RecordStatus
from core.utils.money import round2, to_decimal
from credit.models import CreditSchedule
from credit.services.schedule import CreditTerms, open_credit_schedule, void_credit_schedule
from documents.models import SalesDocument, SalesLine
from documents.services.common import SalesLineInput, compute_totals, ensure_lines
from inventory.models import StockMove
from inventory.services.unit_of_work import UnitOfWork
from masterdata.models import Customer

logger = logging.getLogger(__name__)


def _price_line(line: SalesLineInput):
    """Return (discount, subtotal) for a line, subtotal rounded to cents.

    subtotal = quantity * unit_price - discount, without a floor at zero:
    a discount larger than the line goes through as a negative subtotal.
    """
    discount = to_decimal(line.discount) if line.discount is not None else Decimal("0.00")
    subtotal = round2(to_decimal(line.unit_price) * line.quantity - discount)
    return discount, subtotal


def load_sales_order(order_id) -> SalesDocument:
    """Order with lines, products, credit schedule and installments."""
    try:
        return (
            SalesDocument.objects
            .select_related("customer", "created_by")
            .prefetch_related("lines__product", "credit_schedule__installments")
            .get(pk=order_id)
        )
    except SalesDocument.DoesNotExist:
        raise OrderNotFound(order_id)


def _check_stock(uow, lines):
    """Lock every product and make sure the order can be served.

    Quantities are accumulated per product, so two lines for the same
    product are checked against the stock together.
    """
    requested = {}
    for line in lines:
        product = uow.stock.get_product(line.product_id, for_update=True)
        requested[product.pk] = requested.get(product.pk, 0) + line.quantity
        if product.quantity_on_hand < requested[product.pk]:
            raise InsufficientStock(
                product.pk,
                product.name,
                available=product.quantity_on_hand,
                requested=requested[product.pk],
            )


def create_sales_order(*, customer_id, lines, by_user, payment_method=SalesDocument.PaymentMethod.CASH,
                       note=None, credit_terms: CreditTerms | None = None, tax_rate=None,
                       uow: UnitOfWork | None = None) -> SalesDocument:
    """Create a sales order.

    What it does (high level):
    1) Validate lines and payment method
    2) Price lines and compute subtotal / tax / total
    3) Lock products and check stock for every line
    4) Allocate the order number (F-000123) from the number series
    5) Persist header and lines
    6) For each line: reduce stock, append an OUTBOUND/SALE movement
    7) For credit sales: create the credit schedule and its installments
    8) Return the fully loaded order
    """
    ensure_lines(lines)
    if payment_method not in SalesDocument.PaymentMethod.values:
        raise InvalidPaymentMethod(payment_method)

    priced = [(line, *_price_line(line)) for line in lines]
    totals = compute_totals((subtotal for _, _, subtotal in priced), tax_rate)

    uow = uow or UnitOfWork()
    with uow:
        RecordStatus.require_active()
        if not Customer.objects.filter(pk=customer_id).exists():
            raise CustomerNotFound(customer_id)

        _check_stock(uow, lines)

        doc = SalesDocument.objects.create(
            number=NumberSeries.allocate_for(NumberSeries.SALES_ORDER),
            customer_id=customer_id,
            payment_method=payment_method,
            note=note or "",
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            created_by=by_user,
            modified_by=by_user,
        )

        for index, (line, discount, subtotal) in enumerate(priced, start=1):
            sales_line = SalesLine.objects.create(
                document=doc,
                line_no=index * 10,  # ERP-style spacing
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=to_decimal(line.unit_price),
                discount=discount,
                subtotal=subtotal,
            )

            uow.stock.adjust_stock(line.product_id, -line.quantity)
            uow.ledger.append(
                product_id=line.product_id,
                direction=StockMove.Direction.OUTBOUND,
                origin=StockMove.Origin.SALE,
                reference_id=doc.pk,
                quantity=line.quantity,
                unit_cost=sales_line.unit_price,
                comment=doc.note,
                sales_line=sales_line,
                by_user=by_user,
            )

        if doc.is_credit:
            open_credit_schedule(doc, credit_terms, by_user=by_user)

        number, total = doc.number, doc.total
        uow.on_commit(lambda: logger.info(
            "Sales order %s created: %s line(s), total %s, %s", number, len(priced), total, payment_method
        ))

    return load_sales_order(doc.pk)


def void_sales_order(order_id, *, by_user=None, uow: UnitOfWork | None = None) -> SalesDocument:
    """Void (cancel) an active sales order.

    - Put every line's quantity back into stock
    - Append one INBOUND/ADJUSTMENT movement per line ("Reversal of F-000123")
    - Soft-void the credit schedule and installments (rows and payments are kept)
    - Flip lines and header to voided

    The order row is locked first, so two concurrent voids cannot both pass
    the already-voided check on databases with row locking.
    """
    voided = RecordStatus.require_voided()

    uow = uow or UnitOfWork()
    with uow:
        doc = SalesDocument.objects.select_for_update().filter(pk=order_id).first()
        if doc is None:
            raise OrderNotFound(order_id)
        if doc.is_voided:
            raise OrderAlreadyVoided(doc.number)

        lines = list(doc.lines.all())
        for line in lines:
            uow.stock.adjust_stock(line.product_id, line.quantity)
            uow.ledger.append(
                product_id=line.product_id,
                direction=StockMove.Direction.INBOUND,
                origin=StockMove.Origin.ADJUSTMENT,
                reference_id=doc.pk,
                quantity=line.quantity,
                unit_cost=line.unit_price,
                comment=f"Reversal of {doc.number}",
                sales_line=line,
                by_user=by_user,
            )

        schedule = CreditSchedule.objects.filter(sales_document=doc).first()
        if schedule is not None:
            void_credit_schedule(schedule, by_user=by_user)

        doc.lines.update(status_id=voided)

        doc.void(by=by_user)
        doc.save()

        number = doc.number
        uow.on_commit(lambda: logger.info("Sales order %s voided: %s line(s) restocked", number, len(lines)))

    return load_sales_order(doc.pk)


def update_sales_order_note(order_id, note, *, by_user=None) -> SalesDocument:
    """Change the note of a sales order. Nothing else about a sale is editable.

    note=None keeps the current note and only stamps the modifying user.
    """
    doc = SalesDocument.objects.filter(pk=order_id).first()
    if doc is None:
        raise OrderNotFound(order_id)

    if note is not None:
        doc.note = note.strip()
    doc.modified_by = by_user
    doc.save(update_fields=["note", "modified_by"])

    return load_sales_order(doc.pk)
