"""Purchase order engine.

Purchases only add stock: no stock check, no credit branch, and no way back.
Once created, a purchase cannot be cancelled or changed.
"""
from __future__ import annotations

import logging

from core.exceptions import OrderNotFound, SupplierNotFound, UnsupportedOperation
from core.models import NumberSeries, RecordStatus
from core.utils.money import round2, to_decimal
from documents.models import PurchaseDocument, PurchaseLine
from documents.services.common import compute_totals, ensure_lines
from inventory.models import StockMove
from inventory.services.unit_of_work import UnitOfWork
from masterdata.models import Supplier

logger = logging.getLogger(__name__)


def load_purchase_order(purchase_id) -> PurchaseDocument:
    try:
        return (
            PurchaseDocument.objects
            .select_related("supplier", "created_by")
            .prefetch_related("lines__product")
            .get(pk=purchase_id)
        )
    except PurchaseDocument.DoesNotExist:
        raise OrderNotFound(purchase_id)


def create_purchase_order(*, supplier_id, lines, by_user, note=None, tax_rate=None,
                          uow: UnitOfWork | None = None) -> PurchaseDocument:
    """Receive goods.

    For each line: add the quantity to stock, overwrite the product's last
    purchase cost with the line's unit cost, append an INBOUND/PURCHASE movement.
    """
    ensure_lines(lines)

    priced = [(line, round2(to_decimal(line.unit_cost) * line.quantity)) for line in lines]
    totals = compute_totals((subtotal for _, subtotal in priced), tax_rate)

    uow = uow or UnitOfWork()
    with uow:
        RecordStatus.require_active()
        if not Supplier.objects.filter(pk=supplier_id).exists():
            raise SupplierNotFound(supplier_id)

        doc = PurchaseDocument.objects.create(
            number=NumberSeries.allocate_for(NumberSeries.PURCHASE_ORDER),
            supplier_id=supplier_id,
            note=note or "",
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=totals.total,
            created_by=by_user,
        )

        for index, (line, subtotal) in enumerate(priced, start=1):
            unit_cost = to_decimal(line.unit_cost)
            purchase_line = PurchaseLine.objects.create(
                document=doc,
                line_no=index * 10,
                product_id=line.product_id,
                quantity=line.quantity,
                unit_cost=unit_cost,
                subtotal=subtotal,
            )

            uow.stock.adjust_stock(line.product_id, line.quantity, last_purchase_cost=unit_cost)
            uow.ledger.append(
                product_id=line.product_id,
                direction=StockMove.Direction.INBOUND,
                origin=StockMove.Origin.PURCHASE,
                reference_id=doc.pk,
                quantity=line.quantity,
                unit_cost=unit_cost,
                comment=doc.note,
                purchase_line=purchase_line,
                by_user=by_user,
            )

        number, total = doc.number, doc.total
        uow.on_commit(lambda: logger.info(
            "Purchase order %s created: %s line(s), total %s", number, len(priced), total
        ))

    return load_purchase_order(doc.pk)


def reject_purchase_change(purchase_id, action="modify"):
    """Purchases are append-only. Cancel/modify requests are refused without touching anything."""
    if not PurchaseDocument.objects.filter(pk=purchase_id).exists():
        raise OrderNotFound(purchase_id)
    logger.info("Refused to %s purchase %s", action, purchase_id)
    raise UnsupportedOperation(f"Purchases cannot be {'cancelled' if action == 'cancel' else 'modified'}.")
