import logging

from django.db import IntegrityError, transaction

from core.exceptions import DuplicateMovement
from inventory.models import StockMove
from inventory.services.stock import require_transaction

logger = logging.getLogger(__name__)


class MovementLedger:
    """Append-only journal of stock movements (StockMove rows)."""

    def append(self, *, product_id, direction, origin, reference_id, quantity, unit_cost,
               comment="", sales_line=None, purchase_line=None, by_user=None) -> StockMove:
        """Insert one entry.

        No business validation beyond the model fields. The unique constraints on
        (sales_line, origin) / (purchase_line, origin) reject a repeat of the same
        logical movement; the savepoint keeps the outer transaction usable so the
        caller decides whether to abort.
        """
        require_transaction()
        try:
            with transaction.atomic():
                return StockMove.objects.create(
                    product_id=product_id,
                    direction=direction,
                    origin=origin,
                    reference_id=reference_id,
                    quantity=quantity,
                    unit_cost=unit_cost,
                    comment=comment or "",
                    sales_line=sales_line,
                    purchase_line=purchase_line,
                    created_by=by_user,
                )
        except IntegrityError:
            logger.warning("Duplicate %s movement for product %s on #%s", origin, product_id, reference_id)
            raise DuplicateMovement(origin, reference_id, product_id)

    def entries_for(self, origin, reference_id):
        return StockMove.objects.filter(origin=origin, reference_id=reference_id)
