from django.db import transaction

from core.exceptions import InsufficientStock, ProductNotFound, TransactionRequired
from masterdata.models import Product


def require_transaction():
    if not transaction.get_connection().in_atomic_block:
        raise TransactionRequired("Stock and ledger writes must run inside transaction.atomic().")


class StockRepository:
    """Owns Product.quantity_on_hand.

    Writes run inside the caller's transaction; products are locked with
    select_for_update so two use cases never read the same stale quantity.
    """

    def get_product(self, product_id, *, for_update=False) -> Product:
        qs = Product.objects.all()
        if for_update:
            require_transaction()
            qs = qs.select_for_update()
        try:
            return qs.get(pk=product_id)
        except Product.DoesNotExist:
            raise ProductNotFound(product_id)

    def get_stock(self, product_id) -> int:
        return self.get_product(product_id).quantity_on_hand

    def adjust_stock(self, product_id, delta: int, *, last_purchase_cost=None) -> int:
        """Apply a signed delta and return the new on-hand quantity.

        last_purchase_cost, when given, overwrites the product's cost (purchases).
        """
        product = self.get_product(product_id, for_update=True)

        new_quantity = product.quantity_on_hand + delta
        if new_quantity < 0:
            raise InsufficientStock(
                product.pk, product.name, available=product.quantity_on_hand, requested=-delta
            )

        product.quantity_on_hand = new_quantity
        update_fields = ["quantity_on_hand"]
        if last_purchase_cost is not None:
            product.last_purchase_cost = last_purchase_cost
            update_fields.append("last_purchase_cost")
        product.save(update_fields=update_fields)

        return new_quantity
