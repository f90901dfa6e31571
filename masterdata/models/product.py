from decimal import Decimal

from django.db import models
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """Catalog product with its on-hand quantity.

    quantity_on_hand is owned by inventory.services.stock.StockRepository;
    the sales and purchase engines never write it directly.
    """

    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=255)

    quantity_on_hand = models.IntegerField(default=0)
    minimum_stock = models.IntegerField(default=0)

    last_purchase_cost = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    sale_price = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    is_active = models.BooleanField(default=True)

    history = HistoricalRecords()

    class Meta:
        ordering = ["code"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity_on_hand__gte=0),
                name="product_quantity_on_hand_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.code} {self.name}"

    @property
    def is_below_minimum(self) -> bool:
        return self.quantity_on_hand < self.minimum_stock
