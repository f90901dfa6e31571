from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import RecordStatus


class StockMove(models.Model):
    """Movement ledger ("kardex"): audit trail for stock movements.

    Append-only. One row per line of every stock-mutating operation,
    compensating rows included. A line can be booked at most once per origin.
    """

    class Direction(models.TextChoices):
        INBOUND = "INBOUND", "Inbound"
        OUTBOUND = "OUTBOUND", "Outbound"

    class Origin(models.TextChoices):
        SALE = "SALE", "Sale"
        PURCHASE = "PURCHASE", "Purchase"
        ADJUSTMENT = "ADJUSTMENT", "Adjustment"

    product = models.ForeignKey("masterdata.Product", on_delete=models.PROTECT, related_name="stock_moves")

    direction = models.CharField(max_length=10, choices=Direction.choices)
    origin = models.CharField(max_length=12, choices=Origin.choices)
    reference_id = models.BigIntegerField(db_index=True)

    sales_line = models.ForeignKey("documents.SalesLine", null=True, blank=True, on_delete=models.PROTECT, related_name="stock_moves")
    purchase_line = models.ForeignKey("documents.PurchaseLine", null=True, blank=True, on_delete=models.PROTECT, related_name="stock_moves")

    quantity = models.IntegerField()
    unit_cost = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    comment = models.TextField(blank=True, default="")

    status = models.ForeignKey(
        "core.RecordStatus", default=RecordStatus.ACTIVE, on_delete=models.PROTECT, related_name="+"
    )

    created_at = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.PROTECT, related_name="+")

    class Meta:
        ordering = ("created_at", "id")
        indexes = [
            models.Index(fields=["origin", "reference_id"]),
            models.Index(fields=["product", "created_at"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["sales_line", "origin"],
                condition=models.Q(sales_line__isnull=False),
                name="stockmove_once_per_sales_line_origin",
            ),
            models.UniqueConstraint(
                fields=["purchase_line", "origin"],
                condition=models.Q(purchase_line__isnull=False),
                name="stockmove_once_per_purchase_line_origin",
            ),
        ]

    def __str__(self):
        return f"{self.get_direction_display()} {self.product_id} x{self.quantity} ({self.origin} #{self.reference_id})"

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.direction == self.Direction.INBOUND else -self.quantity
