from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.exceptions import UnsupportedOperation
from core.models import RecordStatus


class CreateOnlyModel(models.Model):
    """Rows that can be inserted but never updated or deleted.

    Purchases have no cancellation path: the stock they added may already be
    sold, so any change after creation is rejected.
    """

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise UnsupportedOperation(f"{type(self).__name__} cannot be modified once created.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise UnsupportedOperation(f"{type(self).__name__} cannot be deleted.")


class PurchaseDocument(CreateOnlyModel):
    """Purchase order ("compra"): received goods from a supplier."""

    number = models.CharField(max_length=40, unique=True)
    status = models.ForeignKey(
        "core.RecordStatus", default=RecordStatus.ACTIVE, on_delete=models.PROTECT, related_name="+"
    )

    supplier = models.ForeignKey("masterdata.Supplier", on_delete=models.PROTECT, related_name="purchase_documents")
    note = models.TextField(blank=True, default="")

    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="+")

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self):
        return self.number


class PurchaseLine(CreateOnlyModel):
    document = models.ForeignKey(PurchaseDocument, on_delete=models.PROTECT, related_name="lines")
    line_no = models.IntegerField()

    product = models.ForeignKey("masterdata.Product", on_delete=models.PROTECT, related_name="purchase_lines")

    quantity = models.IntegerField()
    unit_cost = models.DecimalField(max_digits=14, decimal_places=2)
    subtotal = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        unique_together = ("document", "line_no")
        ordering = ["line_no"]

    def __str__(self):
        return f"{self.document.number} #{self.line_no} {self.product} x{self.quantity}"
