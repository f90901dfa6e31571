from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django_fsm import FSMKeyField, transition
from django_fsm_log.decorators import fsm_log_by

from core.models import RecordStatus


class SalesDocument(models.Model):
    """Sales order ("factura").

    State lives in core.RecordStatus (seeded reference rows) and is driven by
    django-fsm: active -> voided. Voided is terminal.
    Header and lines are written once by documents.services.sales; after that
    only the note and the void transition change anything.
    """

    class PaymentMethod(models.TextChoices):
        CASH = "CASH", "Cash"
        CREDIT = "CREDIT", "Credit"

    number = models.CharField(max_length=40, unique=True)
    state = FSMKeyField(
        "core.RecordStatus",
        default=RecordStatus.ACTIVE,
        protected=True,
        on_delete=models.PROTECT,
        related_name="+",
    )

    customer = models.ForeignKey("masterdata.Customer", on_delete=models.PROTECT, related_name="sales_documents")
    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    note = models.TextField(blank=True, default="")

    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    tax = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="+")
    modified_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.PROTECT, related_name="+")

    voided_at = models.DateTimeField(null=True, blank=True)
    voided_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.PROTECT, related_name="+")

    class Meta:
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=["state", "created_at"]),
        ]

    def __str__(self):
        return f"{self.number} ({self.state})"

    @property
    def is_voided(self) -> bool:
        return self.state == RecordStatus.VOIDED

    @property
    def is_credit(self) -> bool:
        return self.payment_method == self.PaymentMethod.CREDIT

    @fsm_log_by
    @transition(field=state, source=RecordStatus.ACTIVE, target=RecordStatus.VOIDED)
    def void(self, by=None):
        """Flip the header to voided.

        Stock, ledger and credit compensation happen in
        documents.services.sales.void_sales_order, which is the only caller.
        """
        self.voided_at = timezone.now()
        self.voided_by = by
        self.modified_by = by


class SalesLine(models.Model):
    document = models.ForeignKey(SalesDocument, on_delete=models.CASCADE, related_name="lines")
    line_no = models.IntegerField()

    product = models.ForeignKey("masterdata.Product", on_delete=models.PROTECT, related_name="sales_lines")

    quantity = models.IntegerField()
    unit_price = models.DecimalField(max_digits=14, decimal_places=2)
    discount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    subtotal = models.DecimalField(max_digits=14, decimal_places=2)

    # mirrors the header
    status = models.ForeignKey(
        "core.RecordStatus", default=RecordStatus.ACTIVE, on_delete=models.PROTECT, related_name="+"
    )

    class Meta:
        unique_together = ("document", "line_no")
        ordering = ["line_no"]

    def __str__(self):
        return f"{self.document.number} #{self.line_no} {self.product} x{self.quantity}"
