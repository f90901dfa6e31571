from decimal import Decimal

from django.conf import settings
from django.db import models
from simple_history.models import HistoricalRecords

from core.models import RecordStatus


class CreditSchedule(models.Model):
    """Financing plan attached to a credit sale (1:1 with the sales document).

    Voiding the sale marks the schedule voided instead of deleting it, so the
    installments and any payments recorded on them stay auditable.
    """

    sales_document = models.OneToOneField(
        "documents.SalesDocument", on_delete=models.PROTECT, related_name="credit_schedule"
    )

    total_amount = models.DecimalField(max_digits=14, decimal_places=2)
    outstanding_balance = models.DecimalField(max_digits=14, decimal_places=2)

    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)

    status = models.ForeignKey(
        "core.RecordStatus", default=RecordStatus.ACTIVE, on_delete=models.PROTECT, related_name="+"
    )
    voided_at = models.DateTimeField(null=True, blank=True)
    voided_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.PROTECT, related_name="+")

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.PROTECT, related_name="+")

    history = HistoricalRecords()

    class Meta:
        ordering = ("-start_date", "-id")

    def __str__(self):
        return f"Credit for {self.sales_document.number}"

    @property
    def is_voided(self) -> bool:
        return self.status_id == RecordStatus.VOIDED


class Installment(models.Model):
    """One obligation within a credit schedule.

    Payments are applied by an external collaborator which must:
    - reject amounts above remaining_amount
    - add the amount to amount_paid and set status PAID (paid == due) or PARTIAL
    - subtract the same amount from the schedule's outstanding_balance
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PARTIAL = "PARTIAL", "Partially paid"
        PAID = "PAID", "Paid"
        VOIDED = "VOIDED", "Voided"

    schedule = models.ForeignKey(CreditSchedule, on_delete=models.PROTECT, related_name="installments")
    number = models.PositiveIntegerField()

    due_date = models.DateField()
    amount_due = models.DecimalField(max_digits=14, decimal_places=2)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    paid_on = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)

    history = HistoricalRecords()

    class Meta:
        unique_together = ("schedule", "number")
        ordering = ["number"]

    def __str__(self):
        return f"Installment {self.number} of schedule {self.schedule_id}"

    @property
    def remaining_amount(self) -> Decimal:
        return self.amount_due - self.amount_paid
