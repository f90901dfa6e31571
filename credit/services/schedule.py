"""Credit schedule generator.

build_installment_plan is pure; open_credit_schedule / void_credit_schedule
persist inside the caller's transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from django.conf import settings
from django.utils import timezone
from simple_history.utils import bulk_create_with_history

from core.exceptions import CreditConfigMissing, InvalidInstallmentCount
from core.models import RecordStatus
from core.utils.money import round2
from credit.models import CreditSchedule, Installment
from inventory.services.stock import require_transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreditTerms:
    installment_count: int
    first_due_date: date
    interval_days: int | None = None


@dataclass(frozen=True)
class PlannedInstallment:
    number: int
    due_date: date
    amount: Decimal


def default_interval_days() -> int:
    return getattr(settings, "BACKOFFICE_INSTALLMENT_INTERVAL_DAYS", 30)


def build_installment_plan(total, installment_count, first_due_date, interval_days=None) -> list[PlannedInstallment]:
    """Split total into installment_count equal installments.

    Each installment is round2(total / n). The rounding remainder is NOT moved
    onto the last installment, so the plan can differ from total by a few
    cents (100.00 / 3 -> 3 x 33.33). Existing schedules rely on this.
    """
    if not installment_count or installment_count <= 0:
        raise InvalidInstallmentCount(installment_count)

    if interval_days is None:
        interval_days = default_interval_days()

    amount = round2(Decimal(total) / installment_count)

    return [
        PlannedInstallment(
            number=i + 1,
            due_date=first_due_date + timedelta(days=i * interval_days),
            amount=amount,
        )
        for i in range(installment_count)
    ]


def open_credit_schedule(order, terms: CreditTerms | None, *, by_user=None) -> CreditSchedule:
    """Create the schedule and its installments for a credit sale."""
    if terms is None:
        raise CreditConfigMissing()

    plan = build_installment_plan(
        order.total, terms.installment_count, terms.first_due_date, terms.interval_days
    )

    require_transaction()
    schedule = CreditSchedule.objects.create(
        sales_document=order,
        total_amount=order.total,
        outstanding_balance=order.total,
        start_date=timezone.localdate(),
        end_date=None,
        created_by=by_user,
    )
    bulk_create_with_history([
        Installment(
            schedule=schedule,
            number=p.number,
            due_date=p.due_date,
            amount_due=p.amount,
            amount_paid=Decimal("0.00"),
            status=Installment.Status.PENDING,
        )
        for p in plan
    ], Installment, default_user=by_user)

    logger.debug("Credit schedule %s: %s x %s", order.number, len(plan), plan[0].amount)
    return schedule


def void_credit_schedule(schedule: CreditSchedule, *, by_user=None) -> CreditSchedule:
    """Mark the schedule and all its installments voided.

    Rows are kept, amount_paid included; history records the prior state.
    Installments are saved one by one so simple_history sees every change.
    """
    require_transaction()

    for installment in schedule.installments.all():
        installment.status = Installment.Status.VOIDED
        installment.save(update_fields=["status"])

    schedule.status_id = RecordStatus.VOIDED
    schedule.voided_at = timezone.now()
    schedule.voided_by = by_user
    schedule.save(update_fields=["status", "voided_at", "voided_by"])

    return schedule
