from datetime import date
from decimal import Decimal

import pytest

from core.exceptions import InvalidInstallmentCount
from credit.services.schedule import build_installment_plan


def test_plan_keeps_rounding_drift():
    plan = build_installment_plan(Decimal("100.00"), 3, date(2025, 1, 1), 30)

    assert [p.number for p in plan] == [1, 2, 3]
    assert [p.amount for p in plan] == [Decimal("33.33")] * 3
    assert [p.due_date for p in plan] == [date(2025, 1, 1), date(2025, 1, 31), date(2025, 3, 2)]


def test_plan_uses_configured_interval(settings):
    settings.BACKOFFICE_INSTALLMENT_INTERVAL_DAYS = 7
    plan = build_installment_plan(Decimal("10.00"), 2, date(2025, 1, 1))
    assert plan[1].due_date == date(2025, 1, 8)


def test_single_installment_carries_the_total():
    plan = build_installment_plan(Decimal("57.50"), 1, date(2025, 6, 1), 30)
    assert len(plan) == 1
    assert plan[0].amount == Decimal("57.50")


@pytest.mark.parametrize("count", [0, -1, None])
def test_installment_count_must_be_positive(count):
    with pytest.raises(InvalidInstallmentCount):
        build_installment_plan(Decimal("100.00"), count, date(2025, 1, 1), 30)


def test_installment_str_needs_no_queries(widget, customer, user, sale_line, three_payments,
                                          django_assert_num_queries):
    from credit.models import Installment
    from documents.models import SalesDocument
    from documents.services.sales import create_sales_order

    create_sales_order(customer_id=customer.pk, lines=[sale_line(widget, 1)], by_user=user,
                       payment_method=SalesDocument.PaymentMethod.CREDIT, credit_terms=three_payments)
    installment = Installment.objects.order_by("number").first()

    with django_assert_num_queries(0):
        label = str(installment)

    assert label == f"Installment 1 of schedule {installment.schedule_id}"
