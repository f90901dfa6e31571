from datetime import date
from decimal import Decimal

import pytest

from core.models import RecordStatus
from credit.services.schedule import CreditTerms
from documents.services.common import PurchaseLineInput, SalesLineInput
from masterdata.models import Customer, Product, Supplier


@pytest.fixture(autouse=True)
def record_statuses(db):
    RecordStatus.objects.get_or_create(code=RecordStatus.ACTIVE, defaults={"name": "Active"})
    RecordStatus.objects.get_or_create(code=RecordStatus.VOIDED, defaults={"name": "Voided"})


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="clerk", password="secret")


@pytest.fixture
def customer():
    return Customer.objects.create(id_number="0912345678", first_name="Ana", last_name="Vera")


@pytest.fixture
def supplier():
    return Supplier.objects.create(tax_id="0990011223001", name="Distribuidora Norte")


@pytest.fixture
def widget():
    return Product.objects.create(code="W-1", name="Widget", quantity_on_hand=10, sale_price=Decimal("10.00"))


@pytest.fixture
def gadget():
    return Product.objects.create(code="G-1", name="Gadget", quantity_on_hand=5, sale_price=Decimal("20.00"))


def stock_of(product):
    return Product.objects.get(pk=product.pk).quantity_on_hand


@pytest.fixture
def sale_line():
    def make(product, quantity, unit_price="10.00", discount=None):
        return SalesLineInput(
            product_id=product.pk,
            quantity=quantity,
            unit_price=Decimal(unit_price),
            discount=Decimal(discount) if discount is not None else None,
        )
    return make


@pytest.fixture
def purchase_line():
    def make(product, quantity, unit_cost):
        return PurchaseLineInput(product_id=product.pk, quantity=quantity, unit_cost=Decimal(unit_cost))
    return make


@pytest.fixture
def three_payments():
    return CreditTerms(installment_count=3, first_due_date=date(2025, 1, 1), interval_days=30)
