import pytest
from django.urls import reverse

from core.models import RecordStatus
from documents.models import SalesDocument
from documents.services.sales import create_sales_order

from .conftest import stock_of


@pytest.fixture
def order(widget, customer, user, sale_line):
    return create_sales_order(customer_id=customer.pk, lines=[sale_line(widget, 4)], by_user=user)


def test_change_pages_render(admin_client, order, widget):
    assert admin_client.get(reverse("admin:documents_salesdocument_change", args=[order.pk])).status_code == 200
    assert admin_client.get(reverse("admin:masterdata_product_change", args=[widget.pk])).status_code == 200
    assert admin_client.get(reverse("admin:inventory_stockmove_changelist")).status_code == 200


def test_void_action(admin_client, order, widget):
    url = reverse("admin:documents_salesdocument_actions", kwargs={"pk": order.pk, "tool": "void_action"})

    response = admin_client.post(url)

    assert response.status_code == 302
    assert SalesDocument.objects.get(pk=order.pk).state == RecordStatus.VOIDED
    assert stock_of(widget) == 10


def test_void_action_on_voided_order_reports_error(admin_client, order, widget):
    url = reverse("admin:documents_salesdocument_actions", kwargs={"pk": order.pk, "tool": "void_action"})
    admin_client.post(url)

    response = admin_client.post(url, follow=True)

    assert "Could not void" in response.content.decode()
    assert stock_of(widget) == 10


def test_purchases_are_read_only_in_admin(admin_client, widget, supplier, user, purchase_line):
    from documents.services.purchases import create_purchase_order

    purchase = create_purchase_order(supplier_id=supplier.pk, lines=[purchase_line(widget, 2, "5.00")], by_user=user)

    change_url = reverse("admin:documents_purchasedocument_change", args=[purchase.pk])
    assert admin_client.get(change_url).status_code == 200
    assert admin_client.post(change_url, {"note": "edited"}).status_code == 403
    assert admin_client.post(reverse("admin:documents_purchasedocument_delete", args=[purchase.pk])).status_code == 403
    assert stock_of(widget) == 12
