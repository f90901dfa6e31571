import json

import pytest
from django.urls import reverse

from core.models import RecordStatus
from documents.models import SalesDocument

from .conftest import stock_of


@pytest.fixture
def api(client, user):
    client.force_login(user)
    return client


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def sale_payload(customer, *lines, **extra):
    payload = {
        "customer_id": customer.pk,
        "lines": [{"product_id": p.pk, "quantity": q, "unit_price": price} for p, q, price in lines],
    }
    payload.update(extra)
    return payload


def test_create_sale(api, customer, widget):
    response = post_json(api, reverse("api-create-sales-order"), sale_payload(customer, (widget, 2, "10.00")))

    assert response.status_code == 201
    body = response.json()
    assert body["number"] == "F-000001"
    assert body["state"] == RecordStatus.ACTIVE
    assert body["payment_method"] == "CASH"
    assert (body["subtotal"], body["tax"], body["total"]) == ("20.00", "3.00", "23.00")
    assert body["lines"][0]["product_code"] == "W-1"
    assert body["credit_schedule"] is None
    assert stock_of(widget) == 8


def test_create_credit_sale(api, customer, widget):
    payload = sale_payload(
        customer, (widget, 1, "100.00"),
        payment_method="CREDIT",
        credit_terms={"installment_count": 2, "first_due_date": "2025-01-01", "interval_days": 30},
    )
    response = post_json(api, reverse("api-create-sales-order"), payload)

    assert response.status_code == 201
    schedule = response.json()["credit_schedule"]
    assert schedule["total_amount"] == "115.00"
    assert [i["amount_due"] for i in schedule["installments"]] == ["57.50", "57.50"]
    assert [i["due_date"] for i in schedule["installments"]] == ["2025-01-01", "2025-01-31"]


def test_insufficient_stock_is_reported_per_product(api, customer, widget):
    response = post_json(api, reverse("api-create-sales-order"), sale_payload(customer, (widget, 11, "10.00")))

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == f"INSUFFICIENT_STOCK_{widget.pk}_Widget"
    assert body["details"]["available"] == 10


def test_unknown_product(api, customer, widget):
    payload = sale_payload(customer, (widget, 1, "10.00"))
    payload["lines"].append({"product_id": 999, "quantity": 1, "unit_price": "1.00"})

    response = post_json(api, reverse("api-create-sales-order"), payload)

    assert response.status_code == 404
    assert response.json()["error"] == "PRODUCT_NOT_FOUND_999"
    assert stock_of(widget) == 10


@pytest.mark.parametrize("build, code", [
    (lambda c, p: {"customer_id": c.pk, "lines": []}, "EMPTY_LINE_LIST"),
    (lambda c, p: {"customer_id": c.pk}, "EMPTY_LINE_LIST"),
    (lambda c, p: {"lines": [{"product_id": p.pk, "quantity": 1, "unit_price": "1.00"}]}, "INVALID_PAYLOAD"),
    (lambda c, p: {"customer_id": c.pk, "lines": "nope"}, "INVALID_PAYLOAD"),
    (lambda c, p: sale_payload(c, (p, 0, "1.00")), "INVALID_LINE_QUANTITY"),
    (lambda c, p: sale_payload(c, (p, 1, "1.00"), payment_method="CREDIT"), "CREDIT_CONFIG_MISSING"),
    (lambda c, p: sale_payload(c, (p, 1, "1.00"), payment_method="BARTER"), "INVALID_PAYMENT_METHOD"),
])
def test_bad_sale_payloads(api, customer, widget, build, code):
    response = post_json(api, reverse("api-create-sales-order"), build(customer, widget))

    assert response.status_code == 400
    assert response.json()["error"] == code
    assert stock_of(widget) == 10


def test_invalid_json(api):
    response = api.post(reverse("api-create-sales-order"), data="{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"


def test_invalid_field_is_named_in_details(api, customer, widget):
    payload = sale_payload(customer, (widget, "many", "10.00"))
    response = post_json(api, reverse("api-create-sales-order"), payload)

    assert response.status_code == 400
    assert "lines.0.quantity" in response.json()["details"]


def test_get_update_note_and_void(api, customer, widget):
    created = post_json(api, reverse("api-create-sales-order"), sale_payload(customer, (widget, 3, "10.00"))).json()
    url = reverse("api-sales-order", args=[created["id"]])

    assert api.get(url).json()["number"] == created["number"]

    patched = api.patch(url, data=json.dumps({"note": "call first"}), content_type="application/json")
    assert patched.status_code == 200
    assert patched.json()["note"] == "call first"

    voided = api.delete(url)
    assert voided.status_code == 200
    assert voided.json()["state"] == RecordStatus.VOIDED
    assert stock_of(widget) == 10

    again = api.delete(url)
    assert again.status_code == 409
    assert again.json()["error"] == "ORDER_ALREADY_VOIDED"


def test_void_without_voided_status(api, customer, widget):
    created = post_json(api, reverse("api-create-sales-order"), sale_payload(customer, (widget, 3, "10.00"))).json()
    RecordStatus.objects.filter(pk=RecordStatus.VOIDED).delete()

    response = api.delete(reverse("api-sales-order", args=[created["id"]]))

    assert response.status_code == 500
    assert response.json()["error"] == "VOIDED_STATUS_NOT_CONFIGURED"
    assert SalesDocument.objects.get(pk=created["id"]).state == RecordStatus.ACTIVE


def test_missing_sale(api):
    response = api.get(reverse("api-sales-order", args=[999]))
    assert response.status_code == 404
    assert response.json()["error"] == "ORDER_NOT_FOUND"


def test_create_purchase_and_refuse_changes(api, supplier, widget):
    payload = {
        "supplier_id": supplier.pk,
        "lines": [{"product_id": widget.pk, "quantity": 5, "unit_cost": "10.00"}],
    }
    response = post_json(api, reverse("api-create-purchase-order"), payload)

    assert response.status_code == 201
    body = response.json()
    assert body["number"] == "C-000001"
    assert (body["subtotal"], body["tax"], body["total"]) == ("50.00", "7.50", "57.50")
    assert stock_of(widget) == 15

    url = reverse("api-purchase-order", args=[body["id"]])
    assert api.get(url).status_code == 200
    for method in (api.put, api.patch, api.delete):
        refused = method(url, data="{}", content_type="application/json")
        assert refused.status_code == 409
        assert refused.json()["error"] == "UNSUPPORTED_OPERATION"
    assert stock_of(widget) == 15


def test_login_required(client):
    response = client.get(reverse("api-sales-order", args=[1]))
    assert response.status_code == 302


def test_method_not_allowed(api):
    assert api.get(reverse("api-create-sales-order")).status_code == 405


def test_patch_without_note_keeps_it(api, customer, widget):
    created = post_json(
        api, reverse("api-create-sales-order"), sale_payload(customer, (widget, 1, "10.00"), note="keep me")
    ).json()
    url = reverse("api-sales-order", args=[created["id"]])

    response = api.patch(url, data="{}", content_type="application/json")

    assert response.status_code == 200
    assert response.json()["note"] == "keep me"
    assert SalesDocument.objects.get(pk=created["id"]).note == "keep me"
