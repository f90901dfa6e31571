"""Forms that clean JSON payloads for the sales/purchase API.

Only the shape of the payload is checked here. Business rules (empty line
list, stock, installment count, ...) belong to the engines so that every
caller gets the same error codes.
"""
from django import forms

from core.exceptions import InvalidPayload
from credit.services.schedule import CreditTerms
from documents.models import SalesDocument
from documents.services.common import PurchaseLineInput, SalesLineInput


class SalesLineForm(forms.Form):
    product_id = forms.IntegerField()
    quantity = forms.IntegerField()
    unit_price = forms.DecimalField(max_digits=14, decimal_places=2)
    discount = forms.DecimalField(max_digits=14, decimal_places=2, required=False)

    def to_input(self) -> SalesLineInput:
        return SalesLineInput(**self.cleaned_data)


class PurchaseLineForm(forms.Form):
    product_id = forms.IntegerField()
    quantity = forms.IntegerField()
    unit_cost = forms.DecimalField(max_digits=14, decimal_places=2)

    def to_input(self) -> PurchaseLineInput:
        return PurchaseLineInput(**self.cleaned_data)


class CreditTermsForm(forms.Form):
    installment_count = forms.IntegerField(required=False)
    first_due_date = forms.DateField()
    interval_days = forms.IntegerField(required=False, min_value=0)

    def to_terms(self) -> CreditTerms:
        return CreditTerms(**self.cleaned_data)


class SalesOrderForm(forms.Form):
    customer_id = forms.IntegerField()
    # Unknown methods are rejected by the engine (INVALID_PAYMENT_METHOD).
    payment_method = forms.CharField(required=False)
    note = forms.CharField(required=False, max_length=2000)

    def clean_payment_method(self):
        return self.cleaned_data.get("payment_method") or SalesDocument.PaymentMethod.CASH


class PurchaseOrderForm(forms.Form):
    supplier_id = forms.IntegerField()
    note = forms.CharField(required=False, max_length=2000)


class SalesNoteForm(forms.Form):
    note = forms.CharField(required=False, max_length=2000, strip=True)


def clean_form(form_class, data, prefix=""):
    if not isinstance(data, dict):
        raise InvalidPayload({prefix.rstrip(".") or "__all__": [{"message": "Expected an object."}]})
    form = form_class(data=data)
    if not form.is_valid():
        raise InvalidPayload({f"{prefix}{key}": value for key, value in form.errors.get_json_data().items()})
    return form


def clean_lines(form_class, raw_lines):
    if raw_lines is None:
        return []
    if not isinstance(raw_lines, list):
        raise InvalidPayload({"lines": [{"message": "Expected a list."}]})
    return [clean_form(form_class, raw, prefix=f"lines.{i}.").to_input() for i, raw in enumerate(raw_lines)]


def clean_sales_order(data):
    """Return kwargs for documents.services.sales.create_sales_order (minus by_user)."""
    header = clean_form(SalesOrderForm, data)

    raw_terms = data.get("credit_terms")
    terms = clean_form(CreditTermsForm, raw_terms, prefix="credit_terms.").to_terms() if raw_terms is not None else None

    return {
        "customer_id": header.cleaned_data["customer_id"],
        "payment_method": header.cleaned_data["payment_method"],
        "note": header.cleaned_data["note"],
        "lines": clean_lines(SalesLineForm, data.get("lines")),
        "credit_terms": terms,
    }


def clean_purchase_order(data):
    header = clean_form(PurchaseOrderForm, data)
    return {
        "supplier_id": header.cleaned_data["supplier_id"],
        "note": header.cleaned_data["note"],
        "lines": clean_lines(PurchaseLineForm, data.get("lines")),
    }
