from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from core.http import api_view, parse_json_body
from documents.forms.api_forms import SalesNoteForm, clean_form, clean_purchase_order, clean_sales_order
from documents.presenters import purchase_order_to_dict, sales_order_to_dict
from documents.services.purchases import create_purchase_order, load_purchase_order, reject_purchase_change
from documents.services.sales import create_sales_order, load_sales_order, update_sales_order_note, void_sales_order


@csrf_exempt
@login_required
@require_http_methods(["POST"])
@api_view
def api_create_sales_order(request):
    data = parse_json_body(request)
    doc = create_sales_order(by_user=request.user, **clean_sales_order(data))
    return JsonResponse(sales_order_to_dict(doc), status=201)


@csrf_exempt
@login_required
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@api_view
def api_sales_order(request, pk: int):
    if request.method == "GET":
        doc = load_sales_order(pk)
    elif request.method in ("PUT", "PATCH"):
        data = parse_json_body(request)
        form = clean_form(SalesNoteForm, data)
        note = form.cleaned_data["note"] if "note" in data else None
        doc = update_sales_order_note(pk, note, by_user=request.user)
    else:
        doc = void_sales_order(pk, by_user=request.user)
    return JsonResponse(sales_order_to_dict(doc))


@csrf_exempt
@login_required
@require_http_methods(["POST"])
@api_view
def api_create_purchase_order(request):
    data = parse_json_body(request)
    doc = create_purchase_order(by_user=request.user, **clean_purchase_order(data))
    return JsonResponse(purchase_order_to_dict(doc), status=201)


@csrf_exempt
@login_required
@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@api_view
def api_purchase_order(request, pk: int):
    if request.method == "GET":
        return JsonResponse(purchase_order_to_dict(load_purchase_order(pk)))
    reject_purchase_change(pk, action="cancel" if request.method == "DELETE" else "modify")
