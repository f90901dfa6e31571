"""Plain-dict views of documents for the JSON API.

Money is rendered as strings so no precision is lost on the way out.
"""
from django.core.exceptions import ObjectDoesNotExist


def _money(value):
    return str(value) if value is not None else None


def _date(value):
    return value.isoformat() if value else None


def credit_schedule_to_dict(schedule):
    return {
        "id": schedule.id,
        "total_amount": _money(schedule.total_amount),
        "outstanding_balance": _money(schedule.outstanding_balance),
        "start_date": _date(schedule.start_date),
        "end_date": _date(schedule.end_date),
        "status": schedule.status_id,
        "installments": [
            {
                "id": i.id,
                "number": i.number,
                "due_date": _date(i.due_date),
                "amount_due": _money(i.amount_due),
                "amount_paid": _money(i.amount_paid),
                "remaining_amount": _money(i.remaining_amount),
                "status": i.status,
            }
            for i in schedule.installments.all()
        ],
    }


def sales_order_to_dict(doc):
    try:
        schedule = doc.credit_schedule
    except ObjectDoesNotExist:
        schedule = None

    return {
        "id": doc.id,
        "number": doc.number,
        "state": doc.state,
        "customer": {"id": doc.customer_id, "name": str(doc.customer)},
        "created_by": doc.created_by_id,
        "payment_method": doc.payment_method,
        "note": doc.note,
        "subtotal": _money(doc.subtotal),
        "tax": _money(doc.tax),
        "total": _money(doc.total),
        "created_at": doc.created_at.isoformat(),
        "voided_at": doc.voided_at.isoformat() if doc.voided_at else None,
        "lines": [
            {
                "line_no": line.line_no,
                "product_id": line.product_id,
                "product_code": line.product.code,
                "product_name": line.product.name,
                "quantity": line.quantity,
                "unit_price": _money(line.unit_price),
                "discount": _money(line.discount),
                "subtotal": _money(line.subtotal),
                "status": line.status_id,
            }
            for line in doc.lines.all()
        ],
        "credit_schedule": credit_schedule_to_dict(schedule) if schedule else None,
    }


def purchase_order_to_dict(doc):
    return {
        "id": doc.id,
        "number": doc.number,
        "supplier": {"id": doc.supplier_id, "name": doc.supplier.name},
        "created_by": doc.created_by_id,
        "note": doc.note,
        "subtotal": _money(doc.subtotal),
        "tax": _money(doc.tax),
        "total": _money(doc.total),
        "created_at": doc.created_at.isoformat(),
        "lines": [
            {
                "line_no": line.line_no,
                "product_id": line.product_id,
                "product_code": line.product.code,
                "product_name": line.product.name,
                "quantity": line.quantity,
                "unit_cost": _money(line.unit_cost),
                "subtotal": _money(line.subtotal),
            }
            for line in doc.lines.all()
        ],
    }
