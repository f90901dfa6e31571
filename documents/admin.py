from django.contrib import admin, messages

from django_object_actions import DjangoObjectActions, action

from core.exceptions import BackOfficeError
from documents.models import PurchaseDocument, PurchaseLine, SalesDocument, SalesLine
from documents.services.sales import void_sales_order


class SalesLineInline(admin.TabularInline):
    model = SalesLine
    extra = 0
    fk_name = "document"
    can_delete = False
    fields = ("line_no", "product", "quantity", "unit_price", "discount", "subtotal", "status")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(SalesDocument)
class SalesDocumentAdmin(DjangoObjectActions, admin.ModelAdmin):
    inlines = [SalesLineInline]
    list_display = ("number", "created_at", "customer", "payment_method", "total", "current_state")
    list_filter = ("state", "payment_method")
    search_fields = ("number", "customer__first_name", "customer__last_name", "customer__id_number")
    readonly_fields = ("number", "current_state", "customer", "payment_method", "subtotal", "tax", "total",
                       "created_at", "created_by", "modified_by", "voided_at", "voided_by")
    fields = readonly_fields[:4] + ("note",) + readonly_fields[4:]

    # FSMKeyField reads back as the status code, not a RecordStatus instance.
    @admin.display(description="State")
    def current_state(self, obj):
        return obj.state

    change_actions = ("void_action",)

    def get_change_actions(self, request, object_id, form_url):
        obj = self.get_object(request, object_id)
        if not obj or obj.is_voided:
            return ()
        return ("void_action",)

    @action(label="Void", description="Void this sale and put its stock back")
    def void_action(self, request, obj):
        try:
            void_sales_order(obj.pk, by_user=request.user)
            self.message_user(request, f"{obj.number} voided.", level=messages.SUCCESS)
        except BackOfficeError as e:
            self.message_user(request, f"Could not void: {e}", level=messages.ERROR)

    # Sales are created through the API so stock and the ledger stay in step.
    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class PurchaseLineInline(admin.TabularInline):
    model = PurchaseLine
    extra = 0
    fk_name = "document"
    can_delete = False
    fields = ("line_no", "product", "quantity", "unit_cost", "subtotal")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(PurchaseDocument)
class PurchaseDocumentAdmin(admin.ModelAdmin):
    inlines = [PurchaseLineInline]
    list_display = ("number", "created_at", "supplier", "total")
    search_fields = ("number", "supplier__name", "supplier__tax_id")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
