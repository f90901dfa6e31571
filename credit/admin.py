from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from credit.models import CreditSchedule, Installment


class InstallmentInline(admin.TabularInline):
    model = Installment
    extra = 0
    can_delete = False
    fields = ("number", "due_date", "amount_due", "amount_paid", "paid_on", "status")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(CreditSchedule)
class CreditScheduleAdmin(SimpleHistoryAdmin):
    inlines = [InstallmentInline]
    list_display = ("sales_document", "total_amount", "outstanding_balance", "start_date", "end_date", "status")
    list_filter = ("status",)
    search_fields = ("sales_document__number",)
    readonly_fields = ("sales_document", "total_amount", "outstanding_balance", "start_date", "end_date",
                       "status", "voided_at", "voided_by", "created_by")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Installment)
class InstallmentAdmin(SimpleHistoryAdmin):
    list_display = ("schedule", "number", "due_date", "amount_due", "amount_paid", "status")
    list_filter = ("status",)
    readonly_fields = ("schedule", "number", "due_date", "amount_due")
