from django.contrib import admin

from inventory.models import StockMove


@admin.register(StockMove)
class StockMoveAdmin(admin.ModelAdmin):
    list_display = ("created_at", "product", "direction", "origin", "reference_id", "quantity", "unit_cost", "status")
    list_filter = ("direction", "origin", "status")
    search_fields = ("product__code", "product__name", "comment")

    # The ledger is append-only.
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
