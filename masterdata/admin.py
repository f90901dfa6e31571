from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from masterdata.models import Customer, Product, Supplier


@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = ("code", "name", "quantity_on_hand", "minimum_stock", "is_below_minimum",
                    "last_purchase_cost", "sale_price", "is_active")
    list_filter = ("is_active",)
    search_fields = ("code", "name")
    # Stock moves only through sales and purchases.
    readonly_fields = ("quantity_on_hand", "last_purchase_cost")

    @admin.display(boolean=True, description="Below minimum")
    def is_below_minimum(self, obj):
        return obj.is_below_minimum


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id_number", "first_name", "last_name", "email", "phone")
    search_fields = ("id_number", "first_name", "last_name", "email")


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("tax_id", "name", "email", "phone")
    search_fields = ("tax_id", "name")
