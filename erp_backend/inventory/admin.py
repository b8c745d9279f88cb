# inventory/admin.py

from django.contrib import admin

from inventory.models import InventoryRecord, InventoryTransaction, Warehouse

# ============================================================
# WAREHOUSE
# ============================================================


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ("warehouse_code", "name", "warehouse_type", "company", "is_active")
    list_filter = ("warehouse_type", "is_active", "company")
    search_fields = ("warehouse_code", "name", "manager_name")
    ordering = ("company", "name")
    readonly_fields = ("created_at", "updated_at")

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# CURRENT INVENTORY (SERVICE-MANAGED)
# ============================================================


@admin.register(InventoryRecord)
class InventoryRecordAdmin(admin.ModelAdmin):
    list_display = ("product", "warehouse", "quantity", "reserved_quantity", "last_updated")
    list_filter = ("warehouse", "company")
    search_fields = ("product__name", "product__sku", "warehouse__name")
    ordering = ("-last_updated",)
    readonly_fields = (
        "company",
        "product",
        "warehouse",
        "quantity",
        "reserved_quantity",
        "last_updated",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# INVENTORY TRANSACTION LOG (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(InventoryTransaction)
class InventoryTransactionAdmin(admin.ModelAdmin):
    list_display = (
        "transaction_date",
        "product",
        "warehouse",
        "transaction_type",
        "quantity",
        "quantity_delta",
        "resulting_quantity",
        "reference_type",
        "reference_id",
    )
    list_filter = ("transaction_type", "reference_type", "warehouse")
    search_fields = ("product__name", "product__sku", "reference_id", "batch_number")
    ordering = ("-created_at",)

    readonly_fields = (
        "company",
        "product",
        "warehouse",
        "transaction_type",
        "quantity",
        "quantity_delta",
        "resulting_quantity",
        "unit_cost",
        "reference_type",
        "reference_id",
        "batch_number",
        "expiry_date",
        "notes",
        "created_by",
        "transaction_date",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
