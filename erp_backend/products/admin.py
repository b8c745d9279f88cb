# products/admin.py

from django.contrib import admin

from products.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "created_at")
    list_filter = ("company",)
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "company",
        "category",
        "cost_price",
        "unit_price",
        "min_stock_level",
        "is_active",
    )
    list_filter = ("is_active", "company", "category")
    search_fields = ("sku", "name")
    readonly_fields = ("created_at", "updated_at")
