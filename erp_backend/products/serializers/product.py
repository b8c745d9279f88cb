# products/serializers/product.py

"""
PRODUCT SERIALIZER

Stock figures are summed from inventory records and only exposed read-only.
List and detail querysets annotate total_stock; a freshly created product
falls back to one aggregate.
"""

from django.db.models import Sum
from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    total_stock = serializers.SerializerMethodField(read_only=True)
    is_low_stock = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "company",
            "sku",
            "name",
            "category",
            "category_name",
            "cost_price",
            "unit_price",
            "min_stock_level",
            "total_stock",
            "is_low_stock",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "category_name",
            "total_stock",
            "is_low_stock",
            "created_at",
            "updated_at",
        ]

    def validate_sku(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("SKU is required")
        return value

    def validate_cost_price(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Cost price must be non-negative")
        return value

    def validate_unit_price(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Unit price must be non-negative")
        return value

    def validate(self, attrs):
        company = attrs.get("company") or getattr(self.instance, "company", None)
        category = attrs.get("category")
        if category is not None and company is not None and category.company_id != company.pk:
            raise serializers.ValidationError({"category": "Category must belong to the same company"})
        return attrs

    def _total_stock(self, obj) -> int:
        annotated = getattr(obj, "total_stock", None)
        if annotated is not None:
            return int(annotated or 0)
        total = obj.inventory_records.aggregate(total=Sum("quantity")).get("total")
        return int(total or 0)

    def get_total_stock(self, obj) -> int:
        return self._total_stock(obj)

    def get_is_low_stock(self, obj) -> bool:
        return self._total_stock(obj) < int(obj.min_stock_level or 0)
