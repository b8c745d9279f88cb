# inventory/api/serializers.py

from rest_framework import serializers

from companies.models import Company
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from inventory.services.adjustments import ADJUSTMENT_TYPES
from products.models import Product


class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = (
            "id",
            "company",
            "warehouse_code",
            "name",
            "address",
            "manager_name",
            "contact_phone",
            "contact_email",
            "capacity",
            "warehouse_type",
            "is_active",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class WarehouseCreateSerializer(serializers.Serializer):
    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    warehouse_code = serializers.CharField(max_length=32)
    name = serializers.CharField(max_length=255)
    address = serializers.JSONField(required=False)
    manager_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    contact_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    contact_email = serializers.EmailField(required=False, allow_blank=True)
    capacity = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    warehouse_type = serializers.ChoiceField(
        choices=Warehouse.WarehouseType.choices,
        required=False,
    )


class WarehouseUpdateSerializer(WarehouseCreateSerializer):
    company = None
    warehouse_code = serializers.CharField(max_length=32, required=False)
    name = serializers.CharField(max_length=255, required=False)
    is_active = serializers.BooleanField(required=False)


class InventoryRecordSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)
    available_quantity = serializers.IntegerField(read_only=True)

    class Meta:
        model = InventoryRecord
        fields = (
            "id",
            "company",
            "product",
            "product_name",
            "product_sku",
            "warehouse",
            "warehouse_name",
            "quantity",
            "reserved_quantity",
            "available_quantity",
            "last_updated",
        )
        read_only_fields = fields


class InventoryTransactionSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)

    class Meta:
        model = InventoryTransaction
        fields = (
            "id",
            "company",
            "product",
            "product_name",
            "warehouse",
            "warehouse_name",
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
        read_only_fields = fields


class InventoryTransactionCreateSerializer(serializers.Serializer):
    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    warehouse = serializers.PrimaryKeyRelatedField(queryset=Warehouse.objects.all())
    transaction_type = serializers.ChoiceField(choices=InventoryTransaction.TransactionType.choices)
    quantity = serializers.IntegerField(min_value=0)
    unit_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    reference_type = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    reference_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    batch_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    expiry_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    created_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")


class StockAdjustmentSerializer(serializers.Serializer):
    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    warehouse = serializers.PrimaryKeyRelatedField(queryset=Warehouse.objects.all())
    adjustment_type = serializers.ChoiceField(choices=ADJUSTMENT_TYPES)
    quantity = serializers.IntegerField(min_value=0)
    reason = serializers.CharField(max_length=255)
    reference_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    unit_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    created_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")


class StockTransferItemSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all())
    quantity = serializers.IntegerField(min_value=1)
    unit_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=0
    )


class StockTransferSerializer(serializers.Serializer):
    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    from_warehouse = serializers.PrimaryKeyRelatedField(queryset=Warehouse.objects.all())
    to_warehouse = serializers.PrimaryKeyRelatedField(queryset=Warehouse.objects.all())
    items = StockTransferItemSerializer(many=True, allow_empty=False)
    transfer_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    created_by = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")


class StockTransferResultSerializer(serializers.Serializer):
    transfer_id = serializers.CharField()
    transactions = InventoryTransactionSerializer(many=True)
