# inventory/api/filters.py

import django_filters

from inventory.models import InventoryTransaction


class InventoryTransactionFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="transaction_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="transaction_date", lookup_expr="lte")

    class Meta:
        model = InventoryTransaction
        fields = [
            "company",
            "product",
            "warehouse",
            "transaction_type",
            "reference_type",
            "reference_id",
        ]
