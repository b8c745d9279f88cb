# inventory/services/queries.py

"""
Read-only inventory queries. Company-scoped, never writes.
"""

from __future__ import annotations

from django.db.models import F, Q

from core.dates import as_date
from core.exceptions import ValidationError
from inventory.models import InventoryRecord, InventoryTransaction


def _records(company):
    if company is None:
        raise ValidationError("company is required")
    return InventoryRecord.objects.filter(company=company).select_related(
        "product",
        "product__category",
        "warehouse",
    )


def get_inventory(
    *,
    company,
    search: str | None = None,
    warehouse=None,
    category=None,
    low_stock_only: bool = False,
    out_of_stock_only: bool = False,
    negative_stock_only: bool = False,
):
    qs = _records(company)

    search = (search or "").strip()
    if search:
        qs = qs.filter(Q(product__name__icontains=search) | Q(product__sku__icontains=search))

    if warehouse:
        qs = qs.filter(warehouse=warehouse)
    if category:
        qs = qs.filter(product__category=category)

    if low_stock_only:
        qs = qs.filter(quantity__lt=F("product__min_stock_level"))
    if out_of_stock_only:
        qs = qs.filter(quantity__lte=0)
    if negative_stock_only:
        qs = qs.filter(quantity__lt=0)

    return qs.order_by("-last_updated")


def get_product_inventory(*, company, product):
    return _records(company).filter(product=product).order_by("warehouse__name")


def get_warehouse_inventory(*, company, warehouse):
    return _records(company).filter(warehouse=warehouse).order_by("product__name")


def get_inventory_transactions(
    *,
    company,
    product=None,
    warehouse=None,
    transaction_type: str | None = None,
    date_from=None,
    date_to=None,
):
    if company is None:
        raise ValidationError("company is required")

    date_from = as_date(date_from, field_name="date_from", required=False)
    date_to = as_date(date_to, field_name="date_to", required=False)
    if date_from and date_to and date_from > date_to:
        raise ValidationError("date_from cannot be after date_to")

    qs = InventoryTransaction.objects.filter(company=company).select_related(
        "product",
        "warehouse",
    )
    if product:
        qs = qs.filter(product=product)
    if warehouse:
        qs = qs.filter(warehouse=warehouse)
    if transaction_type:
        qs = qs.filter(transaction_type=transaction_type)
    if date_from:
        qs = qs.filter(transaction_date__gte=date_from)
    if date_to:
        qs = qs.filter(transaction_date__lte=date_to)

    return qs.order_by("-created_at")
