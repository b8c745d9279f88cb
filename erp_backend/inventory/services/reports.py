# inventory/services/reports.py

"""
INVENTORY REPORTS (READ-ONLY)

- Valuation: records with quantity > 0, valued at quantity x product.cost_price,
  with totals plus breakdowns by warehouse and by category
- Stock movements: per product over a date window (transaction_date),
  opening stock = sum of quantity_delta strictly before date_from
- Low stock: quantity < product.min_stock_level
- Out of stock: quantity <= 0

Money is emitted as floats (2dp), quantities as ints.
"""

from __future__ import annotations

from decimal import Decimal

from django.db.models import Case, F, IntegerField, Sum, When
from django.db.models.functions import Coalesce

from core.dates import as_date
from core.exceptions import ValidationError
from core.money import ZERO, q2, to_major_number
from inventory.models import InventoryRecord, InventoryTransaction
from products.models import Product

UNCATEGORIZED = "Uncategorized"

TransactionType = InventoryTransaction.TransactionType


def _value(quantity: int, cost_price) -> Decimal:
    return q2(Decimal(quantity) * Decimal(cost_price or 0))


def get_inventory_valuation(*, company, warehouse=None) -> dict:
    if company is None:
        raise ValidationError("company is required")

    qs = InventoryRecord.objects.filter(company=company, quantity__gt=0).select_related(
        "product",
        "product__category",
        "warehouse",
    )
    if warehouse:
        qs = qs.filter(warehouse=warehouse)

    total_value = ZERO
    total_quantity = 0
    by_warehouse: dict = {}
    by_category: dict = {}

    for record in qs.order_by("warehouse__name", "product__name"):
        product = record.product
        value = _value(record.quantity, product.cost_price)

        total_value += value
        total_quantity += record.quantity

        wh = by_warehouse.setdefault(
            record.warehouse_id,
            {
                "warehouse_id": str(record.warehouse_id),
                "warehouse_name": record.warehouse.name,
                "value": ZERO,
                "quantity": 0,
            },
        )
        wh["value"] += value
        wh["quantity"] += record.quantity

        category = product.category
        cat = by_category.setdefault(
            product.category_id,
            {
                "category_id": str(product.category_id) if product.category_id else None,
                "category_name": category.name if category else UNCATEGORIZED,
                "value": ZERO,
                "quantity": 0,
            },
        )
        cat["value"] += value
        cat["quantity"] += record.quantity

    def _finish(rows):
        return [{**row, "value": to_major_number(row["value"])} for row in rows]

    return {
        "total_value": to_major_number(total_value),
        "total_quantity": total_quantity,
        "by_warehouse": _finish(by_warehouse.values()),
        "by_category": _finish(by_category.values()),
    }


def _sum_when(**condition):
    return Coalesce(
        Sum(Case(When(then=F("quantity_delta"), **condition), output_field=IntegerField())),
        0,
    )


def get_stock_movement_report(*, company, date_from, date_to, warehouse=None) -> list[dict]:
    if company is None:
        raise ValidationError("company is required")

    date_from = as_date(date_from, field_name="date_from")
    date_to = as_date(date_to, field_name="date_to")
    if date_from > date_to:
        raise ValidationError("date_from cannot be after date_to")

    base = InventoryTransaction.objects.filter(company=company)
    if warehouse:
        base = base.filter(warehouse=warehouse)

    opening = {
        row["product_id"]: row["total"]
        for row in base.filter(transaction_date__lt=date_from)
        .values("product_id")
        .annotate(total=Coalesce(Sum("quantity_delta"), 0))
    }

    period = (
        base.filter(transaction_date__gte=date_from, transaction_date__lte=date_to)
        .values("product_id")
        .annotate(
            stock_in=_sum_when(transaction_type=TransactionType.IN),
            stock_out=_sum_when(
                transaction_type__in=[TransactionType.OUT, TransactionType.TRANSFER]
            ),
            adjustments=_sum_when(transaction_type=TransactionType.ADJUSTMENT),
        )
    )

    products = Product.objects.in_bulk([row["product_id"] for row in period])

    report = []
    for row in period:
        product = products[row["product_id"]]
        opening_stock = int(opening.get(row["product_id"], 0))
        stock_in = int(row["stock_in"])
        # out/transfer deltas are negative; the report shows magnitudes
        stock_out = -int(row["stock_out"])
        adjustments = int(row["adjustments"])
        closing = opening_stock + stock_in - stock_out + adjustments

        report.append(
            {
                "product_id": str(product.pk),
                "product_name": product.name,
                "opening_stock": opening_stock,
                "stock_in": stock_in,
                "stock_out": stock_out,
                "adjustments": adjustments,
                "closing_stock": closing,
                "value": to_major_number(_value(closing, product.cost_price)),
            }
        )

    return sorted(report, key=lambda r: r["product_name"])


def get_low_stock_products(*, company, warehouse=None) -> list[dict]:
    if company is None:
        raise ValidationError("company is required")

    qs = InventoryRecord.objects.filter(
        company=company,
        quantity__lt=F("product__min_stock_level"),
    ).select_related("product", "warehouse")
    if warehouse:
        qs = qs.filter(warehouse=warehouse)

    return [
        {
            "product_id": str(r.product_id),
            "product_name": r.product.name,
            "current_stock": r.quantity,
            "min_stock_level": r.product.min_stock_level,
            "warehouse_id": str(r.warehouse_id),
            "warehouse_name": r.warehouse.name,
        }
        for r in qs.order_by("quantity", "product__name")
    ]


def get_out_of_stock_products(*, company, warehouse=None) -> list[dict]:
    if company is None:
        raise ValidationError("company is required")

    qs = InventoryRecord.objects.filter(company=company, quantity__lte=0).select_related(
        "product",
        "warehouse",
    )
    if warehouse:
        qs = qs.filter(warehouse=warehouse)

    return [
        {
            "product_id": str(r.product_id),
            "product_name": r.product.name,
            "current_stock": r.quantity,
            "warehouse_id": str(r.warehouse_id),
            "warehouse_name": r.warehouse.name,
        }
        for r in qs.order_by("product__name")
    ]
