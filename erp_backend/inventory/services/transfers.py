# inventory/services/transfers.py

"""
STOCK TRANSFER SERVICE

A transfer moves stock between two warehouses of the same company:
- one "transfer" leg on the source (quantity leaves)
- one "in" leg on the destination (quantity arrives)

Both legs share reference_type = "stock_transfer", the transfer_id and the
transfer_date (today when not given).

Guarantees:
- source records are locked and availability is checked for every product
  BEFORE any write; a shortfall raises InsufficientStockError and writes nothing
- the whole transfer is one DB transaction (all legs or none)
- company-wide stock per product is unchanged
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import transaction

from companies.services.sequences import next_document_number
from core.dates import as_date
from core.db import service_call
from core.exceptions import InsufficientStockError, ValidationError
from core.money import money, to_int
from inventory.models import InventoryRecord, InventoryTransaction
from inventory.services.transactions import (
    apply_transaction,
    resolve_product,
    resolve_warehouse,
)

logger = logging.getLogger(__name__)

TRANSFER_REFERENCE_TYPE = "stock_transfer"
TRANSFER_SEQUENCE_KEY = "stock_transfer"


@dataclass(frozen=True)
class StockTransferResult:
    transfer_id: str
    transactions: list[InventoryTransaction] = field(default_factory=list)


def _item_value(item, *names):
    for name in names:
        if isinstance(item, dict):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None


def _normalize_items(*, company, items) -> list[dict]:
    if not items:
        raise ValidationError("At least one transfer item is required")

    normalized = []
    for idx, item in enumerate(items, start=1):
        product = resolve_product(
            company=company,
            product=_item_value(item, "product", "product_id"),
        )
        qty = to_int(_item_value(item, "quantity"), field_name=f"items[{idx}].quantity")
        if qty <= 0:
            raise ValidationError(f"items[{idx}].quantity must be greater than zero")

        unit_cost = _item_value(item, "unit_cost")
        if unit_cost not in (None, ""):
            unit_cost = money(unit_cost, field_name=f"items[{idx}].unit_cost")
        else:
            unit_cost = None

        normalized.append({"product": product, "quantity": qty, "unit_cost": unit_cost})
    return normalized


def _required_by_product(items: list[dict]) -> dict:
    required = {}
    for item in sorted(items, key=lambda i: str(i["product"].pk)):
        product = item["product"]
        prev = required.get(product.pk, (product, 0))[1]
        required[product.pk] = (product, prev + item["quantity"])
    return required


def _assert_available(*, warehouse, required) -> None:
    # lock in product order to keep concurrent transfers deadlock-free
    records = {
        r.product_id: r
        for r in InventoryRecord.objects.select_for_update()
        .filter(warehouse=warehouse, product_id__in=list(required))
        .order_by("product_id")
    }

    for product_id, (product, needed) in required.items():
        record = records.get(product_id)
        available = record.available_quantity if record is not None else 0
        if available < needed:
            raise InsufficientStockError(
                f"Insufficient stock for {product.name}. Available: {available}, Required: {needed}",
                product_id=str(product_id),
                available=available,
                required=needed,
            )


def _leg_notes(prefix: str, warehouse, notes: str) -> str:
    text = f"{prefix} warehouse {warehouse.name}"
    notes = (notes or "").strip()
    return f"{text} - {notes}" if notes else text


@service_call("create stock transfer")
@transaction.atomic
def create_stock_transfer(
    *,
    company,
    from_warehouse,
    to_warehouse,
    items,
    transfer_date=None,
    notes: str = "",
    created_by: str = "",
) -> StockTransferResult:
    if company is None:
        raise ValidationError("company is required")

    source = resolve_warehouse(company=company, warehouse=from_warehouse)
    destination = resolve_warehouse(company=company, warehouse=to_warehouse)
    if source.pk == destination.pk:
        raise ValidationError("Source and destination warehouses must differ")

    transfer_date = as_date(transfer_date, field_name="transfer_date", required=False)

    normalized = _normalize_items(company=company, items=items)
    _assert_available(warehouse=source, required=_required_by_product(normalized))

    transfer_id = next_document_number(
        company=company,
        key=TRANSFER_SEQUENCE_KEY,
        prefix=settings.STOCK_TRANSFER_PREFIX,
    )

    leg_meta = {
        "reference_type": TRANSFER_REFERENCE_TYPE,
        "reference_id": transfer_id,
        "created_by": created_by,
        "transaction_date": transfer_date,
    }

    legs = []
    for item in normalized:
        legs.append(
            apply_transaction(
                company=company,
                product=item["product"],
                warehouse=source,
                transaction_type=InventoryTransaction.TransactionType.TRANSFER,
                quantity=item["quantity"],
                unit_cost=item["unit_cost"],
                notes=_leg_notes("Transfer to", destination, notes),
                **leg_meta,
            )
        )
        legs.append(
            apply_transaction(
                company=company,
                product=item["product"],
                warehouse=destination,
                transaction_type=InventoryTransaction.TransactionType.IN,
                quantity=item["quantity"],
                unit_cost=item["unit_cost"],
                notes=_leg_notes("Transfer from", source, notes),
                **leg_meta,
            )
        )

    logger.info(
        "Stock transfer completed",
        extra={
            "company_id": str(company.pk),
            "transfer_id": transfer_id,
            "from_warehouse_id": str(source.pk),
            "to_warehouse_id": str(destination.pk),
            "transfer_date": transfer_date.isoformat() if transfer_date else None,
            "items": len(normalized),
        },
    )

    return StockTransferResult(transfer_id=transfer_id, transactions=legs)
