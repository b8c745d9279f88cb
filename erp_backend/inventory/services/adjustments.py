# inventory/services/adjustments.py

"""
STOCK ADJUSTMENTS SERVICE

Purpose:
- Translate a human adjustment (increase / decrease / set) into a single
  "adjustment" inventory transaction carrying the resulting absolute quantity.

Rules:
- quantity must be a non-negative integer (positive for increase / decrease)
- a decrease cannot take the record below zero; an increase on a negative
  record may still leave it negative
- reference_type = "stock_adjustment", reference_id = reference_number
- notes are stored as "{reason} - {notes}"
"""

from __future__ import annotations

from django.db import transaction

from core.db import service_call
from core.exceptions import ValidationError
from core.money import money, to_int
from inventory.models import InventoryTransaction
from inventory.services.transactions import (
    apply_transaction,
    lock_record,
    resolve_product,
    resolve_warehouse,
)

ADJUSTMENT_REFERENCE_TYPE = "stock_adjustment"

INCREASE = "increase"
DECREASE = "decrease"
SET = "set"
ADJUSTMENT_TYPES = (INCREASE, DECREASE, SET)


def _target_quantity(current: int, *, adjustment_type: str, quantity: int) -> int:
    if adjustment_type == INCREASE:
        return current + quantity
    if adjustment_type == DECREASE:
        return current - quantity
    return quantity


def _notes(reason: str, notes: str) -> str:
    notes = (notes or "").strip()
    return f"{reason} - {notes}" if notes else reason


@service_call("create stock adjustment")
@transaction.atomic
def create_stock_adjustment(
    *,
    company,
    product,
    warehouse,
    adjustment_type: str,
    quantity,
    reason: str,
    reference_number=None,
    notes: str = "",
    unit_cost=None,
    created_by: str = "",
) -> InventoryTransaction:
    if company is None:
        raise ValidationError("company is required")

    adjustment_type = str(adjustment_type or "").strip().lower()
    if adjustment_type not in ADJUSTMENT_TYPES:
        raise ValidationError(
            f"Invalid adjustment_type {adjustment_type!r}. Expected one of: {', '.join(ADJUSTMENT_TYPES)}"
        )

    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("reason is required")

    qty = to_int(quantity, field_name="quantity")
    if qty < 0:
        raise ValidationError("quantity cannot be negative")
    if adjustment_type != SET and qty == 0:
        raise ValidationError("quantity must be greater than zero")

    product = resolve_product(company=company, product=product)
    warehouse = resolve_warehouse(company=company, warehouse=warehouse)

    if unit_cost not in (None, ""):
        unit_cost = money(unit_cost, field_name="unit_cost")
    else:
        unit_cost = None

    # the record lock is re-entrant within this transaction
    record = lock_record(company=company, product=product, warehouse=warehouse)
    current = int(record.quantity or 0)

    target = _target_quantity(current, adjustment_type=adjustment_type, quantity=qty)
    if adjustment_type == DECREASE and target < 0:
        raise ValidationError(
            f"Cannot reduce stock below zero. Current: {current}, Requested decrease: {qty}"
        )

    return apply_transaction(
        company=company,
        product=product,
        warehouse=warehouse,
        transaction_type=InventoryTransaction.TransactionType.ADJUSTMENT,
        quantity=target,
        unit_cost=unit_cost,
        reference_type=ADJUSTMENT_REFERENCE_TYPE,
        reference_id=reference_number,
        notes=_notes(reason, notes),
        created_by=created_by,
    )
