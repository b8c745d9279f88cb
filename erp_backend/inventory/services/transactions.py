# inventory/services/transactions.py

"""
INVENTORY TRANSACTION SERVICE (AUTHORITATIVE WRITE PATH)

The only code that mutates InventoryRecord.quantity.

Rules:
- quantity > 0 for in / out / transfer, >= 0 for adjustment
- product and warehouse must belong to the company
- no stock sufficiency check here ("out" may drive a record negative);
  transfers validate availability themselves before writing
- the (product, warehouse) record is locked (created lazily with
  reserved_quantity = 0) before it is changed
- new quantity:
    in                -> current + q
    out / transfer    -> current - q
    adjustment        -> q
- the log row stores quantity_delta and resulting_quantity, so the snapshot
  can always be replayed from the log
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from core.dates import as_date
from core.db import service_call
from core.exceptions import NotFoundError, ValidationError
from core.money import money, to_int
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from products.models import Product

logger = logging.getLogger(__name__)

TransactionType = InventoryTransaction.TransactionType


def resolve_product(*, company, product) -> Product:
    if product in (None, ""):
        raise ValidationError("product is required")

    if not isinstance(product, Product):
        try:
            product = Product.objects.select_related("category").get(pk=product)
        except (Product.DoesNotExist, DjangoValidationError, ValueError, TypeError) as exc:
            raise NotFoundError(f"Product {product} not found") from exc

    if product.company_id != company.pk:
        raise ValidationError(f"Product {product.sku} does not belong to this company")
    return product


def resolve_warehouse(*, company, warehouse) -> Warehouse:
    if warehouse in (None, ""):
        raise ValidationError("warehouse is required")

    if not isinstance(warehouse, Warehouse):
        try:
            warehouse = Warehouse.objects.get(pk=warehouse)
        except (Warehouse.DoesNotExist, DjangoValidationError, ValueError, TypeError) as exc:
            raise NotFoundError(f"Warehouse {warehouse} not found") from exc

    if warehouse.company_id != company.pk:
        raise ValidationError(
            f"Warehouse {warehouse.warehouse_code} does not belong to this company"
        )
    if not warehouse.is_active:
        raise ValidationError(f"Warehouse {warehouse.warehouse_code} is inactive")
    return warehouse


def to_quantity(value, *, transaction_type: str) -> int:
    qty = to_int(value, field_name="quantity")

    if transaction_type == TransactionType.ADJUSTMENT:
        if qty < 0:
            raise ValidationError("Adjustment quantity cannot be negative")
    elif qty <= 0:
        raise ValidationError("quantity must be greater than zero")

    return qty


def lock_record(*, company, product: Product, warehouse: Warehouse) -> InventoryRecord:
    record, created = InventoryRecord.objects.select_for_update().get_or_create(
        product=product,
        warehouse=warehouse,
        defaults={"company": company, "quantity": 0, "reserved_quantity": 0},
    )
    if created:
        logger.debug(
            "Inventory record created",
            extra={"product_id": str(product.pk), "warehouse_id": str(warehouse.pk)},
        )
    return record


def next_quantity(current: int, *, transaction_type: str, quantity: int) -> int:
    if transaction_type == TransactionType.IN:
        return current + quantity
    if transaction_type in (TransactionType.OUT, TransactionType.TRANSFER):
        return current - quantity
    if transaction_type == TransactionType.ADJUSTMENT:
        return quantity
    raise ValidationError(f"Invalid transaction_type {transaction_type!r}")


def apply_transaction(
    *,
    company,
    product: Product,
    warehouse: Warehouse,
    transaction_type: str,
    quantity: int,
    unit_cost=None,
    reference_type=None,
    reference_id=None,
    batch_number: str = "",
    expiry_date=None,
    notes: str = "",
    created_by: str = "",
    transaction_date=None,
) -> InventoryTransaction:
    """
    Lock the record, apply the change, append the log row.

    Inputs are assumed resolved and validated; must run inside the caller's
    transaction.
    """
    record = lock_record(company=company, product=product, warehouse=warehouse)

    previous = int(record.quantity or 0)
    resulting = next_quantity(previous, transaction_type=transaction_type, quantity=quantity)

    record.quantity = resulting
    record.save(update_fields=["quantity", "last_updated"])

    tx = InventoryTransaction.objects.create(
        company=company,
        product=product,
        warehouse=warehouse,
        transaction_type=transaction_type,
        quantity=quantity,
        quantity_delta=resulting - previous,
        resulting_quantity=resulting,
        unit_cost=unit_cost,
        reference_type=reference_type or "",
        reference_id=str(reference_id or ""),
        batch_number=(batch_number or "").strip(),
        expiry_date=expiry_date,
        notes=(notes or "").strip(),
        created_by=created_by or "",
        transaction_date=transaction_date or timezone.localdate(),
    )

    logger.info(
        "Inventory transaction recorded",
        extra={
            "company_id": str(company.pk),
            "transaction_id": str(tx.pk),
            "product_id": str(product.pk),
            "warehouse_id": str(warehouse.pk),
            "transaction_type": transaction_type,
            "quantity_delta": tx.quantity_delta,
            "resulting_quantity": resulting,
        },
    )
    return tx


@service_call("create inventory transaction")
@transaction.atomic
def create_inventory_transaction(
    *,
    company,
    product,
    warehouse,
    transaction_type: str,
    quantity,
    unit_cost=None,
    reference_type=None,
    reference_id=None,
    batch_number: str = "",
    expiry_date=None,
    notes: str = "",
    created_by: str = "",
) -> InventoryTransaction:
    if company is None:
        raise ValidationError("company is required")

    transaction_type = str(transaction_type or "").strip().lower()
    if transaction_type not in TransactionType.values:
        raise ValidationError(
            f"Invalid transaction_type {transaction_type!r}. "
            f"Expected one of: {', '.join(TransactionType.values)}"
        )

    qty = to_quantity(quantity, transaction_type=transaction_type)
    product = resolve_product(company=company, product=product)
    warehouse = resolve_warehouse(company=company, warehouse=warehouse)

    if unit_cost not in (None, ""):
        unit_cost = money(unit_cost, field_name="unit_cost")
        if unit_cost < 0:
            raise ValidationError("unit_cost cannot be negative")
    else:
        unit_cost = None

    return apply_transaction(
        company=company,
        product=product,
        warehouse=warehouse,
        transaction_type=transaction_type,
        quantity=qty,
        unit_cost=unit_cost,
        reference_type=reference_type,
        reference_id=reference_id,
        batch_number=batch_number,
        expiry_date=as_date(expiry_date, field_name="expiry_date", required=False),
        notes=notes,
        created_by=created_by,
    )
