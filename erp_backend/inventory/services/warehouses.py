# inventory/services/warehouses.py

"""
WAREHOUSE SERVICE

- warehouse_code is unique per company (stored upper-case)
- deletion is a soft delete (is_active=False), refused while any inventory
  record in the warehouse still holds stock
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from core.db import service_call
from core.exceptions import NotFoundError, ValidationError
from inventory.models import InventoryRecord, Warehouse

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "name",
    "address",
    "manager_name",
    "contact_phone",
    "contact_email",
    "capacity",
    "warehouse_type",
    "is_active",
)


def get_warehouse(warehouse_id, *, company=None) -> Warehouse:
    qs = Warehouse.objects.all()
    if company is not None:
        qs = qs.filter(company=company)
    try:
        return qs.get(pk=warehouse_id)
    except (Warehouse.DoesNotExist, DjangoValidationError, ValueError, TypeError) as exc:
        raise NotFoundError(f"Warehouse {warehouse_id} not found") from exc


def get_warehouses(*, company, include_inactive: bool = False):
    qs = Warehouse.objects.filter(company=company)
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return qs.order_by("name")


@service_call("create warehouse")
@transaction.atomic
def create_warehouse(*, company, warehouse_code: str, name: str, **fields) -> Warehouse:
    if company is None:
        raise ValidationError("company is required")

    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown warehouse fields: {', '.join(sorted(unknown))}")

    code = (warehouse_code or "").strip().upper()
    if Warehouse.objects.filter(company=company, warehouse_code=code).exists():
        raise ValidationError(f"Warehouse code {code} already exists")

    try:
        with transaction.atomic():
            warehouse = Warehouse.objects.create(
                company=company,
                warehouse_code=code,
                name=name,
                **fields,
            )
    except IntegrityError as exc:
        raise ValidationError(f"Warehouse code {code} already exists") from exc

    logger.info(
        "Warehouse created",
        extra={"company_id": str(company.pk), "warehouse_id": str(warehouse.pk), "code": code},
    )
    return warehouse


@service_call("update warehouse")
@transaction.atomic
def update_warehouse(warehouse, **fields) -> Warehouse:
    warehouse_id = getattr(warehouse, "pk", warehouse)
    try:
        locked = Warehouse.objects.select_for_update().get(pk=warehouse_id)
    except Warehouse.DoesNotExist as exc:
        raise NotFoundError(f"Warehouse {warehouse_id} not found") from exc

    if "warehouse_code" in fields:
        incoming = str(fields.pop("warehouse_code") or "").strip().upper()
        if incoming != locked.warehouse_code:
            raise ValidationError("Warehouse warehouse_code cannot be changed")

    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown warehouse fields: {', '.join(sorted(unknown))}")

    if fields.get("is_active") is False and locked.is_active:
        _assert_empty(locked)

    for field, value in fields.items():
        setattr(locked, field, value)

    if fields:
        locked.save(update_fields=[*fields, "updated_at"])
        logger.info(
            "Warehouse updated",
            extra={"warehouse_id": str(locked.pk), "fields": sorted(fields)},
        )

    return locked


def _assert_empty(warehouse: Warehouse) -> None:
    if InventoryRecord.objects.filter(warehouse=warehouse, quantity__gt=0).exists():
        raise ValidationError(
            f"Cannot deactivate warehouse {warehouse.warehouse_code} while it still holds stock"
        )


@service_call("deactivate warehouse")
@transaction.atomic
def deactivate_warehouse(warehouse) -> Warehouse:
    warehouse_id = getattr(warehouse, "pk", warehouse)
    try:
        locked = Warehouse.objects.select_for_update().get(pk=warehouse_id)
    except Warehouse.DoesNotExist as exc:
        raise NotFoundError(f"Warehouse {warehouse_id} not found") from exc

    if not locked.is_active:
        return locked

    _assert_empty(locked)

    locked.is_active = False
    locked.save(update_fields=["is_active", "updated_at"])

    logger.info("Warehouse deactivated", extra={"warehouse_id": str(locked.pk)})
    return locked
