# inventory/services/reconciliation.py

"""
INVENTORY RECONCILIATION

InventoryRecord.quantity is a cache over the InventoryTransaction log.
Replaying the log (sum of quantity_delta per product/warehouse) must reproduce
it exactly. This job reports every pair where it does not and, with fix=True,
rewrites the snapshot from the log.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Sum

from core.db import service_call
from core.exceptions import ValidationError
from inventory.models import InventoryRecord, InventoryTransaction

logger = logging.getLogger(__name__)


def _replayed_quantities(company) -> dict:
    rows = (
        InventoryTransaction.objects.filter(company=company)
        .values("product_id", "warehouse_id")
        .annotate(total=Sum("quantity_delta"))
    )
    return {(r["product_id"], r["warehouse_id"]): int(r["total"] or 0) for r in rows}


@service_call("reconcile inventory")
@transaction.atomic
def reconcile_inventory(*, company, fix: bool = False) -> dict:
    """
    Returns {"checked", "drift": [...], "fixed", "ok"}.

    A drift row carries product_id, warehouse_id, recorded (None when the
    record is missing) and expected quantities.
    """
    if company is None:
        raise ValidationError("company is required")

    expected = _replayed_quantities(company)

    records_qs = InventoryRecord.objects.filter(company=company)
    if fix:
        records_qs = records_qs.select_for_update()
    records = {(r.product_id, r.warehouse_id): r for r in records_qs.order_by("pk")}

    drift = []
    pending = []
    for key in sorted(set(expected) | set(records), key=lambda k: (str(k[0]), str(k[1]))):
        record = records.get(key)
        recorded = record.quantity if record is not None else None
        want = expected.get(key, 0)

        if recorded == want or (recorded is None and want == 0):
            continue

        drift.append(
            {
                "product_id": str(key[0]),
                "warehouse_id": str(key[1]),
                "recorded": recorded,
                "expected": want,
            }
        )
        pending.append((key, record, want))

    fixed = 0
    if fix:
        for (product_id, warehouse_id), record, want in pending:
            if record is None:
                InventoryRecord.objects.create(
                    company=company,
                    product_id=product_id,
                    warehouse_id=warehouse_id,
                    quantity=want,
                    reserved_quantity=0,
                )
            else:
                record.quantity = want
                record.save(update_fields=["quantity", "last_updated"])
            fixed += 1

    if drift:
        logger.warning(
            "Inventory drift detected",
            extra={"company_id": str(company.pk), "pairs": len(drift), "fixed": fixed},
        )

    return {
        "checked": len(set(expected) | set(records)),
        "drift": drift,
        "fixed": fixed,
        "ok": not drift or fixed == len(drift),
    }
