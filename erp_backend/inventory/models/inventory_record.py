# inventory/models/inventory_record.py

"""
CURRENT INVENTORY (MATERIALIZED SNAPSHOT)

One row per (product, warehouse), created lazily by the first transaction.

GUARANTEES:
- quantity is service-managed (only inventory.services writes it)
- quantity may go negative ("out" has no sufficiency check)
- every change to quantity is mirrored by an InventoryTransaction whose
  resulting_quantity equals the new value
"""

from django.db import models

from companies.models import Company
from products.models import Product

from .warehouse import Warehouse


class InventoryRecord(models.Model):
    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="inventory_records",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="inventory_records",
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.PROTECT,
        related_name="inventory_records",
    )

    quantity = models.IntegerField(default=0)
    reserved_quantity = models.PositiveIntegerField(default=0)

    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-last_updated"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "warehouse"],
                name="uniq_inventory_product_warehouse",
            )
        ]
        indexes = [
            models.Index(fields=["company", "warehouse"], name="inv_company_warehouse_idx"),
            models.Index(fields=["company", "quantity"], name="inv_company_quantity_idx"),
        ]

    def __str__(self):
        return f"{self.product_id} @ {self.warehouse_id}: {self.quantity}"

    @property
    def available_quantity(self) -> int:
        return int(self.quantity or 0) - int(self.reserved_quantity or 0)
