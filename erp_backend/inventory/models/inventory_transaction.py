# inventory/models/inventory_transaction.py

"""
INVENTORY TRANSACTION LOG

Immutable inventory ledger entry.

GUARANTEES:
- Append-only (no updates, no deletes)
- quantity is what the caller entered:
    in / out / transfer -> positive magnitude
    adjustment          -> absolute target quantity (negative only when an
                           increase leaves an already negative record short)
- quantity_delta is the signed change actually applied to the record
- resulting_quantity is the record quantity right after this transaction
- transaction_date is the business date of the movement (today unless given);
  date-windowed reports bucket on it
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from companies.models import Company
from products.models import Product

from .warehouse import Warehouse


class InventoryTransaction(models.Model):
    class TransactionType(models.TextChoices):
        IN = "in", "Stock In"
        OUT = "out", "Stock Out"
        TRANSFER = "transfer", "Transfer Out"
        ADJUSTMENT = "adjustment", "Adjustment"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="inventory_transactions",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="inventory_transactions",
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.PROTECT,
        related_name="inventory_transactions",
    )

    transaction_type = models.CharField(max_length=16, choices=TransactionType.choices)

    quantity = models.IntegerField()
    quantity_delta = models.IntegerField()
    resulting_quantity = models.IntegerField()

    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    reference_type = models.CharField(max_length=50, blank=True, default="")
    reference_id = models.CharField(max_length=100, blank=True, default="")

    batch_number = models.CharField(max_length=100, blank=True, default="")
    expiry_date = models.DateField(null=True, blank=True)

    notes = models.TextField(blank=True, default="")
    created_by = models.CharField(max_length=150, blank=True, default="")

    transaction_date = models.DateField(default=timezone.localdate)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["company", "created_at"], name="invtx_company_created_idx"),
            models.Index(fields=["company", "transaction_date"], name="invtx_company_date_idx"),
            models.Index(fields=["product", "warehouse", "created_at"], name="invtx_pair_created_idx"),
            models.Index(fields=["transaction_type"], name="invtx_type_idx"),
            models.Index(fields=["reference_type", "reference_id"], name="invtx_reference_idx"),
        ]

    def clean(self):
        if self.transaction_type not in self.TransactionType.values:
            raise ValidationError("Invalid transaction_type")

        if self.transaction_type != self.TransactionType.ADJUSTMENT and (self.quantity or 0) <= 0:
            raise ValidationError("quantity must be greater than zero")

        if self.unit_cost is not None and self.unit_cost < 0:
            raise ValidationError("unit_cost cannot be negative")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("InventoryTransaction records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "InventoryTransaction records are immutable and cannot be deleted"
        )

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} | {self.transaction_type} | {self.quantity}"
