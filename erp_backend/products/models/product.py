# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company

from .category import Category


class Product(models.Model):
    """
    Represents a stocked product.

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock
    - Stock lives in inventory.InventoryRecord (one row per warehouse)
    - Every stock change is an inventory.InventoryTransaction

    Pricing:
    - cost_price values stock (valuation + movement reports)
    - unit_price is the default selling price
    - min_stock_level drives low-stock reporting
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="products",
    )

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    sku = models.CharField(max_length=128, db_index=True)
    name = models.CharField(max_length=255, db_index=True)

    cost_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    min_stock_level = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["company", "name"], name="product_company_name_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "sku"],
                name="uniq_product_company_sku",
            )
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        self.sku = (self.sku or "").strip().upper()
        self.name = (self.name or "").strip()

        if not self.sku:
            raise ValidationError("SKU is required")
        if not self.name:
            raise ValidationError("Product name is required")

        if self.cost_price is None or Decimal(self.cost_price) < 0:
            raise ValidationError("cost_price cannot be negative")
        if self.unit_price is None or Decimal(self.unit_price) < 0:
            raise ValidationError("unit_price cannot be negative")

        if self.category_id and self.category.company_id != self.company_id:
            raise ValidationError("Category must belong to the same company")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
