# inventory/models/warehouse.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company


class Warehouse(models.Model):
    """
    Physical or logical stock location owned by a company.

    Warehouses are soft-deleted (is_active=False) and only when empty.
    """

    class WarehouseType(models.TextChoices):
        MAIN = "main", "Main"
        BRANCH = "branch", "Branch"
        VIRTUAL = "virtual", "Virtual"
        CONSIGNMENT = "consignment", "Consignment"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="warehouses",
    )

    warehouse_code = models.CharField(max_length=32)
    name = models.CharField(max_length=255)

    address = models.JSONField(default=dict, blank=True)

    manager_name = models.CharField(max_length=255, blank=True, default="")
    contact_phone = models.CharField(max_length=32, blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")

    capacity = models.PositiveIntegerField(null=True, blank=True)

    warehouse_type = models.CharField(
        max_length=16,
        choices=WarehouseType.choices,
        default=WarehouseType.MAIN,
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "warehouse_code"],
                name="uniq_warehouse_company_code",
            )
        ]

    def __str__(self):
        return f"{self.name} ({self.warehouse_code})"

    def clean(self):
        self.warehouse_code = (self.warehouse_code or "").strip().upper()
        self.name = (self.name or "").strip()

        if not self.warehouse_code:
            raise ValidationError("warehouse_code is required")
        if not self.name:
            raise ValidationError("Warehouse name is required")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
