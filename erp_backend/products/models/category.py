# products/models/category.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company


class Category(models.Model):
    """
    Product category (per company). Used to group stock valuation.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="product_categories",
    )

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"
        constraints = [
            models.UniqueConstraint(
                fields=["company", "name"],
                name="uniq_category_company_name",
            )
        ]

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError("Category name is required")
