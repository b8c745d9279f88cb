# accounting/models/journal_line.py

"""
======================================================
PATH: accounting/models/journal_line.py
======================================================
JOURNAL LINE ITEM MODEL

One debit OR one credit against a single account.

Guarantees:
- Immutable once created (no updates)
- Amount is always positive; direction is via side
  (a line can never be "both" or "neither")
- line_number is 1-based and unique within the entry
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from accounting.models.account import Account
from accounting.models.journal import JournalEntry


class JournalLineItem(models.Model):
    DEBIT = "debit"
    CREDIT = "credit"

    SIDES = [
        (DEBIT, "Debit"),
        (CREDIT, "Credit"),
    ]

    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name="line_items",
    )

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    description = models.CharField(max_length=255, blank=True, default="")

    side = models.CharField(max_length=6, choices=SIDES)

    amount = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text="Positive monetary value",
    )

    line_number = models.PositiveIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["journal_entry", "line_number"]
        verbose_name = "Journal Line Item"
        verbose_name_plural = "Journal Line Items"
        indexes = [
            models.Index(fields=["account"], name="jline_account_idx"),
            models.Index(fields=["account", "side"], name="jline_account_side_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["journal_entry", "line_number"],
                name="uniq_journal_line_number",
            ),
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="chk_journal_line_amount_gt_zero",
            ),
            models.CheckConstraint(
                condition=Q(side__in=["debit", "credit"]),
                name="chk_journal_line_side_valid",
            ),
        ]

    def __str__(self):
        return f"{self.side} {self.amount} → {self.account}"

    @property
    def debit_amount(self) -> Decimal:
        return self.amount if self.side == self.DEBIT else Decimal("0.00")

    @property
    def credit_amount(self) -> Decimal:
        return self.amount if self.side == self.CREDIT else Decimal("0.00")

    def clean(self):
        if self.side not in (self.DEBIT, self.CREDIT):
            raise ValidationError("Invalid side")

        if self.amount is None or self.amount <= 0:
            raise ValidationError("Line amount must be > 0")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalLineItem records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)
