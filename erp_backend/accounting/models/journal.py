# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Represents a single accounting transaction (journal header).

Lifecycle (linear):
    draft -> posted -> reversed

Guarantees:
- entry_number is unique per company (JE000001, ...)
- posted_at is set only when the entry is posted
- Posted / reversed entries can never be deleted
- totals are computed by the service from the line items
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from companies.models import Company


class JournalEntry(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        POSTED = "posted", "Posted"
        REVERSED = "reversed", "Reversed"

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="journal_entries",
    )

    entry_number = models.CharField(max_length=32)

    entry_date = models.DateField()

    reference_type = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text="Origin of the entry (opening_balance, reversal, invoice, ...)",
    )
    reference_id = models.CharField(max_length=100, blank=True, default="")

    description = models.TextField(help_text="Narrative description of the journal entry")

    total_debit = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))
    total_credit = models.DecimalField(max_digits=16, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.DRAFT,
    )

    created_by = models.CharField(max_length=150, blank=True, default="")

    posted_at = models.DateTimeField(null=True, blank=True)

    reversed_by = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reversal_of",
        help_text="Reversing entry (set when this entry is reversed)",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-entry_date", "-created_at"]
        indexes = [
            models.Index(fields=["company", "entry_date"], name="je_company_date_idx"),
            models.Index(fields=["company", "status"], name="je_company_status_idx"),
            models.Index(fields=["reference_type", "reference_id"], name="je_reference_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "entry_number"],
                name="uniq_journal_entry_company_number",
            )
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.entry_number} – {self.entry_date} ({self.status})"

    @property
    def is_draft(self) -> bool:
        return self.status == self.Status.DRAFT

    @property
    def is_posted(self) -> bool:
        return self.status == self.Status.POSTED

    def clean(self):
        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError("Journal entry description is required")

        self.reference_type = (self.reference_type or "").strip()
        self.reference_id = str(self.reference_id or "").strip()

        if self.posted_at is not None and self.status == self.Status.DRAFT:
            raise ValidationError("Draft journal entries cannot carry posted_at")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if self.status != self.Status.DRAFT:
            raise ValidationError("Posted journal entries cannot be deleted")
        return super().delete(*args, **kwargs)
