# companies/models/sequence.py

"""
DOCUMENT SEQUENCE

Per-company, per-document-type counter backing human-readable numbers
(JE000001, TRF000001, ...).

Rules:
- One row per (company, key)
- last_value is only advanced by companies.services.sequences (row-locked)
"""

from django.db import models

from companies.models.company import Company


class DocumentSequence(models.Model):
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="document_sequences",
    )

    key = models.CharField(max_length=32)

    last_value = models.PositiveBigIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["company", "key"],
                name="uniq_document_sequence_company_key",
            ),
        ]

    def __str__(self):
        return f"{self.company_id}:{self.key}={self.last_value}"
