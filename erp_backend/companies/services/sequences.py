# companies/services/sequences.py

"""
ATOMIC DOCUMENT NUMBERING

Replaces "count existing rows + 1" numbering with a row-locked counter so two
concurrent callers can never receive the same number.

Must be called inside the caller's transaction: if the caller rolls back, the
number is released with it (no gaps from failed writes).
"""

from __future__ import annotations

from django.conf import settings
from django.db import transaction

from companies.models import DocumentSequence
from core.exceptions import ValidationError


def format_document_number(prefix: str, value: int, *, padding: int | None = None) -> str:
    width = padding if padding is not None else settings.DOCUMENT_NUMBER_PADDING
    return f"{prefix}{str(value).zfill(width)}"


@transaction.atomic
def next_sequence_value(*, company, key: str) -> int:
    if company is None:
        raise ValidationError("company is required")

    key = (key or "").strip()
    if not key:
        raise ValidationError("sequence key is required")

    seq, _ = DocumentSequence.objects.select_for_update().get_or_create(
        company=company,
        key=key,
    )
    seq.last_value += 1
    seq.save(update_fields=["last_value", "updated_at"])
    return seq.last_value


def next_document_number(*, company, key: str, prefix: str) -> str:
    return format_document_number(prefix, next_sequence_value(company=company, key=key))
