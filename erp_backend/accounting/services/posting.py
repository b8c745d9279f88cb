# accounting/services/posting.py

"""
======================================================
PATH: accounting/services/posting.py
======================================================
POSTING + REVERSAL

The ONLY code path that changes Account.current_balance.

Rules:
- draft -> posted applies every line to its account
  (asset/expense: += debit - credit, others: += credit - debit)
- posted -> reversed never edits the original lines: it creates and posts a
  mirror entry with every side swapped
- Each call is all-or-nothing: the entry row and every touched account row are
  locked and written inside one transaction
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from accounting.journal_lines import line_for_side
from accounting.models import Account, JournalEntry
from accounting.services.journal_entry_service import create_journal_entry, get_journal_entry
from accounting.services.journal_lifecycle import validate_transition
from core.db import service_call
from core.exceptions import NotFoundError, ValidationError
from core.money import ZERO, q2

logger = logging.getLogger(__name__)

REVERSAL_REFERENCE_TYPE = "reversal"


def _lock_entry(entry) -> JournalEntry:
    entry_id = entry.pk if isinstance(entry, JournalEntry) else entry
    try:
        return JournalEntry.objects.select_for_update().get(pk=entry_id)
    except (JournalEntry.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Journal entry {entry_id} not found") from exc


def _apply_lines(entry: JournalEntry) -> None:
    lines = list(entry.line_items.order_by("line_number"))
    if not lines:
        raise ValidationError(f"Journal entry {entry.entry_number} has no line items")

    # Lock in pk order so two postings touching the same accounts cannot deadlock.
    accounts = {
        acc.pk: acc
        for acc in Account.objects.select_for_update()
        .filter(pk__in={line.account_id for line in lines})
        .order_by("pk")
    }

    for line in lines:
        account = accounts[line.account_id]
        change = account.balance_change(debit=line.debit_amount, credit=line.credit_amount)
        account.current_balance = q2((account.current_balance or ZERO) + change)

    for account in accounts.values():
        account.save(update_fields=["current_balance", "updated_at"])


@service_call("post journal entry")
@transaction.atomic
def post_journal_entry(entry) -> JournalEntry:
    locked = _lock_entry(entry)
    validate_transition(entry=locked, target_status=JournalEntry.Status.POSTED)

    _apply_lines(locked)

    locked.status = JournalEntry.Status.POSTED
    locked.posted_at = timezone.now()
    locked.save(update_fields=["status", "posted_at", "updated_at"])

    logger.info(
        "Journal entry posted",
        extra={
            "company_id": str(locked.company_id),
            "entry_id": locked.pk,
            "entry_number": locked.entry_number,
        },
    )

    return get_journal_entry(locked.pk)


@service_call("reverse journal entry")
@transaction.atomic
def reverse_journal_entry(entry, *, reverse_date, reason: str, created_by: str = "") -> JournalEntry:
    """
    Reverse a POSTED entry and return the (posted) reversing entry.

    The original moves to REVERSED and links to the reversal via reversed_by.
    """
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError("Reversal reason is required")

    original = _lock_entry(entry)
    validate_transition(entry=original, target_status=JournalEntry.Status.REVERSED)

    mirrored = [
        line_for_side(
            line.side,
            line.account,
            line.amount,
            f"Reversal: {line.description}".strip(),
        ).swapped()
        for line in original.line_items.select_related("account").order_by("line_number")
    ]

    reversal = create_journal_entry(
        company=original.company,
        entry_date=reverse_date,
        description=f"Reversal: {original.description} - {reason}",
        line_items=mirrored,
        reference_type=REVERSAL_REFERENCE_TYPE,
        reference_id=str(original.pk),
        created_by=created_by or original.created_by,
        allow_inactive_accounts=True,
    )
    reversal = post_journal_entry(reversal)

    original.status = JournalEntry.Status.REVERSED
    original.reversed_by = reversal
    original.save(update_fields=["status", "reversed_by", "updated_at"])

    logger.info(
        "Journal entry reversed",
        extra={
            "company_id": str(original.company_id),
            "entry_id": original.pk,
            "reversal_id": reversal.pk,
            "reason": reason,
        },
    )

    return reversal
