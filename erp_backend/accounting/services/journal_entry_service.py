# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (LEDGER ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalLineItem
- Enforce debit == credit (within LEDGER_BALANCE_TOLERANCE)
- Allocate entry numbers (JE000001, ...)

Posting and reversal live in accounting.services.posting; both call back into
create_journal_entry, so every entry in the system passes through here.

Entries are created as DRAFT. Balances move only when an entry is posted.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from accounting.journal_lines import normalize_lines, totals
from accounting.models import Account, JournalEntry, JournalLineItem
from companies.services import next_document_number
from core.dates import as_date
from core.db import service_call
from core.exceptions import NotFoundError, UnbalancedEntryError, ValidationError
from core.money import q2

logger = logging.getLogger(__name__)

JOURNAL_SEQUENCE_KEY = "journal_entry"


def _tolerance() -> Decimal:
    return Decimal(str(settings.LEDGER_BALANCE_TOLERANCE))


def _account_pk(ref, *, index: int) -> int:
    if isinstance(ref, Account):
        return ref.pk
    try:
        return int(ref)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Line {index}: invalid account id {ref!r}") from exc


def _resolve_accounts(*, company, lines: list, allow_inactive: bool = False) -> list:
    """
    Swap every line's account reference for the Account row.

    Rules:
    - Account must exist
    - Account must belong to the entry's company
    - Account must be active, unless allow_inactive (reversals of entries
      already booked against it)
    """
    pks = [_account_pk(line.account, index=i) for i, line in enumerate(lines, start=1)]
    accounts = Account.objects.in_bulk(set(pks))

    resolved = []
    for i, (line, pk) in enumerate(zip(lines, pks), start=1):
        account = accounts.get(pk)
        if account is None:
            raise ValidationError(f"Line {i}: account {pk} does not exist")
        if account.company_id != company.pk:
            raise ValidationError(f"Line {i}: account {account.code} belongs to another company")
        if not account.is_active and not allow_inactive:
            raise ValidationError(f"Line {i}: account {account.code} is inactive")

        resolved.append(type(line)(account, line.amount, line.description))

    return resolved


def assert_balanced(total_debit: Decimal, total_credit: Decimal) -> None:
    difference = abs(q2(total_debit) - q2(total_credit))
    if difference > _tolerance():
        raise UnbalancedEntryError(
            f"Journal entry not balanced: debits={q2(total_debit)} credits={q2(total_credit)}",
            total_debit=q2(total_debit),
            total_credit=q2(total_credit),
        )


@service_call("create journal entry")
@transaction.atomic
def create_journal_entry(
    *,
    company,
    entry_date,
    description: str,
    line_items,
    reference_type: str | None = None,
    reference_id: str | None = None,
    created_by: str = "",
    allow_inactive_accounts: bool = False,
) -> JournalEntry:
    if company is None:
        raise ValidationError("company is required")

    description = (description or "").strip()
    if not description:
        raise ValidationError("Journal entry description is required")

    entry_date = as_date(entry_date, field_name="entry_date")

    lines = normalize_lines(line_items)
    total_debit, total_credit = totals(lines)

    # Balance is checked before anything touches the database.
    assert_balanced(total_debit, total_credit)

    lines = _resolve_accounts(company=company, lines=lines, allow_inactive=allow_inactive_accounts)

    entry_number = next_document_number(
        company=company,
        key=JOURNAL_SEQUENCE_KEY,
        prefix=settings.JOURNAL_ENTRY_PREFIX,
    )

    entry = JournalEntry.objects.create(
        company=company,
        entry_number=entry_number,
        entry_date=entry_date,
        reference_type=(reference_type or "").strip(),
        reference_id=str(reference_id or "").strip(),
        description=description,
        total_debit=q2(total_debit),
        total_credit=q2(total_credit),
        status=JournalEntry.Status.DRAFT,
        created_by=(created_by or "").strip(),
    )

    JournalLineItem.objects.bulk_create(
        [
            JournalLineItem(
                journal_entry=entry,
                account=line.account,
                description=line.description[:255],
                side=line.side,
                amount=line.amount,
                line_number=number,
            )
            for number, line in enumerate(lines, start=1)
        ]
    )

    logger.info(
        "Journal entry created",
        extra={
            "company_id": str(company.pk),
            "entry_id": entry.pk,
            "entry_number": entry.entry_number,
            "total_debit": str(entry.total_debit),
            "line_count": len(lines),
        },
    )

    return get_journal_entry(entry.pk)


def _with_lines(qs):
    return qs.select_related("company", "reversed_by").prefetch_related("line_items__account")


def get_journal_entry(entry_id, *, company=None) -> JournalEntry:
    qs = _with_lines(JournalEntry.objects.all())
    if company is not None:
        qs = qs.filter(company=company)

    try:
        return qs.get(pk=entry_id)
    except (JournalEntry.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Journal entry {entry_id} not found") from exc


def get_journal_entries(
    *,
    company,
    date_from=None,
    date_to=None,
    status: str | None = None,
    account=None,
    reference_type: str | None = None,
):
    qs = _with_lines(JournalEntry.objects.filter(company=company))

    date_from = as_date(date_from, field_name="date_from", required=False)
    date_to = as_date(date_to, field_name="date_to", required=False)

    if date_from:
        qs = qs.filter(entry_date__gte=date_from)
    if date_to:
        qs = qs.filter(entry_date__lte=date_to)

    if status:
        if status not in JournalEntry.Status.values:
            raise ValidationError(f"Invalid status: {status!r}")
        qs = qs.filter(status=status)

    if account is not None:
        qs = qs.filter(line_items__account=account).distinct()

    if reference_type:
        qs = qs.filter(reference_type=reference_type)

    return qs.order_by("-entry_date", "-created_at")
