# accounting/services/balance_service.py

"""
BALANCE & REPORTING SERVICE (AUTHORITATIVE)

Read-only ledger aggregation helpers.

RULES:
- READ-ONLY: no writes, ever
- Two sources of a balance:
  * Account.current_balance (running, maintained by posting)
  * JournalLineItem aggregation (recomputed from the ledger)
- Only entries that were POSTED count (status posted or reversed: a reversed
  entry stays on the books and its reversal offsets it)
- Accounting timeline uses JournalEntry.entry_date
- Company-aware: never mix companies
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.db.models import Case, F, Sum, When
from django.db.models.functions import Coalesce

from accounting.models import Account, JournalEntry, JournalLineItem
from core.dates import as_date
from core.exceptions import ValidationError
from core.money import ZERO, q2, to_major_number, to_minor_int

BOOKED_STATUSES = (JournalEntry.Status.POSTED, JournalEntry.Status.REVERSED)


def normal_balance(account_type: str, *, debit: Decimal, credit: Decimal) -> Decimal:
    """
    Balance rule:
    - Assets & Expenses → Debit balance  (debits - credits)
    - Liabilities, Equity & Revenue → Credit balance (credits - debits)
    """
    if account_type in Account.DEBIT_NORMAL_TYPES:
        return q2(debit - credit)
    return q2(credit - debit)


def ledger_totals(
    *,
    company,
    date_from: date | None = None,
    date_to: date | None = None,
) -> dict:
    """Return {account_id: (debit_total, credit_total)} over booked lines."""
    if company is None:
        raise ValidationError("company is required")

    qs = JournalLineItem.objects.filter(
        journal_entry__company=company,
        journal_entry__status__in=BOOKED_STATUSES,
    )
    if date_from is not None:
        qs = qs.filter(journal_entry__entry_date__gte=date_from)
    if date_to is not None:
        qs = qs.filter(journal_entry__entry_date__lte=date_to)

    rows = qs.values("account_id").annotate(
        debit_total=Coalesce(
            Sum(Case(When(side=JournalLineItem.DEBIT, then=F("amount")))),
            Decimal("0.00"),
        ),
        credit_total=Coalesce(
            Sum(Case(When(side=JournalLineItem.CREDIT, then=F("amount")))),
            Decimal("0.00"),
        ),
    )

    return {r["account_id"]: (q2(r["debit_total"]), q2(r["credit_total"])) for r in rows}


def account_balances(
    *,
    company,
    date_from=None,
    date_to=None,
) -> list[tuple[Account, Decimal]]:
    """
    [(account, normal-orientation balance)] for every account of the company.

    No dates  -> Account.current_balance
    Any date  -> aggregation of booked lines inside [date_from, date_to]
    """
    date_from = as_date(date_from, field_name="date_from", required=False)
    date_to = as_date(date_to, field_name="date_to", required=False)

    if date_from and date_to and date_from > date_to:
        raise ValidationError("date_from cannot be after date_to")

    accounts = list(Account.objects.filter(company=company).order_by("code", "pk"))

    if date_from is None and date_to is None:
        return [(acc, q2(acc.current_balance)) for acc in accounts]

    totals = ledger_totals(company=company, date_from=date_from, date_to=date_to)
    return [
        (
            acc,
            normal_balance(
                acc.account_type,
                debit=totals.get(acc.pk, (ZERO, ZERO))[0],
                credit=totals.get(acc.pk, (ZERO, ZERO))[1],
            ),
        )
        for acc in accounts
    ]


def account_row(account: Account, balance: Decimal) -> dict:
    return {
        "account_id": account.pk,
        "account_code": account.code,
        "account_name": account.name,
        "account_type": account.account_type,
        "subtype": account.subtype,
        "balance": to_major_number(balance),
        "balance_minor": to_minor_int(balance),
    }


def verify_account_balances(*, company) -> dict:
    """
    Recompute every account's balance from booked lines and compare it with the
    running current_balance.

    Returns {"checked", "drift": [...], "ok"}; drift rows carry both values.
    """
    totals = ledger_totals(company=company)

    drift = []
    accounts = Account.objects.filter(company=company).order_by("code", "pk")
    for acc in accounts:
        debit, credit = totals.get(acc.pk, (ZERO, ZERO))
        expected = normal_balance(acc.account_type, debit=debit, credit=credit)
        actual = q2(acc.current_balance)

        if to_minor_int(expected) != to_minor_int(actual):
            drift.append(
                {
                    "account_id": acc.pk,
                    "account_code": acc.code,
                    "account_name": acc.name,
                    "current_balance": to_major_number(actual),
                    "ledger_balance": to_major_number(expected),
                    "difference": to_major_number(actual - expected),
                }
            )

    return {
        "checked": accounts.count(),
        "drift": drift,
        "ok": not drift,
    }
