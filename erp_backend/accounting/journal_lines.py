# accounting/journal_lines.py

"""
PATH: accounting/journal_lines.py

JOURNAL LINE DOMAIN (FRAMEWORK-AGNOSTIC)

Purpose:
- One authoritative normalization layer for journal entry lines.
- Used by BOTH:
  - DRF serializer payloads (dicts with debit_amount / credit_amount)
  - service callers (Debit(...) / Credit(...) values)

Rules:
- A line is EITHER a debit OR a credit, never both, never neither
- Amount is Money (2dp) and strictly positive
- account is an Account instance or an account id (resolved by the service)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Iterable

from core.exceptions import ValidationError
from core.money import ZERO, money

DEBIT = "debit"
CREDIT = "credit"


@dataclass(frozen=True)
class Debit:
    account: object
    amount: Decimal
    description: str = ""

    side: ClassVar[str] = DEBIT

    @property
    def debit_amount(self) -> Decimal:
        return self.amount

    @property
    def credit_amount(self) -> Decimal:
        return ZERO

    def swapped(self) -> "Credit":
        return Credit(self.account, self.amount, self.description)


@dataclass(frozen=True)
class Credit:
    account: object
    amount: Decimal
    description: str = ""

    side: ClassVar[str] = CREDIT

    @property
    def debit_amount(self) -> Decimal:
        return ZERO

    @property
    def credit_amount(self) -> Decimal:
        return self.amount

    def swapped(self) -> Debit:
        return Debit(self.account, self.amount, self.description)


def line_for_side(side: str, account, amount, description: str = ""):
    if side == DEBIT:
        return Debit(account, amount, description)
    if side == CREDIT:
        return Credit(account, amount, description)
    raise ValidationError(f"Invalid side: {side!r}")


def _account_ref(raw: Mapping, index: int):
    account = raw.get("account")
    if account is None:
        account = raw.get("account_id")
    if account is None or account == "":
        raise ValidationError(f"Line {index}: account is required")
    return account


def normalize_line(raw, *, index: int):
    """
    Return a Debit/Credit with a validated 2dp positive amount.

    index is 1-based and only used in error messages.
    """
    if isinstance(raw, (Debit, Credit)):
        amount = money(raw.amount, field_name=f"line {index} amount")
        if amount <= 0:
            raise ValidationError(f"Line {index}: amount must be > 0")
        if raw.account is None:
            raise ValidationError(f"Line {index}: account is required")
        return line_for_side(raw.side, raw.account, amount, (raw.description or "").strip())

    if not isinstance(raw, Mapping):
        raise ValidationError(f"Line {index}: must be Debit, Credit or a mapping")

    account = _account_ref(raw, index)
    debit = money(raw.get("debit_amount", raw.get("debit")), field_name=f"line {index} debit_amount")
    credit = money(raw.get("credit_amount", raw.get("credit")), field_name=f"line {index} credit_amount")
    description = str(raw.get("description") or "").strip()

    if debit < 0 or credit < 0:
        raise ValidationError(f"Line {index}: debit or credit cannot be negative")

    if debit > 0 and credit > 0:
        raise ValidationError(f"Line {index}: a line cannot have both debit and credit")

    if debit == 0 and credit == 0:
        raise ValidationError(f"Line {index}: a line must have either debit or credit")

    if debit > 0:
        return Debit(account, debit, description)
    return Credit(account, credit, description)


def normalize_lines(raw_lines: Iterable) -> list:
    if raw_lines is None:
        raise ValidationError("Journal entry must contain line items")

    lines = [normalize_line(raw, index=i) for i, raw in enumerate(raw_lines, start=1)]

    if len(lines) < 2:
        raise ValidationError("Journal entry must contain at least two line items")

    return lines


def totals(lines: Iterable) -> tuple[Decimal, Decimal]:
    total_debit = ZERO
    total_credit = ZERO
    for line in lines:
        total_debit += line.debit_amount
        total_credit += line.credit_amount
    return total_debit, total_credit
