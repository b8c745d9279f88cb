# accounting/services/account_service.py

"""
CHART OF ACCOUNTS SERVICE

Responsibilities:
- Create accounts (with an optional opening balance)
- Update the mutable fields of an account
- Read the chart of accounts

Opening balances:
- A new account always starts at current_balance = 0
- A non-zero opening_balance is booked as a POSTED journal entry against the
  company's "Opening Balance Equity" account (auto-created on first use)
- After create_account returns, current_balance == opening_balance

No HTTP, no DRF serializers here.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounting.journal_lines import Credit, Debit
from accounting.models import Account
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.posting import post_journal_entry
from core.db import service_call
from core.exceptions import DuplicateAccountCode, NotFoundError, ValidationError
from core.money import ZERO, money

logger = logging.getLogger(__name__)

OPENING_BALANCE_REFERENCE_TYPE = "opening_balance"
OPENING_BALANCE_EQUITY_NAME = "Opening Balance Equity"

UPDATABLE_FIELDS = ("name", "subtype", "parent", "description", "is_active")
IMMUTABLE_FIELDS = ("code", "account_type", "company")


def _normalize_account_type(account_type) -> str:
    value = str(account_type or "").strip().lower()
    valid = {t for t, _ in Account.ACCOUNT_TYPES}
    if value not in valid:
        raise ValidationError(
            f"Invalid account_type {account_type!r}. Expected one of: {', '.join(sorted(valid))}"
        )
    return value


def _resolve_parent(*, company, parent) -> Account | None:
    if parent in (None, ""):
        return None

    if not isinstance(parent, Account):
        try:
            parent = Account.objects.get(pk=parent)
        except (Account.DoesNotExist, ValueError, TypeError) as exc:
            raise ValidationError(f"Parent account {parent} does not exist") from exc

    if parent.company_id != company.pk:
        raise ValidationError("Parent account must belong to the same company")

    return parent


def _active_code_taken(*, company, code: str, exclude_pk=None) -> bool:
    qs = Account.objects.filter(company=company, code=code, is_active=True)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


def get_account(account_id, *, company=None) -> Account:
    qs = Account.objects.select_related("company", "parent")
    if company is not None:
        qs = qs.filter(company=company)
    try:
        return qs.get(pk=account_id)
    except (Account.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Account {account_id} not found") from exc


def get_chart_of_accounts(*, company, include_inactive: bool = False):
    qs = Account.objects.filter(company=company).select_related("parent")
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return qs.order_by("code")


def ensure_opening_balance_equity_account(*, company) -> Account:
    code = settings.OPENING_BALANCE_EQUITY_CODE

    existing = Account.objects.filter(company=company, code=code, is_active=True).first()
    if existing is not None:
        if existing.account_type != Account.EQUITY:
            raise DuplicateAccountCode(
                f"Account code {code} is reserved for {OPENING_BALANCE_EQUITY_NAME} "
                f"but is held by a {existing.account_type} account",
                code=code,
            )
        return existing

    account = Account.objects.create(
        company=company,
        code=code,
        name=OPENING_BALANCE_EQUITY_NAME,
        account_type=Account.EQUITY,
        subtype="opening_balance_equity",
        description="System account balancing opening balances",
    )
    logger.info(
        "Opening balance equity account created",
        extra={"company_id": str(company.pk), "account_id": account.pk, "code": code},
    )
    return account


def post_opening_balance(*, account: Account, opening_balance, entry_date=None, created_by: str = ""):
    """
    Book an account's opening balance against Opening Balance Equity.

    Debit-normal accounts are debited (credit-normal credited) for a positive
    balance; a negative balance flips both sides. Returns the posted entry.
    """
    amount = money(opening_balance, field_name="opening_balance")
    if amount == ZERO:
        return None

    equity = ensure_opening_balance_equity_account(company=account.company)
    if equity.pk == account.pk:
        raise ValidationError("The opening balance equity account cannot carry an opening balance")

    magnitude = abs(amount)
    on_normal_side = (amount > 0) == account.is_debit_normal

    if on_normal_side:
        lines = [Debit(account, magnitude), Credit(equity, magnitude)]
    else:
        lines = [Credit(account, magnitude), Debit(equity, magnitude)]

    entry = create_journal_entry(
        company=account.company,
        entry_date=entry_date or timezone.localdate(),
        description=f"Opening balance - {account.code} {account.name}",
        line_items=lines,
        reference_type=OPENING_BALANCE_REFERENCE_TYPE,
        reference_id=str(account.pk),
        created_by=created_by,
    )
    return post_journal_entry(entry)


@service_call("create account")
@transaction.atomic
def create_account(
    *,
    company,
    code: str,
    name: str,
    account_type: str,
    subtype: str = "",
    opening_balance=0,
    parent=None,
    description: str = "",
    entry_date=None,
    created_by: str = "",
) -> Account:
    if company is None:
        raise ValidationError("company is required")

    code = (code or "").strip()
    name = (name or "").strip()
    if not code:
        raise ValidationError("Account code is required")
    if not name:
        raise ValidationError("Account name is required")

    account_type = _normalize_account_type(account_type)
    if code == settings.OPENING_BALANCE_EQUITY_CODE and account_type != Account.EQUITY:
        raise ValidationError(f"Account code {code} is reserved for {OPENING_BALANCE_EQUITY_NAME}")
    opening = money(opening_balance, field_name="opening_balance")
    parent = _resolve_parent(company=company, parent=parent)

    if _active_code_taken(company=company, code=code):
        raise DuplicateAccountCode(f"Account code {code} already exists", code=code)

    try:
        with transaction.atomic():
            account = Account.objects.create(
                company=company,
                code=code,
                name=name,
                account_type=account_type,
                subtype=(subtype or "").strip(),
                parent=parent,
                opening_balance=opening,
                current_balance=ZERO,
                description=(description or "").strip(),
            )
    except IntegrityError as exc:
        if _active_code_taken(company=company, code=code):
            raise DuplicateAccountCode(f"Account code {code} already exists", code=code) from exc
        raise

    logger.info(
        "Account created",
        extra={
            "company_id": str(company.pk),
            "account_id": account.pk,
            "code": account.code,
            "account_type": account.account_type,
        },
    )

    if opening != ZERO:
        post_opening_balance(
            account=account,
            opening_balance=opening,
            entry_date=entry_date,
            created_by=created_by,
        )
        account.refresh_from_db()

    return account


@service_call("update account")
@transaction.atomic
def update_account(account, **fields) -> Account:
    """
    Update name / subtype / parent / description / is_active.

    code and account_type are immutable once created; passing a different value
    is a ValidationError.
    """
    account_id = account.pk if isinstance(account, Account) else account
    try:
        locked = Account.objects.select_for_update().get(pk=account_id)
    except (Account.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Account {account_id} not found") from exc

    for field in IMMUTABLE_FIELDS:
        if field not in fields:
            continue
        current = getattr(locked, f"{field}_id" if field == "company" else field)
        incoming = fields[field]
        if field == "company":
            incoming = getattr(incoming, "pk", incoming)
        elif field == "account_type":
            incoming = str(incoming or "").strip().lower()
        else:
            incoming = str(incoming or "").strip()
        if incoming != current:
            raise ValidationError(f"Account {field} cannot be changed")

    unknown = set(fields) - set(UPDATABLE_FIELDS) - set(IMMUTABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown account fields: {', '.join(sorted(unknown))}")

    changed = []

    if "name" in fields:
        name = (fields["name"] or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        locked.name = name
        changed.append("name")

    if "subtype" in fields:
        locked.subtype = (fields["subtype"] or "").strip()
        changed.append("subtype")

    if "description" in fields:
        locked.description = (fields["description"] or "").strip()
        changed.append("description")

    if "parent" in fields:
        parent = _resolve_parent(company=locked.company, parent=fields["parent"])
        if parent is not None and parent.pk == locked.pk:
            raise ValidationError("An account cannot be its own parent")
        locked.parent = parent
        changed.append("parent")

    if "is_active" in fields:
        is_active = bool(fields["is_active"])
        if is_active and not locked.is_active:
            if _active_code_taken(company=locked.company, code=locked.code, exclude_pk=locked.pk):
                raise DuplicateAccountCode(
                    f"Account code {locked.code} already exists",
                    code=locked.code,
                )
        locked.is_active = is_active
        changed.append("is_active")

    if changed:
        locked.save(update_fields=[*changed, "updated_at"])
        logger.info(
            "Account updated",
            extra={"account_id": locked.pk, "fields": changed},
        )

    return locked
