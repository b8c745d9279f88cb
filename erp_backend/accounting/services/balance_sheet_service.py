# accounting/services/balance_sheet_service.py

"""
BALANCE SHEET SERVICE

Pure accounting read service.

Responsibilities:
- Compute balances per account as at a given date
- Classify balances into Assets, Liabilities, Equity
- Split assets and liabilities into current / non-current by subtype
  (a subtype starting with "current" is current; "non_current_*" is not)
- Enforce accounting correctness (Assets = Liabilities + Equity)

Important:
- Revenue/Expense activity (not closed into equity) is represented as
  "Current Period Earnings" in Equity to keep the balance sheet correct.

Contract:
- API emits numeric JSON values (not strings)
- Provide both major-unit numbers (floats, 2dp) and minor-unit ints (exact)
"""

from __future__ import annotations

from django.utils import timezone

from accounting.models.account import Account
from accounting.services.balance_service import account_balances, account_row
from core.dates import as_date
from core.money import ZERO, q2, to_major_number, to_minor_int


def is_current_subtype(subtype: str | None) -> bool:
    return (subtype or "").strip().lower().startswith("current")


def _section(rows: list[tuple[Account, object]]) -> dict:
    current = [(a, b) for a, b in rows if is_current_subtype(a.subtype)]
    non_current = [(a, b) for a, b in rows if not is_current_subtype(a.subtype)]

    total_current = q2(sum((b for _, b in current), ZERO))
    total_non_current = q2(sum((b for _, b in non_current), ZERO))
    total = q2(total_current + total_non_current)

    return {
        "current": [account_row(a, b) for a, b in current],
        "non_current": [account_row(a, b) for a, b in non_current],
        "total_current": to_major_number(total_current),
        "total_non_current": to_major_number(total_non_current),
        "total": to_major_number(total),
        "total_minor": to_minor_int(total),
    }, total


def generate_balance_sheet(*, company, as_of=None) -> dict:
    as_of = as_date(as_of, field_name="as_of", required=False)

    by_type: dict[str, list] = {t: [] for t, _ in Account.ACCOUNT_TYPES}
    for acc, balance in account_balances(company=company, date_to=as_of):
        if balance == ZERO:
            continue
        by_type[acc.account_type].append((acc, balance))

    assets, total_assets = _section(by_type[Account.ASSET])
    liabilities, total_liabilities = _section(by_type[Account.LIABILITY])

    revenue = q2(sum((b for _, b in by_type[Account.REVENUE]), ZERO))
    expenses = q2(sum((b for _, b in by_type[Account.EXPENSE]), ZERO))
    current_period_earnings = q2(revenue - expenses)

    equity_accounts_total = q2(sum((b for _, b in by_type[Account.EQUITY]), ZERO))
    total_equity = q2(equity_accounts_total + current_period_earnings)

    liabilities_plus_equity = q2(total_liabilities + total_equity)
    balanced = to_minor_int(total_assets) == to_minor_int(liabilities_plus_equity)

    return {
        "as_of": (as_of or timezone.localdate()).isoformat(),
        "assets": assets,
        "liabilities": liabilities,
        "equity": {
            "accounts": [account_row(a, b) for a, b in by_type[Account.EQUITY]],
            "current_period_earnings": to_major_number(current_period_earnings),
            "current_period_earnings_minor": to_minor_int(current_period_earnings),
            "total": to_major_number(total_equity),
            "total_minor": to_minor_int(total_equity),
        },
        "totals": {
            "assets": to_major_number(total_assets),
            "liabilities": to_major_number(total_liabilities),
            "equity": to_major_number(total_equity),
            "liabilities_plus_equity": to_major_number(liabilities_plus_equity),
            "assets_minor": to_minor_int(total_assets),
            "liabilities_plus_equity_minor": to_minor_int(liabilities_plus_equity),
            "balanced": balanced,
        },
    }


def get_balance_sheet(*, company, as_of=None) -> dict:
    return generate_balance_sheet(company=company, as_of=as_of)
