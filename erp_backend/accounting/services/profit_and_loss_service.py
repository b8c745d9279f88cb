# accounting/services/profit_and_loss_service.py

"""
PROFIT & LOSS SERVICE

Expense classification by subtype:
- contains "cogs"      -> cost of goods sold
- contains "operating" -> operating expenses
- anything else        -> other expenses

gross_profit     = revenue - cogs
operating_profit = gross_profit - operating expenses
net_profit       = operating_profit - other expenses

No dates -> lifetime figures from current_balance.
With dates -> booked lines whose entry_date falls inside the period.
"""

from __future__ import annotations

from decimal import Decimal

from accounting.models.account import Account
from accounting.services.balance_service import account_balances, account_row
from core.dates import as_date
from core.money import ZERO, q2, to_major_number, to_minor_int


def _expense_bucket(subtype: str | None) -> str:
    subtype = (subtype or "").lower()
    if "cogs" in subtype:
        return "cogs"
    if "operating" in subtype:
        return "operating"
    return "other"


def _total(rows) -> Decimal:
    return q2(sum((b for _, b in rows), ZERO))


def generate_profit_and_loss(*, company, date_from=None, date_to=None) -> dict:
    date_from = as_date(date_from, field_name="date_from", required=False)
    date_to = as_date(date_to, field_name="date_to", required=False)

    revenue_rows = []
    buckets = {"cogs": [], "operating": [], "other": []}

    for acc, balance in account_balances(company=company, date_from=date_from, date_to=date_to):
        if balance == ZERO:
            continue
        if acc.account_type == Account.REVENUE:
            revenue_rows.append((acc, balance))
        elif acc.account_type == Account.EXPENSE:
            buckets[_expense_bucket(acc.subtype)].append((acc, balance))

    total_revenue = _total(revenue_rows)
    total_cogs = _total(buckets["cogs"])
    total_operating = _total(buckets["operating"])
    total_other = _total(buckets["other"])

    gross_profit = q2(total_revenue - total_cogs)
    operating_profit = q2(gross_profit - total_operating)
    net_profit = q2(operating_profit - total_other)

    return {
        "period": {
            "date_from": date_from.isoformat() if date_from else None,
            "date_to": date_to.isoformat() if date_to else None,
        },
        "revenue": [account_row(a, b) for a, b in revenue_rows],
        "cost_of_goods_sold": [account_row(a, b) for a, b in buckets["cogs"]],
        "operating_expenses": [account_row(a, b) for a, b in buckets["operating"]],
        "other_expenses": [account_row(a, b) for a, b in buckets["other"]],
        "totals": {
            "revenue": to_major_number(total_revenue),
            "cost_of_goods_sold": to_major_number(total_cogs),
            "operating_expenses": to_major_number(total_operating),
            "other_expenses": to_major_number(total_other),
            "gross_profit": to_major_number(gross_profit),
            "operating_profit": to_major_number(operating_profit),
            "net_profit": to_major_number(net_profit),
            "net_profit_minor": to_minor_int(net_profit),
        },
    }


def get_profit_loss_statement(*, company, date_from=None, date_to=None) -> dict:
    return generate_profit_and_loss(company=company, date_from=date_from, date_to=date_to)
