# accounting/services/trial_balance_service.py

from __future__ import annotations

from decimal import Decimal

from django.utils import timezone

from accounting.models.account import Account
from accounting.services.balance_service import account_balances
from core.dates import as_date
from core.money import ZERO, q2, to_major_number, to_minor_int


def split_columns(account: Account, balance: Decimal) -> tuple[Decimal, Decimal]:
    """
    Place a normal-orientation balance into (debit, credit) columns.

    A positive balance sits on the account's normal side; a negative one flips.
    """
    if account.is_debit_normal:
        return (balance, ZERO) if balance >= 0 else (ZERO, -balance)
    return (ZERO, balance) if balance >= 0 else (-balance, ZERO)


class TrialBalanceService:
    """
    Trial Balance computation service.

    Guarantees:
    - Scopes to one company
    - Includes every account with a non-zero balance (inactive accounts too,
      otherwise their balance would silently unbalance the report)
    - as_of=None reads current_balance; as_of=date aggregates booked lines
      with entry_date <= as_of
    - Returns JSON-safe numeric values (no Decimals)
    """

    def __init__(self, balances=account_balances):
        self.balances = balances

    def generate(self, *, company, as_of=None):
        as_of = as_date(as_of, field_name="as_of", required=False)

        accounts_output = []
        total_debit = ZERO
        total_credit = ZERO

        for acc, balance in self.balances(company=company, date_to=as_of):
            if balance == ZERO:
                continue

            debit, credit = split_columns(acc, balance)

            accounts_output.append(
                {
                    "account_id": acc.pk,
                    "account_code": acc.code,
                    "account_name": acc.name,
                    "account_type": acc.account_type,
                    "debit": to_major_number(debit),
                    "credit": to_major_number(credit),
                    "debit_minor": to_minor_int(debit),
                    "credit_minor": to_minor_int(credit),
                }
            )

            total_debit += debit
            total_credit += credit

        total_debit = q2(total_debit)
        total_credit = q2(total_credit)

        balanced = to_minor_int(total_debit) == to_minor_int(total_credit)

        return {
            "as_of": (as_of or timezone.localdate()).isoformat(),
            "accounts": accounts_output,
            "totals": {
                "debit": to_major_number(total_debit),
                "credit": to_major_number(total_credit),
                "debit_minor": to_minor_int(total_debit),
                "credit_minor": to_minor_int(total_credit),
                "balanced": balanced,
            },
        }


def get_trial_balance(*, company, as_of=None) -> dict:
    return TrialBalanceService().generate(company=company, as_of=as_of)
