# accounting/models/account.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from companies.models import Company


class Account(models.Model):
    """
    Represents a single account within a company's Chart of Accounts.

    Guarantees:
    - Account codes are unique per company among ACTIVE accounts
    - Code + name are normalized (trimmed)
    - Parent accounts belong to the same company

    Balance orientation:
    - current_balance is stored in the account's NORMAL orientation:
      debit-normal (asset, expense) grows with debits,
      credit-normal (liability, equity, revenue) grows with credits.
    - current_balance is service-managed: only posting changes it.
    """

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    ACCOUNT_TYPES = [
        (ASSET, "Asset"),
        (LIABILITY, "Liability"),
        (EQUITY, "Equity"),
        (REVENUE, "Revenue"),
        (EXPENSE, "Expense"),
    ]

    DEBIT_NORMAL_TYPES = frozenset({ASSET, EXPENSE})

    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        related_name="accounts",
    )

    code = models.CharField(max_length=20)
    name = models.CharField(max_length=150)

    account_type = models.CharField(
        max_length=20,
        choices=ACCOUNT_TYPES,
    )

    subtype = models.CharField(
        max_length=50,
        blank=True,
        default="",
        help_text="Free-form classification, e.g. current_asset, cogs, operating_expense",
    )

    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )

    is_active = models.BooleanField(default=True)

    opening_balance = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    current_balance = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Running balance in normal orientation (service-managed)",
    )

    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["company", "code"], name="acct_company_code_idx"),
            models.Index(fields=["company", "account_type"], name="acct_company_type_idx"),
            models.Index(fields=["is_active"], name="acct_is_active_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "code"],
                condition=Q(is_active=True),
                name="uniq_active_account_company_code",
            ),
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def is_debit_normal(self) -> bool:
        return self.account_type in self.DEBIT_NORMAL_TYPES

    @property
    def signed_balance(self) -> Decimal:
        """current_balance presented debit-positive (credit-normal balances negated)."""
        balance = self.current_balance or Decimal("0.00")
        return balance if self.is_debit_normal else -balance

    def balance_change(self, *, debit: Decimal, credit: Decimal) -> Decimal:
        """Effect of one debit/credit pair on current_balance."""
        if self.is_debit_normal:
            return debit - credit
        return credit - debit

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()
        self.subtype = (self.subtype or "").strip()

        if not self.code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")

        if self.parent_id:
            if self.pk and self.parent_id == self.pk:
                raise ValidationError("An account cannot be its own parent")
            if self.parent.company_id != self.company_id:
                raise ValidationError("Parent account must belong to the same company")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
