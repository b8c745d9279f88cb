from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("asset", "Asset"),
                            ("liability", "Liability"),
                            ("equity", "Equity"),
                            ("revenue", "Revenue"),
                            ("expense", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "subtype",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Free-form classification, e.g. current_asset, cogs, operating_expense",
                        max_length=50,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("opening_balance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                (
                    "current_balance",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Running balance in normal orientation (service-managed)",
                        max_digits=16,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="companies.company",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="accounting.account",
                    ),
                ),
            ],
            options={
                "verbose_name": "Account",
                "verbose_name_plural": "Accounts",
                "ordering": ["code"],
                "indexes": [
                    models.Index(fields=["company", "code"], name="acct_company_code_idx"),
                    models.Index(fields=["company", "account_type"], name="acct_company_type_idx"),
                    models.Index(fields=["is_active"], name="acct_is_active_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_active", True)),
                        fields=("company", "code"),
                        name="uniq_active_account_company_code",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("code", ""), _negated=True),
                        name="chk_account_code_not_blank",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("name", ""), _negated=True),
                        name="chk_account_name_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("entry_number", models.CharField(max_length=32)),
                ("entry_date", models.DateField()),
                (
                    "reference_type",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Origin of the entry (opening_balance, reversal, invoice, ...)",
                        max_length=50,
                    ),
                ),
                ("reference_id", models.CharField(blank=True, default="", max_length=100)),
                ("description", models.TextField(help_text="Narrative description of the journal entry")),
                ("total_debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                ("total_credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=16)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("posted", "Posted"), ("reversed", "Reversed")],
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("posted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_entries",
                        to="companies.company",
                    ),
                ),
                (
                    "reversed_by",
                    models.ForeignKey(
                        blank=True,
                        help_text="Reversing entry (set when this entry is reversed)",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reversal_of",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-entry_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["company", "entry_date"], name="je_company_date_idx"),
                    models.Index(fields=["company", "status"], name="je_company_status_idx"),
                    models.Index(fields=["reference_type", "reference_id"], name="je_reference_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "entry_number"),
                        name="uniq_journal_entry_company_number",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLineItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("side", models.CharField(choices=[("debit", "Debit"), ("credit", "Credit")], max_length=6)),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Positive monetary value",
                        max_digits=16,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("line_number", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.account",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Line Item",
                "verbose_name_plural": "Journal Line Items",
                "ordering": ["journal_entry", "line_number"],
                "indexes": [
                    models.Index(fields=["account"], name="jline_account_idx"),
                    models.Index(fields=["account", "side"], name="jline_account_side_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("journal_entry", "line_number"),
                        name="uniq_journal_line_number",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="chk_journal_line_amount_gt_zero",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("side__in", ["debit", "credit"])),
                        name="chk_journal_line_side_valid",
                    ),
                ],
            },
        ),
    ]
