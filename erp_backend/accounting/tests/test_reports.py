# accounting/tests/test_reports.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.journal_lines import Credit, Debit
from accounting.models import Account
from accounting.services.account_service import create_account
from accounting.services.balance_service import verify_account_balances
from accounting.services.balance_sheet_service import get_balance_sheet
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.posting import post_journal_entry
from accounting.services.profit_and_loss_service import get_profit_loss_statement
from accounting.services.trial_balance_service import get_trial_balance
from companies.models import Company


class FinancialReportTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")

        def acc(code, name, account_type, subtype="", opening=0):
            return create_account(
                company=self.company,
                code=code,
                name=name,
                account_type=account_type,
                subtype=subtype,
                opening_balance=opening,
                entry_date=date(2024, 1, 1),
            )

        self.cash = acc("1000", "Cash", "asset", "current_asset", opening=1000)
        self.equipment = acc("1500", "Equipment", "asset", "non_current_asset")
        self.payable = acc("2100", "Accounts Payable", "liability", "current_liability")
        self.loan = acc("2500", "Bank Loan", "liability", "non_current_liability")
        self.sales = acc("4000", "Sales Revenue", "revenue", "sales")
        self.cogs = acc("5000", "Cost of Goods Sold", "expense", "cogs")
        self.rent = acc("6100", "Rent", "expense", "operating_expense")
        self.interest = acc("7000", "Interest", "expense", "finance")

        self._post(date(2024, 1, 10), "Buy equipment on loan", [Debit(self.equipment, 400), Credit(self.loan, 400)])
        self._post(date(2024, 2, 5), "Cash sale", [Debit(self.cash, 600), Credit(self.sales, 600)])
        self._post(date(2024, 2, 5), "Cost of sale", [Debit(self.cogs, 250), Credit(self.cash, 250)])
        self._post(date(2024, 2, 20), "Rent on credit", [Debit(self.rent, 100), Credit(self.payable, 100)])
        self._post(date(2024, 3, 1), "Loan interest", [Debit(self.interest, 20), Credit(self.cash, 20)])

    def _post(self, entry_date, description, lines):
        je = create_journal_entry(
            company=self.company,
            entry_date=entry_date,
            description=description,
            line_items=lines,
        )
        return post_journal_entry(je)

    def test_trial_balance_is_balanced(self):
        tb = get_trial_balance(company=self.company)

        self.assertTrue(tb["totals"]["balanced"])
        self.assertEqual(tb["totals"]["debit_minor"], tb["totals"]["credit_minor"])

        rows = {r["account_code"]: r for r in tb["accounts"]}
        self.assertEqual(rows["1000"]["debit"], 1330.0)
        self.assertEqual(rows["3000"]["credit"], 1000.0)
        self.assertEqual(rows["4000"]["credit"], 600.0)
        self.assertEqual(rows["2100"]["credit"], 100.0)

    def test_trial_balance_as_of_uses_entry_dates(self):
        tb = get_trial_balance(company=self.company, as_of=date(2024, 1, 31))
        rows = {r["account_code"]: r for r in tb["accounts"]}

        self.assertTrue(tb["totals"]["balanced"])
        self.assertEqual(rows["1000"]["debit"], 1000.0)
        self.assertNotIn("4000", rows)
        self.assertEqual(tb["as_of"], "2024-01-31")

    def test_negative_balance_moves_to_other_column(self):
        self._post(date(2024, 3, 5), "Overdraw", [Debit(self.rent, 2000), Credit(self.cash, 2000)])
        rows = {r["account_code"]: r for r in get_trial_balance(company=self.company)["accounts"]}
        self.assertEqual(rows["1000"]["credit"], 670.0)
        self.assertEqual(rows["1000"]["debit"], 0.0)

    def test_balance_sheet_balances_with_current_period_earnings(self):
        bs = get_balance_sheet(company=self.company)

        self.assertTrue(bs["totals"]["balanced"])
        self.assertEqual(bs["totals"]["assets"], 1730.0)
        self.assertEqual(bs["totals"]["liabilities"], 500.0)
        # 600 revenue - (250 + 100 + 20) expenses
        self.assertEqual(bs["equity"]["current_period_earnings"], 230.0)
        self.assertEqual(bs["totals"]["equity"], 1230.0)

    def test_balance_sheet_current_split_uses_subtype_prefix(self):
        bs = get_balance_sheet(company=self.company)

        current_assets = [r["account_code"] for r in bs["assets"]["current"]]
        non_current_assets = [r["account_code"] for r in bs["assets"]["non_current"]]
        self.assertEqual(current_assets, ["1000"])
        self.assertEqual(non_current_assets, ["1500"])

        self.assertEqual([r["account_code"] for r in bs["liabilities"]["current"]], ["2100"])
        self.assertEqual([r["account_code"] for r in bs["liabilities"]["non_current"]], ["2500"])

    def test_profit_and_loss_buckets(self):
        pl = get_profit_loss_statement(company=self.company)
        totals = pl["totals"]

        self.assertEqual(totals["revenue"], 600.0)
        self.assertEqual(totals["cost_of_goods_sold"], 250.0)
        self.assertEqual(totals["gross_profit"], 350.0)
        self.assertEqual(totals["operating_expenses"], 100.0)
        self.assertEqual(totals["operating_profit"], 250.0)
        self.assertEqual(totals["other_expenses"], 20.0)
        self.assertEqual(totals["net_profit"], 230.0)

    def test_profit_and_loss_for_period(self):
        pl = get_profit_loss_statement(
            company=self.company,
            date_from=date(2024, 3, 1),
            date_to="2024-03-31",
        )
        self.assertEqual(pl["totals"]["revenue"], 0.0)
        self.assertEqual(pl["totals"]["net_profit"], -20.0)
        self.assertEqual(pl["period"], {"date_from": "2024-03-01", "date_to": "2024-03-31"})

    def test_reports_are_company_scoped(self):
        other = Company.objects.create(name="Other Co")
        tb = get_trial_balance(company=other)
        self.assertEqual(tb["accounts"], [])
        self.assertTrue(tb["totals"]["balanced"])

    def test_verify_account_balances_detects_drift(self):
        self.assertTrue(verify_account_balances(company=self.company)["ok"])

        Account.objects.filter(pk=self.cash.pk).update(current_balance=Decimal("1.00"))

        report = verify_account_balances(company=self.company)
        self.assertFalse(report["ok"])
        self.assertEqual([r["account_code"] for r in report["drift"]], ["1000"])
        self.assertEqual(report["drift"][0]["ledger_balance"], 1330.0)
