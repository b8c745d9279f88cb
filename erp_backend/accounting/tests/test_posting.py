# accounting/tests/test_posting.py

"""
POSTING + REVERSAL TESTS

Run with:
    python manage.py test accounting -v 2
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase

from accounting.journal_lines import Credit, Debit
from accounting.models import Account, JournalEntry
from accounting.services.account_service import update_account
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.posting import post_journal_entry, reverse_journal_entry
from companies.models import Company
from core.exceptions import InvalidStateTransition, RemoteStoreError, ValidationError


class PostingTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")

        def acc(code, name, account_type):
            return Account.objects.create(
                company=self.company, code=code, name=name, account_type=account_type
            )

        self.cash = acc("1000", "Cash", Account.ASSET)
        self.payable = acc("2100", "Accounts Payable", Account.LIABILITY)
        self.capital = acc("3100", "Owner Capital", Account.EQUITY)
        self.sales = acc("4000", "Sales Revenue", Account.REVENUE)
        self.rent = acc("6100", "Rent", Account.EXPENSE)
        self.accounts = [self.cash, self.payable, self.capital, self.sales, self.rent]

    def _entry(self, lines, *, entry_date=date(2024, 1, 31), description="Entry"):
        return create_journal_entry(
            company=self.company,
            entry_date=entry_date,
            description=description,
            line_items=lines,
        )

    def _balances(self):
        return {
            a.code: a.current_balance
            for a in Account.objects.filter(company=self.company)
        }

    def _signed_total(self):
        return sum(
            (a.signed_balance for a in Account.objects.filter(company=self.company)),
            Decimal("0.00"),
        )

    def test_post_draft_entry_moves_balances_by_normal_side(self):
        je = self._entry([Debit(self.cash, "500.00"), Credit(self.sales, "500.00")])
        self.assertEqual(je.status, JournalEntry.Status.DRAFT)

        posted = post_journal_entry(je)

        self.assertEqual(posted.status, JournalEntry.Status.POSTED)
        self.assertIsNotNone(posted.posted_at)

        self.cash.refresh_from_db()
        self.sales.refresh_from_db()
        # asset grows with debits, revenue grows with credits
        self.assertEqual(self.cash.current_balance, Decimal("500.00"))
        self.assertEqual(self.sales.current_balance, Decimal("500.00"))
        self.assertEqual(self.sales.signed_balance, Decimal("-500.00"))

    def test_posting_is_zero_sum_for_any_mix_of_types(self):
        je = self._entry(
            [
                Debit(self.cash, "300.00"),
                Debit(self.rent, "200.00"),
                Credit(self.payable, "150.00"),
                Credit(self.capital, "100.00"),
                Credit(self.sales, "250.00"),
            ]
        )
        before = self._signed_total()
        post_journal_entry(je)
        self.assertEqual(self._signed_total() - before, Decimal("0.00"))

    def test_debiting_a_credit_normal_account_reduces_it(self):
        post_journal_entry(self._entry([Debit(self.cash, 100), Credit(self.payable, 100)]))
        post_journal_entry(self._entry([Debit(self.payable, 40), Credit(self.cash, 40)]))

        self.payable.refresh_from_db()
        self.cash.refresh_from_db()
        self.assertEqual(self.payable.current_balance, Decimal("60.00"))
        self.assertEqual(self.cash.current_balance, Decimal("60.00"))

    def test_same_account_on_several_lines_is_accumulated(self):
        je = self._entry(
            [
                Debit(self.cash, 70),
                Debit(self.cash, 30),
                Credit(self.sales, 100),
            ]
        )
        post_journal_entry(je)
        self.cash.refresh_from_db()
        self.assertEqual(self.cash.current_balance, Decimal("100.00"))

    def test_posting_twice_is_an_invalid_transition(self):
        je = post_journal_entry(self._entry([Debit(self.cash, 10), Credit(self.sales, 10)]))

        with self.assertRaises(InvalidStateTransition):
            post_journal_entry(je)

        self.cash.refresh_from_db()
        self.assertEqual(self.cash.current_balance, Decimal("10.00"))

    def test_post_accepts_entry_id(self):
        je = self._entry([Debit(self.cash, 10), Credit(self.sales, 10)])
        posted = post_journal_entry(je.pk)
        self.assertEqual(posted.status, JournalEntry.Status.POSTED)

    def test_store_failure_mid_posting_rolls_everything_back(self):
        je = self._entry([Debit(self.cash, 10), Credit(self.sales, 10)])

        original_save = Account.save
        calls = {"n": 0}

        def flaky_save(instance, *args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise DatabaseError("connection lost")
            return original_save(instance, *args, **kwargs)

        with mock.patch.object(Account, "save", flaky_save):
            with self.assertRaises(RemoteStoreError):
                post_journal_entry(je)

        je.refresh_from_db()
        self.assertEqual(je.status, JournalEntry.Status.DRAFT)
        self.assertEqual(
            self._balances(),
            {a.code: Decimal("0.00") for a in self.accounts},
        )


class ReversalTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")
        self.cash = Account.objects.create(
            company=self.company, code="1000", name="Cash", account_type=Account.ASSET
        )
        self.sales = Account.objects.create(
            company=self.company, code="4000", name="Sales", account_type=Account.REVENUE
        )
        self.rent = Account.objects.create(
            company=self.company, code="6100", name="Rent", account_type=Account.EXPENSE
        )

    def _posted(self):
        je = create_journal_entry(
            company=self.company,
            entry_date=date(2024, 1, 31),
            description="Invoice 42",
            line_items=[
                {"account": self.cash, "debit_amount": "120.00", "description": "cash in"},
                {"account": self.rent, "debit_amount": "30.00", "description": "fee"},
                {"account": self.sales, "credit_amount": "150.00", "description": "sale"},
            ],
        )
        return post_journal_entry(je)

    def test_reversal_restores_every_balance(self):
        before = {
            a.pk: a.current_balance for a in Account.objects.filter(company=self.company)
        }
        original = self._posted()

        reversal = reverse_journal_entry(original, reverse_date=date(2024, 2, 1), reason="Entered twice")

        after = {
            a.pk: a.current_balance for a in Account.objects.filter(company=self.company)
        }
        self.assertEqual(after, before)

        self.assertEqual(reversal.status, JournalEntry.Status.POSTED)
        self.assertEqual(reversal.reference_type, "reversal")
        self.assertEqual(reversal.reference_id, str(original.pk))
        self.assertEqual(reversal.description, "Reversal: Invoice 42 - Entered twice")
        self.assertEqual(reversal.entry_date, date(2024, 2, 1))

        original.refresh_from_db()
        self.assertEqual(original.status, JournalEntry.Status.REVERSED)
        self.assertEqual(original.reversed_by_id, reversal.pk)

    def test_reversal_lines_swap_sides_and_prefix_descriptions(self):
        original = self._posted()
        reversal = reverse_journal_entry(original, reverse_date=date(2024, 2, 1), reason="Error")

        pairs = [
            (o.account_id, o.side, o.amount, r.account_id, r.side, r.amount, r.description)
            for o, r in zip(original.line_items.all(), reversal.line_items.all())
        ]
        for o_acc, o_side, o_amt, r_acc, r_side, r_amt, r_desc in pairs:
            self.assertEqual(o_acc, r_acc)
            self.assertEqual(o_amt, r_amt)
            self.assertNotEqual(o_side, r_side)
            self.assertTrue(r_desc.startswith("Reversal: "))

        self.assertEqual(reversal.total_debit, original.total_credit)

    def test_reversing_a_draft_is_invalid(self):
        je = create_journal_entry(
            company=self.company,
            entry_date=date(2024, 1, 31),
            description="Draft",
            line_items=[Debit(self.cash, 5), Credit(self.sales, 5)],
        )
        with self.assertRaises(InvalidStateTransition):
            reverse_journal_entry(je, reverse_date=date(2024, 2, 1), reason="nope")

    def test_reversing_twice_is_invalid(self):
        original = self._posted()
        reverse_journal_entry(original, reverse_date=date(2024, 2, 1), reason="Error")

        with self.assertRaises(InvalidStateTransition):
            reverse_journal_entry(original, reverse_date=date(2024, 2, 2), reason="Again")

        self.assertEqual(JournalEntry.objects.filter(reference_type="reversal").count(), 1)

    def test_reason_is_required(self):
        original = self._posted()
        with self.assertRaises(ValidationError):
            reverse_journal_entry(original, reverse_date=date(2024, 2, 1), reason="  ")

        original.refresh_from_db()
        self.assertEqual(original.status, JournalEntry.Status.POSTED)

    def test_entry_on_deactivated_account_can_still_be_reversed(self):
        original = self._posted()
        update_account(self.sales, is_active=False)

        reversal = reverse_journal_entry(original, reverse_date=date(2024, 2, 1), reason="Wrong customer")

        self.assertEqual(reversal.status, JournalEntry.Status.POSTED)
        self.sales.refresh_from_db()
        self.assertFalse(self.sales.is_active)
        self.assertEqual(self.sales.current_balance, Decimal("0.00"))

    def test_new_entries_on_deactivated_account_are_rejected(self):
        update_account(self.sales, is_active=False)

        with self.assertRaises(ValidationError):
            create_journal_entry(
                company=self.company,
                entry_date=date(2024, 2, 1),
                description="Late sale",
                line_items=[Debit(self.cash, 10), Credit(self.sales, 10)],
            )
