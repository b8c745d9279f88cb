# inventory/tests/test_reports.py

"""
INVENTORY REPORT TESTS

Transaction timestamps are pinned with a patched timezone.now so movement
windows are deterministic.
"""

from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

from django.test import TestCase

from companies.models import Company
from core.exceptions import ValidationError
from inventory.models import Warehouse
from inventory.services import (
    create_inventory_transaction,
    create_stock_adjustment,
    create_stock_transfer,
    get_inventory_valuation,
    get_low_stock_products,
    get_out_of_stock_products,
    get_stock_movement_report,
)
from products.models import Category, Product


def at(year, month, day):
    moment = datetime(year, month, day, 12, 0, tzinfo=dt_timezone.utc)
    return mock.patch("django.utils.timezone.now", return_value=moment)


class InventoryReportTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")
        self.main = Warehouse.objects.create(company=self.company, warehouse_code="MAIN", name="Main Store")
        self.branch = Warehouse.objects.create(company=self.company, warehouse_code="BR1", name="Branch One")

        self.analgesics = Category.objects.create(company=self.company, name="Analgesics")
        self.pcm = Product.objects.create(
            company=self.company,
            sku="PCM-500",
            name="Paracetamol",
            category=self.analgesics,
            cost_price=Decimal("2.50"),
            min_stock_level=20,
        )
        self.gauze = Product.objects.create(
            company=self.company,
            sku="GAU-01",
            name="Gauze Roll",
            cost_price=Decimal("10.00"),
            min_stock_level=10,
        )

    def _tx(self, product, warehouse, transaction_type, quantity):
        return create_inventory_transaction(
            company=self.company,
            product=product,
            warehouse=warehouse,
            transaction_type=transaction_type,
            quantity=quantity,
        )

    def _seed_levels(self):
        self._tx(self.pcm, self.main, "in", 100)
        self._tx(self.gauze, self.main, "in", 5)
        self._tx(self.pcm, self.branch, "out", 3)

    def test_valuation_totals_and_breakdowns(self):
        self._seed_levels()

        report = get_inventory_valuation(company=self.company)

        self.assertEqual(report["total_value"], 300.0)
        self.assertEqual(report["total_quantity"], 105)

        by_category = {row["category_name"]: row for row in report["by_category"]}
        self.assertEqual(by_category["Analgesics"]["value"], 250.0)
        self.assertEqual(by_category["Analgesics"]["quantity"], 100)
        self.assertEqual(by_category["Uncategorized"]["value"], 50.0)
        self.assertIsNone(by_category["Uncategorized"]["category_id"])

        # the negative branch record is excluded
        self.assertEqual(len(report["by_warehouse"]), 1)
        self.assertEqual(report["by_warehouse"][0]["warehouse_name"], "Main Store")
        self.assertEqual(report["by_warehouse"][0]["quantity"], 105)

    def test_valuation_for_one_warehouse(self):
        self._seed_levels()

        report = get_inventory_valuation(company=self.company, warehouse=self.branch)

        self.assertEqual(report["total_value"], 0.0)
        self.assertEqual(report["by_warehouse"], [])

    def test_low_and_out_of_stock(self):
        self._seed_levels()

        low = get_low_stock_products(company=self.company)
        pairs = {(row["product_name"], row["warehouse_name"]) for row in low}
        self.assertEqual(pairs, {("Gauze Roll", "Main Store"), ("Paracetamol", "Branch One")})

        out = get_out_of_stock_products(company=self.company)
        self.assertEqual(len(out), 1)
        self.assertEqual(out[0]["product_name"], "Paracetamol")
        self.assertEqual(out[0]["warehouse_name"], "Branch One")
        self.assertEqual(out[0]["current_stock"], -3)

    def test_movement_report(self):
        with at(2024, 1, 5):
            self._tx(self.pcm, self.main, "in", 100)
        with at(2024, 2, 3):
            self._tx(self.pcm, self.main, "in", 50)
        with at(2024, 2, 10):
            self._tx(self.pcm, self.main, "out", 20)
        with at(2024, 2, 12):
            create_stock_transfer(
                company=self.company,
                from_warehouse=self.main,
                to_warehouse=self.branch,
                items=[{"product": self.pcm, "quantity": 10}],
            )
        with at(2024, 2, 20):
            create_stock_adjustment(
                company=self.company,
                product=self.pcm,
                warehouse=self.main,
                adjustment_type="set",
                quantity=100,
                reason="Stock take",
            )
        with at(2024, 3, 2):
            self._tx(self.pcm, self.main, "in", 999)

        rows = get_stock_movement_report(
            company=self.company,
            date_from=date(2024, 2, 1),
            date_to=date(2024, 2, 29),
        )

        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual(row["product_name"], "Paracetamol")
        self.assertEqual(row["opening_stock"], 100)
        self.assertEqual(row["stock_in"], 60)
        self.assertEqual(row["stock_out"], 30)
        self.assertEqual(row["adjustments"], -20)
        self.assertEqual(row["closing_stock"], 110)
        self.assertEqual(row["value"], 275.0)

        main_only = get_stock_movement_report(
            company=self.company,
            date_from="2024-02-01",
            date_to="2024-02-29",
            warehouse=self.main,
        )[0]
        self.assertEqual(main_only["stock_in"], 50)
        self.assertEqual(main_only["closing_stock"], 100)

    def test_movement_report_requires_ordered_dates(self):
        with self.assertRaises(ValidationError):
            get_stock_movement_report(
                company=self.company,
                date_from="2024-03-01",
                date_to="2024-02-01",
            )
