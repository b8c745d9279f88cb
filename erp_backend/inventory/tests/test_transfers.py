# inventory/tests/test_transfers.py

"""
STOCK TRANSFER TESTS

A transfer is a pure reallocation: all legs are written or none.
"""

from __future__ import annotations

from datetime import date
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from companies.models import Company
from core.exceptions import InsufficientStockError, RemoteStoreError, ValidationError
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from inventory.services import (
    create_inventory_transaction,
    create_stock_transfer,
    get_stock_movement_report,
)
from inventory.services import transfers as transfer_module
from products.models import Product


class StockTransferTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")
        self.main = Warehouse.objects.create(company=self.company, warehouse_code="MAIN", name="Main Store")
        self.branch = Warehouse.objects.create(
            company=self.company,
            warehouse_code="BR1",
            name="Branch One",
            warehouse_type=Warehouse.WarehouseType.BRANCH,
        )
        self.pcm = Product.objects.create(company=self.company, sku="PCM-500", name="Paracetamol")
        self.ibu = Product.objects.create(company=self.company, sku="IBU-200", name="Ibuprofen")

        self._stock(self.pcm, self.main, 100)
        self._stock(self.ibu, self.main, 10)

    def _stock(self, product, warehouse, quantity):
        create_inventory_transaction(
            company=self.company,
            product=product,
            warehouse=warehouse,
            transaction_type="in",
            quantity=quantity,
        )

    def _qty(self, product, warehouse):
        record = InventoryRecord.objects.filter(product=product, warehouse=warehouse).first()
        return record.quantity if record else 0

    def _transfer(self, items, **extra):
        return create_stock_transfer(
            company=self.company,
            from_warehouse=self.main,
            to_warehouse=self.branch,
            items=items,
            **extra,
        )

    def test_transfer_reallocates_quantity(self):
        before = self._qty(self.pcm, self.main) + self._qty(self.pcm, self.branch)

        result = self._transfer([{"product": self.pcm, "quantity": 30}], notes="weekly restock")

        self.assertEqual(self._qty(self.pcm, self.main), 70)
        self.assertEqual(self._qty(self.pcm, self.branch), 30)
        self.assertEqual(self._qty(self.pcm, self.main) + self._qty(self.pcm, self.branch), before)

        self.assertEqual(result.transfer_id, "TRF000001")
        self.assertEqual(len(result.transactions), 2)

        out_leg, in_leg = result.transactions
        self.assertEqual(out_leg.transaction_type, "transfer")
        self.assertEqual(out_leg.warehouse_id, self.main.pk)
        self.assertEqual(out_leg.notes, "Transfer to warehouse Branch One - weekly restock")
        self.assertEqual(in_leg.transaction_type, "in")
        self.assertEqual(in_leg.warehouse_id, self.branch.pk)
        self.assertEqual(in_leg.notes, "Transfer from warehouse Main Store - weekly restock")

        for leg in result.transactions:
            self.assertEqual(leg.reference_type, "stock_transfer")
            self.assertEqual(leg.reference_id, "TRF000001")

    def test_transfer_date_is_stored_on_both_legs(self):
        result = self._transfer([{"product": self.pcm, "quantity": 30}], transfer_date="2024-03-15")

        self.assertEqual(
            {leg.transaction_date for leg in result.transactions},
            {date(2024, 3, 15)},
        )

        rows = get_stock_movement_report(
            company=self.company,
            date_from=date(2024, 3, 15),
            date_to=date(2024, 3, 15),
            warehouse=self.branch,
        )
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["stock_in"], 30)

        earlier = get_stock_movement_report(
            company=self.company,
            date_from=date(2024, 3, 1),
            date_to=date(2024, 3, 14),
            warehouse=self.branch,
        )
        self.assertEqual(earlier, [])

    def test_transfer_without_date_uses_today(self):
        result = self._transfer([{"product": self.ibu, "quantity": 4}])

        for leg in result.transactions:
            leg.refresh_from_db()
            self.assertEqual(leg.transaction_date, timezone.localdate())

    def test_transfer_ids_are_sequential(self):
        first = self._transfer([{"product": self.pcm, "quantity": 1}])
        second = self._transfer([{"product_id": self.pcm.pk, "quantity": 1}])

        self.assertEqual(first.transfer_id, "TRF000001")
        self.assertEqual(second.transfer_id, "TRF000002")

    def test_insufficient_stock_writes_nothing(self):
        count = InventoryTransaction.objects.count()

        with self.assertRaises(InsufficientStockError) as ctx:
            self._transfer(
                [
                    {"product": self.pcm, "quantity": 5},
                    {"product": self.ibu, "quantity": 15},
                ]
            )

        self.assertIn("Insufficient stock for Ibuprofen", str(ctx.exception))
        self.assertIn("Available: 10, Required: 15", str(ctx.exception))

        self.assertEqual(InventoryTransaction.objects.count(), count)
        self.assertEqual(self._qty(self.pcm, self.main), 100)
        self.assertEqual(self._qty(self.pcm, self.branch), 0)

    def test_repeated_product_lines_are_checked_together(self):
        with self.assertRaises(InsufficientStockError):
            self._transfer(
                [
                    {"product": self.ibu, "quantity": 6},
                    {"product": self.ibu, "quantity": 6},
                ]
            )

    def test_reserved_stock_is_not_available(self):
        InventoryRecord.objects.filter(product=self.ibu, warehouse=self.main).update(reserved_quantity=8)

        with self.assertRaises(InsufficientStockError):
            self._transfer([{"product": self.ibu, "quantity": 3}])

    def test_product_without_record_has_nothing_available(self):
        other = Product.objects.create(company=self.company, sku="VIT-C", name="Vitamin C")

        with self.assertRaises(InsufficientStockError):
            self._transfer([{"product": other, "quantity": 1}])

    def test_invalid_requests(self):
        with self.assertRaises(ValidationError):
            create_stock_transfer(
                company=self.company,
                from_warehouse=self.main,
                to_warehouse=self.main,
                items=[{"product": self.pcm, "quantity": 1}],
            )
        with self.assertRaises(ValidationError):
            self._transfer([])
        with self.assertRaises(ValidationError):
            self._transfer([{"product": self.pcm, "quantity": 0}])

    def test_failure_mid_transfer_rolls_back_every_leg(self):
        real_apply = transfer_module.apply_transaction
        calls = {"n": 0}

        def flaky_apply(**kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise DatabaseError("connection lost")
            return real_apply(**kwargs)

        count = InventoryTransaction.objects.count()

        with mock.patch.object(transfer_module, "apply_transaction", side_effect=flaky_apply):
            with self.assertRaises(RemoteStoreError):
                self._transfer([{"product": self.pcm, "quantity": 30}])

        self.assertEqual(InventoryTransaction.objects.count(), count)
        self.assertEqual(self._qty(self.pcm, self.main), 100)
        self.assertEqual(self._qty(self.pcm, self.branch), 0)

        # the failed transfer did not consume a number
        result = self._transfer([{"product": self.pcm, "quantity": 1}])
        self.assertEqual(result.transfer_id, "TRF000001")
