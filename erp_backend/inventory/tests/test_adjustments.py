# inventory/tests/test_adjustments.py

from __future__ import annotations

from django.test import TestCase

from companies.models import Company
from core.exceptions import ValidationError
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from inventory.services import create_inventory_transaction, create_stock_adjustment
from products.models import Product


class StockAdjustmentTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")
        self.warehouse = Warehouse.objects.create(
            company=self.company, warehouse_code="MAIN", name="Main Store"
        )
        self.product = Product.objects.create(company=self.company, sku="IBU-200", name="Ibuprofen")

        create_inventory_transaction(
            company=self.company,
            product=self.product,
            warehouse=self.warehouse,
            transaction_type="in",
            quantity=50,
        )

    def _adjust(self, adjustment_type, quantity, **extra):
        extra.setdefault("reason", "Cycle count")
        return create_stock_adjustment(
            company=self.company,
            product=self.product,
            warehouse=self.warehouse,
            adjustment_type=adjustment_type,
            quantity=quantity,
            **extra,
        )

    def _quantity(self):
        return InventoryRecord.objects.get(product=self.product, warehouse=self.warehouse).quantity

    def test_set_is_idempotent(self):
        first = self._adjust("set", 12)
        self.assertEqual(self._quantity(), 12)

        second = self._adjust("set", 12)
        self.assertEqual(self._quantity(), 12)

        self.assertEqual(first.quantity_delta, -38)
        self.assertEqual(second.quantity_delta, 0)

    def test_increase_and_decrease_store_resulting_quantity(self):
        up = self._adjust("increase", 5)
        self.assertEqual(up.transaction_type, InventoryTransaction.TransactionType.ADJUSTMENT)
        self.assertEqual(up.quantity, 55)
        self.assertEqual(up.quantity_delta, 5)

        down = self._adjust("decrease", 20)
        self.assertEqual(down.quantity, 35)
        self.assertEqual(down.quantity_delta, -20)
        self.assertEqual(self._quantity(), 35)

    def test_decrease_below_zero_rejected(self):
        with self.assertRaises(ValidationError):
            self._adjust("decrease", 51)

        self.assertEqual(self._quantity(), 50)
        self.assertEqual(InventoryTransaction.objects.count(), 1)

    def test_increase_on_negative_record_stays_negative(self):
        create_inventory_transaction(
            company=self.company,
            product=self.product,
            warehouse=self.warehouse,
            transaction_type="out",
            quantity=60,
        )
        self.assertEqual(self._quantity(), -10)

        tx = self._adjust("increase", 3)

        self.assertEqual(self._quantity(), -7)
        self.assertEqual(tx.quantity, -7)
        self.assertEqual(tx.quantity_delta, 3)
        self.assertEqual(tx.resulting_quantity, -7)

    def test_decrease_on_negative_record_rejected(self):
        create_inventory_transaction(
            company=self.company,
            product=self.product,
            warehouse=self.warehouse,
            transaction_type="out",
            quantity=60,
        )

        with self.assertRaises(ValidationError):
            self._adjust("decrease", 1)

        self.assertEqual(self._quantity(), -10)

    def test_reference_and_notes(self):
        tx = self._adjust(
            "decrease",
            2,
            reason="Damaged",
            notes="broken shelf",
            reference_number="ADJ-0001",
            created_by="auditor",
        )

        self.assertEqual(tx.reference_type, "stock_adjustment")
        self.assertEqual(tx.reference_id, "ADJ-0001")
        self.assertEqual(tx.notes, "Damaged - broken shelf")
        self.assertEqual(tx.created_by, "auditor")

    def test_notes_default_to_reason(self):
        tx = self._adjust("increase", 1, reason="Found in stockroom")
        self.assertEqual(tx.notes, "Found in stockroom")

    def test_invalid_input(self):
        with self.assertRaises(ValidationError):
            self._adjust("shrink", 1)
        with self.assertRaises(ValidationError):
            self._adjust("increase", 0)
        with self.assertRaises(ValidationError):
            self._adjust("set", -1)
        with self.assertRaises(ValidationError):
            self._adjust("set", 1, reason="  ")
