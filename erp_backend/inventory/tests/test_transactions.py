# inventory/tests/test_transactions.py

"""
INVENTORY TRANSACTION TESTS

Run with:
    python manage.py test inventory -v 2
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.test import TestCase

from companies.models import Company
from core.exceptions import NotFoundError, ValidationError
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from inventory.services import (
    create_inventory_transaction,
    get_inventory,
    get_inventory_transactions,
    get_product_inventory,
    get_warehouse_inventory,
)
from products.models import Category, Product


class InventoryTransactionTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")
        self.warehouse = Warehouse.objects.create(
            company=self.company, warehouse_code="MAIN", name="Main Store"
        )
        self.product = Product.objects.create(
            company=self.company, sku="PCM-500", name="Paracetamol 500mg", cost_price=Decimal("2.50")
        )

    def _tx(self, transaction_type, quantity, **extra):
        return create_inventory_transaction(
            company=self.company,
            product=self.product,
            warehouse=self.warehouse,
            transaction_type=transaction_type,
            quantity=quantity,
            **extra,
        )

    def _quantity(self):
        return InventoryRecord.objects.get(product=self.product, warehouse=self.warehouse).quantity

    def test_first_in_creates_record(self):
        self.assertFalse(InventoryRecord.objects.exists())

        tx = self._tx("in", 10)

        record = InventoryRecord.objects.get(product=self.product, warehouse=self.warehouse)
        self.assertEqual(record.quantity, 10)
        self.assertEqual(record.reserved_quantity, 0)
        self.assertEqual(record.company_id, self.company.pk)

        self.assertEqual(tx.quantity, 10)
        self.assertEqual(tx.quantity_delta, 10)
        self.assertEqual(tx.resulting_quantity, 10)

    def test_adjustment_sets_absolute_quantity(self):
        self._tx("in", 50)

        tx = self._tx("adjustment", 7)

        self.assertEqual(self._quantity(), 7)
        self.assertEqual(tx.quantity, 7)
        self.assertEqual(tx.quantity_delta, -43)
        self.assertEqual(tx.resulting_quantity, 7)

    def test_out_and_transfer_subtract(self):
        self._tx("in", 20)
        self._tx("out", 5)
        tx = self._tx("transfer", 3)

        self.assertEqual(self._quantity(), 12)
        self.assertEqual(tx.quantity_delta, -3)

    def test_out_has_no_sufficiency_check(self):
        tx = self._tx("out", 4)

        self.assertEqual(self._quantity(), -4)
        self.assertEqual(tx.resulting_quantity, -4)

    def test_adjustment_to_zero_is_allowed(self):
        self._tx("in", 9)
        self._tx("adjustment", 0)
        self.assertEqual(self._quantity(), 0)

    def test_non_positive_quantity_rejected(self):
        for qty in (0, -1):
            with self.assertRaises(ValidationError):
                self._tx("in", qty)
        with self.assertRaises(ValidationError):
            self._tx("adjustment", -1)

        self.assertFalse(InventoryTransaction.objects.exists())
        self.assertFalse(InventoryRecord.objects.exists())

    def test_unknown_type_rejected(self):
        with self.assertRaises(ValidationError):
            self._tx("gift", 1)

    def test_metadata_is_stored(self):
        tx = self._tx(
            "in",
            12,
            unit_cost="2.40",
            reference_type="purchase_order",
            reference_id="PO-17",
            batch_number="B-001",
            expiry_date="2026-12-31",
            notes="  Supplier delivery  ",
            created_by="clerk@acme.test",
        )

        tx.refresh_from_db()
        self.assertEqual(tx.unit_cost, Decimal("2.40"))
        self.assertEqual(tx.reference_type, "purchase_order")
        self.assertEqual(tx.reference_id, "PO-17")
        self.assertEqual(tx.batch_number, "B-001")
        self.assertEqual(tx.expiry_date.isoformat(), "2026-12-31")
        self.assertEqual(tx.notes, "Supplier delivery")
        self.assertEqual(tx.created_by, "clerk@acme.test")

    def test_product_must_belong_to_company(self):
        other = Company.objects.create(name="Other Co")
        foreign = Product.objects.create(company=other, sku="X-1", name="Foreign")

        with self.assertRaises(ValidationError):
            create_inventory_transaction(
                company=self.company,
                product=foreign,
                warehouse=self.warehouse,
                transaction_type="in",
                quantity=1,
            )

    def test_unknown_product_is_not_found(self):
        with self.assertRaises(NotFoundError):
            create_inventory_transaction(
                company=self.company,
                product="00000000-0000-0000-0000-000000000000",
                warehouse=self.warehouse,
                transaction_type="in",
                quantity=1,
            )

    def test_inactive_warehouse_rejected(self):
        self.warehouse.is_active = False
        self.warehouse.save()

        with self.assertRaises(ValidationError):
            self._tx("in", 1)

    def test_log_rows_are_immutable(self):
        tx = self._tx("in", 10)

        tx.notes = "edited"
        with self.assertRaises(DjangoValidationError):
            tx.save()

        with self.assertRaises(DjangoValidationError):
            tx.delete()

        self.assertEqual(InventoryTransaction.objects.count(), 1)

    def test_snapshot_matches_log(self):
        for tx_type, qty in [("in", 30), ("out", 4), ("adjustment", 40), ("transfer", 15), ("in", 2)]:
            self._tx(tx_type, qty)

        last = InventoryTransaction.objects.order_by("-created_at").first()
        deltas = sum(InventoryTransaction.objects.values_list("quantity_delta", flat=True))

        self.assertEqual(self._quantity(), 27)
        self.assertEqual(deltas, 27)
        self.assertEqual(last.resulting_quantity, 27)


class InventoryQueryTests(TestCase):
    def setUp(self):
        self.company = Company.objects.create(name="Acme Trading")
        self.main = Warehouse.objects.create(company=self.company, warehouse_code="MAIN", name="Main Store")
        self.annex = Warehouse.objects.create(company=self.company, warehouse_code="ANX", name="Annex")
        self.drugs = Category.objects.create(company=self.company, name="Drugs")

        self.pcm = Product.objects.create(
            company=self.company, sku="PCM-500", name="Paracetamol 500mg", category=self.drugs, min_stock_level=10
        )
        self.glv = Product.objects.create(company=self.company, sku="GLV-M", name="Gloves M", min_stock_level=0)

        self._tx(self.pcm, self.main, "in", 5)
        self._tx(self.pcm, self.annex, "in", 40)
        self._tx(self.glv, self.main, "out", 3)

    def _tx(self, product, warehouse, transaction_type, quantity):
        return create_inventory_transaction(
            company=self.company,
            product=product,
            warehouse=warehouse,
            transaction_type=transaction_type,
            quantity=quantity,
        )

    def _pairs(self, qs):
        return {(r.product.sku, r.warehouse.warehouse_code) for r in qs}

    def test_inventory_filters(self):
        self.assertEqual(len(get_inventory(company=self.company)), 3)
        self.assertEqual(
            self._pairs(get_inventory(company=self.company, search="parace")),
            {("PCM-500", "MAIN"), ("PCM-500", "ANX")},
        )
        self.assertEqual(
            self._pairs(get_inventory(company=self.company, warehouse=self.main)),
            {("PCM-500", "MAIN"), ("GLV-M", "MAIN")},
        )
        self.assertEqual(
            self._pairs(get_inventory(company=self.company, category=self.drugs)),
            {("PCM-500", "MAIN"), ("PCM-500", "ANX")},
        )

    def test_stock_state_flags(self):
        self.assertEqual(
            self._pairs(get_inventory(company=self.company, low_stock_only=True)),
            {("PCM-500", "MAIN")},
        )
        self.assertEqual(
            self._pairs(get_inventory(company=self.company, out_of_stock_only=True)),
            {("GLV-M", "MAIN")},
        )
        self.assertEqual(
            self._pairs(get_inventory(company=self.company, negative_stock_only=True)),
            {("GLV-M", "MAIN")},
        )

    def test_product_and_warehouse_views(self):
        rows = list(get_product_inventory(company=self.company, product=self.pcm))
        self.assertEqual([r.warehouse.name for r in rows], ["Annex", "Main Store"])

        rows = list(get_warehouse_inventory(company=self.company, warehouse=self.main))
        self.assertEqual([r.product.name for r in rows], ["Gloves M", "Paracetamol 500mg"])

    def test_transaction_listing(self):
        self.assertEqual(get_inventory_transactions(company=self.company).count(), 3)
        self.assertEqual(get_inventory_transactions(company=self.company, transaction_type="out").count(), 1)
        self.assertEqual(get_inventory_transactions(company=self.company, product=self.pcm).count(), 2)

    def test_other_company_sees_nothing(self):
        other = Company.objects.create(name="Other Co")
        self.assertEqual(get_inventory(company=other).count(), 0)
        self.assertEqual(get_inventory_transactions(company=other).count(), 0)

    def test_inverted_date_range_rejected(self):
        with self.assertRaises(ValidationError):
            get_inventory_transactions(company=self.company, date_from="2026-02-01", date_to="2026-01-01")
