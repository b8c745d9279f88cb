# inventory/tests/test_api.py

"""
INVENTORY API TESTS

Run with:
    python manage.py test inventory -v 2
"""

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from companies.models import Company
from inventory.models import InventoryRecord, InventoryTransaction, Warehouse
from products.models import Product


class InventoryApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.company = Company.objects.create(name="Acme Trading")
        self.main = Warehouse.objects.create(company=self.company, warehouse_code="MAIN", name="Main Store")
        self.branch = Warehouse.objects.create(company=self.company, warehouse_code="BR1", name="Branch One")
        self.product = Product.objects.create(
            company=self.company,
            sku="PCM-500",
            name="Paracetamol",
            cost_price=Decimal("2.50"),
            min_stock_level=5,
        )

    def _post_tx(self, transaction_type, quantity, warehouse=None):
        return self.client.post(
            reverse("inventory-transaction-list"),
            {
                "company": str(self.company.pk),
                "product": str(self.product.pk),
                "warehouse": str((warehouse or self.main).pk),
                "transaction_type": transaction_type,
                "quantity": quantity,
            },
            format="json",
        )

    def test_create_warehouse(self):
        res = self.client.post(
            reverse("warehouse-list"),
            {
                "company": str(self.company.pk),
                "warehouse_code": "vr1",
                "name": "Online",
                "warehouse_type": "virtual",
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["warehouse_code"], "VR1")

        dup = self.client.post(
            reverse("warehouse-list"),
            {"company": str(self.company.pk), "warehouse_code": "VR1", "name": "Again"},
            format="json",
        )
        self.assertEqual(dup.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_warehouse_with_stock_is_refused(self):
        self._post_tx("in", 4)

        res = self.client.delete(reverse("warehouse-detail", args=[self.main.pk]))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        res = self.client.delete(reverse("warehouse-detail", args=[self.branch.pk]))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.branch.refresh_from_db()
        self.assertFalse(self.branch.is_active)

    def test_transaction_and_stock_listing(self):
        res = self._post_tx("in", 10)
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["resulting_quantity"], 10)

        res = self._post_tx("adjustment", 3)
        self.assertEqual(res.data["quantity_delta"], -7)

        listing = self.client.get(reverse("inventory-record-list"), {"company": str(self.company.pk)})
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        rows = listing.data["results"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["quantity"], 3)
        self.assertEqual(rows[0]["available_quantity"], 3)

        low = self.client.get(
            reverse("inventory-record-list"),
            {"company": str(self.company.pk), "low_stock": "true"},
        )
        self.assertEqual(len(low.data["results"]), 1)

        log = self.client.get(
            reverse("inventory-transaction-list"),
            {"company": str(self.company.pk), "transaction_type": "in"},
        )
        self.assertEqual(len(log.data["results"]), 1)

    def test_stock_listing_requires_company(self):
        res = self.client.get(reverse("inventory-record-list"))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_adjustment_endpoint(self):
        self._post_tx("in", 10)

        res = self.client.post(
            reverse("stock-adjustment"),
            {
                "company": str(self.company.pk),
                "product": str(self.product.pk),
                "warehouse": str(self.main.pk),
                "adjustment_type": "decrease",
                "quantity": 4,
                "reason": "Expired",
                "reference_number": "ADJ-9",
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["quantity"], 6)
        self.assertEqual(res.data["reference_type"], "stock_adjustment")

    def test_transfer_endpoint(self):
        self._post_tx("in", 10)

        payload = {
            "company": str(self.company.pk),
            "from_warehouse": str(self.main.pk),
            "to_warehouse": str(self.branch.pk),
            "items": [{"product": str(self.product.pk), "quantity": 4}],
        }

        res = self.client.post(reverse("stock-transfer"), payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["transfer_id"], "TRF000001")
        self.assertEqual(len(res.data["transactions"]), 2)

        self.assertEqual(
            InventoryRecord.objects.get(product=self.product, warehouse=self.branch).quantity,
            4,
        )

    def test_transfer_insufficient_stock_maps_to_409(self):
        self._post_tx("in", 2)
        count = InventoryTransaction.objects.count()

        res = self.client.post(
            reverse("stock-transfer"),
            {
                "company": str(self.company.pk),
                "from_warehouse": str(self.main.pk),
                "to_warehouse": str(self.branch.pk),
                "items": [{"product": str(self.product.pk), "quantity": 3}],
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(res.data["code"], "insufficient_stock")
        self.assertEqual(InventoryTransaction.objects.count(), count)

    def test_reports(self):
        self._post_tx("in", 4)

        params = {"company": str(self.company.pk)}

        valuation = self.client.get(reverse("inventory-valuation"), params)
        self.assertEqual(valuation.status_code, status.HTTP_200_OK)
        self.assertEqual(valuation.data["total_value"], 10.0)

        low = self.client.get(reverse("low-stock"), params)
        self.assertEqual(len(low.data), 1)

        out = self.client.get(reverse("out-of-stock"), params)
        self.assertEqual(out.data, [])

        movements = self.client.get(
            reverse("stock-movements"),
            {**params, "date_from": "2000-01-01", "date_to": "2999-12-31"},
        )
        self.assertEqual(movements.status_code, status.HTTP_200_OK)
        self.assertEqual(movements.data[0]["closing_stock"], 4)
