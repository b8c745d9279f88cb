# inventory/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.api.views import (
    InventoryRecordViewSet,
    InventoryTransactionViewSet,
    InventoryValuationView,
    LowStockReportView,
    OutOfStockReportView,
    StockAdjustmentView,
    StockMovementReportView,
    StockTransferView,
    WarehouseViewSet,
)

router = DefaultRouter()
router.register("warehouses", WarehouseViewSet, basename="warehouse")
router.register("stock", InventoryRecordViewSet, basename="inventory-record")
router.register("transactions", InventoryTransactionViewSet, basename="inventory-transaction")

urlpatterns = [
    path("", include(router.urls)),
    path("adjustments/", StockAdjustmentView.as_view(), name="stock-adjustment"),
    path("transfers/", StockTransferView.as_view(), name="stock-transfer"),
    path("reports/valuation/", InventoryValuationView.as_view(), name="inventory-valuation"),
    path("reports/movements/", StockMovementReportView.as_view(), name="stock-movements"),
    path("reports/low-stock/", LowStockReportView.as_view(), name="low-stock"),
    path("reports/out-of-stock/", OutOfStockReportView.as_view(), name="out-of-stock"),
]
