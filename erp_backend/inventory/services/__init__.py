"""
PATH: inventory/services/__init__.py

Inventory Reconciliation Engine service surface.
"""

from .adjustments import create_stock_adjustment
from .queries import (
    get_inventory,
    get_inventory_transactions,
    get_product_inventory,
    get_warehouse_inventory,
)
from .reconciliation import reconcile_inventory
from .reports import (
    get_inventory_valuation,
    get_low_stock_products,
    get_out_of_stock_products,
    get_stock_movement_report,
)
from .transactions import create_inventory_transaction
from .transfers import StockTransferResult, create_stock_transfer
from .warehouses import (
    create_warehouse,
    deactivate_warehouse,
    get_warehouse,
    get_warehouses,
    update_warehouse,
)

__all__ = [
    "create_warehouse",
    "update_warehouse",
    "deactivate_warehouse",
    "get_warehouse",
    "get_warehouses",
    "create_inventory_transaction",
    "create_stock_adjustment",
    "create_stock_transfer",
    "StockTransferResult",
    "get_inventory",
    "get_product_inventory",
    "get_warehouse_inventory",
    "get_inventory_transactions",
    "get_inventory_valuation",
    "get_stock_movement_report",
    "get_low_stock_products",
    "get_out_of_stock_products",
    "reconcile_inventory",
]
