"""
PATH: inventory/models/__init__.py

Inventory models export surface.
"""

from .inventory_record import InventoryRecord
from .inventory_transaction import InventoryTransaction
from .warehouse import Warehouse

__all__ = [
    "Warehouse",
    "InventoryRecord",
    "InventoryTransaction",
]
