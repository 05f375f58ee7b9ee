"""
Inventory domain package: typed operations, models and input validation.
"""

from .inventory import InventoryService
from .models import Holding, StockItem, TransactionResult

__all__ = ["InventoryService", "Holding", "StockItem", "TransactionResult"]
