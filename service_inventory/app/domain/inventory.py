"""
Inventory operations against the backend.

Reads go through the ``CachedReader`` (except holdings, which are always
live); writes go straight to the backend and, once the backend confirms
them, evict exactly the cache keys they made stale.
"""

from typing import List, Optional, TYPE_CHECKING

from shared.logging import get_logger
from .models import (
    Holding,
    StockItem,
    TransactionResult,
    WriteResponse,
    parse_holdings,
    parse_names,
    parse_stock,
    parse_write_response,
)
from .validation import validate_not_empty, validate_positive_int

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..adapters.backend_client import BackendClient
    from ..caching.cached_reader import CachedReader
    from shared.metrics import MetricsCollector


CASES_KEY = "getCases"
LIVE_STOCK_KEY = "getLiveStock"
COMPONENTS_KEY_PREFIX = "getComponents:"


def components_key(case_name: str) -> str:
    """Cache key for the component list of one case."""
    return f"{COMPONENTS_KEY_PREFIX}{case_name}"


class InventoryService:
    """Typed read/write access to the inventory backend."""

    def __init__(
        self,
        backend: "BackendClient",
        reader: "CachedReader",
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.backend = backend
        self.reader = reader
        self.metrics = metrics
        self.logger = get_logger("inventory.service")

    async def list_cases(self) -> List[str]:
        """All case names, in backend order."""
        return await self.reader.get(CASES_KEY, {"action": "getCases"}, parse=parse_names)

    async def list_components(self, case_name: str) -> List[str]:
        """Component names stored in ``case_name``."""
        validate_not_empty(case_name, "Case name")
        return await self.reader.get(
            components_key(case_name),
            {"action": "getComponents", "case": case_name},
            parse=parse_names,
        )

    async def get_user_holdings(self, user_id: str) -> List[Holding]:
        """What ``user_id`` currently has out. Never cached."""
        validate_not_empty(user_id, "User ID")
        data = await self.backend.get({"action": "getUserHoldings", "userId": user_id.strip()})
        return parse_holdings(data)

    async def get_live_stock(self) -> List[StockItem]:
        """Available units per component."""
        return await self.reader.get(LIVE_STOCK_KEY, {"action": "getLiveStock"}, parse=parse_stock)

    async def borrow(self, user_id: str, case_name: str, component: str, quantity: int) -> TransactionResult:
        """Borrow ``quantity`` units of ``component`` from ``case_name``.

        A refusal by the backend (e.g. not enough stock) comes back as a
        failed ``TransactionResult``; only transport and decode problems raise.
        """
        validate_not_empty(user_id, "User ID")
        validate_not_empty(case_name, "Case name")
        validate_not_empty(component, "Component")
        quantity = validate_positive_int(quantity, "Quantity")

        response = await self._submit({
            "action": "borrow",
            "userId": user_id.strip(),
            "caseName": case_name,
            "component": component,
            "quantity": quantity,
        })
        if response.rejected:
            return self._rejected("borrow", response, user_id=user_id, component=component)

        self.reader.invalidate(LIVE_STOCK_KEY)
        self.reader.invalidate(components_key(case_name))

        return self._succeeded(
            "borrow",
            f"Successfully borrowed {quantity}x {component}!",
            user_id=user_id,
            component=component,
            quantity=quantity,
        )

    async def return_item(self, user_id: str, component: str, quantity: int) -> TransactionResult:
        """Return ``quantity`` units of ``component``."""
        validate_not_empty(user_id, "User ID")
        validate_not_empty(component, "Component")
        quantity = validate_positive_int(quantity, "Quantity")

        response = await self._submit({
            "action": "return",
            "userId": user_id.strip(),
            "component": component,
            "quantity": quantity,
        })
        if response.rejected:
            return self._rejected("return", response, user_id=user_id, component=component)

        self.reader.invalidate(LIVE_STOCK_KEY)

        return self._succeeded(
            "return",
            f"Successfully returned {quantity}x {component}!",
            user_id=user_id,
            component=component,
            quantity=quantity,
        )

    def invalidate_cache(self, key: Optional[str] = None) -> None:
        """Force-clear one cache key, or the whole cache."""
        self.reader.invalidate(key)

    async def _submit(self, body: dict) -> WriteResponse:
        data = await self.backend.post(body)
        return parse_write_response(data)

    def _rejected(self, action: str, response: WriteResponse, **context) -> TransactionResult:
        self.logger.warning("Transaction rejected by backend", action=action, reason=response.error, **context)
        if self.metrics:
            self.metrics.record_transaction(action, "rejected")
        return TransactionResult(success=False, message=response.error)

    def _succeeded(self, action: str, message: str, **context) -> TransactionResult:
        self.logger.info("Transaction completed", action=action, **context)
        if self.metrics:
            self.metrics.record_transaction(action, "success")
        return TransactionResult(success=True, message=message)
