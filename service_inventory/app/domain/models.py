"""
Inventory data models.
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shared.errors import DecodeError


class Holding(BaseModel):
    """Quantity of a component a user has borrowed and not yet returned."""
    component: str
    outstanding: int = Field(ge=0)


class StockItem(BaseModel):
    """Units of a component currently available."""
    component: str
    stock: int = Field(ge=0)


class WriteResponse(BaseModel):
    """Raw reply to a borrow/return POST: ``{"success": true}`` or ``{"error": "..."}``."""
    success: Optional[bool] = None
    error: Optional[str] = None

    @property
    def rejected(self) -> bool:
        return bool(self.error)


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a borrow/return call as seen by the caller."""
    success: bool
    message: str


_string_list = TypeAdapter(List[str])
_holding_list = TypeAdapter(List[Holding])
_stock_list = TypeAdapter(List[StockItem])


def _decode(adapter: TypeAdapter, data: Any, what: str):
    try:
        return adapter.validate_python(data)
    except PydanticValidationError as exc:
        raise DecodeError(
            f"Unexpected {what} payload from backend",
            details={"errors": exc.errors(include_url=False)}
        ) from exc


def parse_names(data: Any) -> List[str]:
    return _decode(_string_list, data, "name list")


def parse_holdings(data: Any) -> List[Holding]:
    return _decode(_holding_list, data, "holdings")


def parse_stock(data: Any) -> List[StockItem]:
    return _decode(_stock_list, data, "stock")


def parse_write_response(data: Any) -> WriteResponse:
    if not isinstance(data, dict):
        raise DecodeError(
            "Unexpected write response from backend",
            details={"type": type(data).__name__}
        )
    try:
        return WriteResponse.model_validate(data)
    except PydanticValidationError as exc:
        raise DecodeError(
            "Unexpected write response from backend",
            details={"errors": exc.errors(include_url=False)}
        ) from exc
