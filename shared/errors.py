"""
Shared error handling for the Inventory Access Layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for the Inventory Access Layer."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(AccessLayerException):
    """A caller-supplied argument violates a precondition."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class TransportError(AccessLayerException):
    """The backend answered with a non-success status or could not be reached.

    ``status`` is None when no HTTP response was received at all.
    """

    def __init__(
        self,
        status: Optional[int],
        status_text: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status = status
        self.status_text = status_text
        message = f"Request failed: {status} {status_text}" if status is not None else f"Request failed: {status_text}"
        merged = {"status": status, "status_text": status_text}
        merged.update(details or {})
        super().__init__("TRANSPORT_ERROR", message.strip(), merged)


class DecodeError(AccessLayerException):
    """The backend response could not be parsed into the expected structure."""

    def __init__(self, message: str = "Malformed backend response", details: Optional[Dict[str, Any]] = None):
        super().__init__("DECODE_ERROR", message, details)
