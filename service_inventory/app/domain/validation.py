"""
Input checks run before any backend call.
"""

import math
from numbers import Real
from typing import Any

from shared.errors import ValidationError

# Largest integer the backend (a JavaScript runtime) represents exactly
MAX_QUANTITY = 2 ** 53 - 1


def validate_not_empty(value: Any, field_name: str) -> str:
    """Require a string with at least one non-whitespace character."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required.", details={"field": field_name})
    return value


def validate_positive_int(value: Any, field_name: str) -> int:
    """Require a whole number in [1, MAX_QUANTITY]; integral floats such as 2.0 are accepted as 2."""
    if (
        isinstance(value, bool)
        or not isinstance(value, Real)
        or not math.isfinite(value)
        or value != int(value)
        or value < 1
        or value > MAX_QUANTITY
    ):
        raise ValidationError(f"{field_name} must be a positive integer.", details={"field": field_name})
    return int(value)
