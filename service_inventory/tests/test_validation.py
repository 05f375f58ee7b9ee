"""
Unit tests for input validation helpers.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.errors import ValidationError
from service_inventory.app.domain.validation import MAX_QUANTITY, validate_not_empty, validate_positive_int


@pytest.mark.parametrize("value", ["", "   ", "\t\n", None, 42])
def test_validate_not_empty_rejects(value):
    with pytest.raises(ValidationError) as exc_info:
        validate_not_empty(value, "User ID")

    assert exc_info.value.message == "User ID is required."
    assert exc_info.value.details == {"field": "User ID"}


def test_validate_not_empty_returns_value_unchanged():
    assert validate_not_empty(" u1 ", "User ID") == " u1 "


@pytest.mark.parametrize("value", [0, -1, 1.5, float("nan"), float("inf"), True, "2", None, 1e300, 2 ** 60, MAX_QUANTITY + 1])
def test_validate_positive_int_rejects(value):
    with pytest.raises(ValidationError) as exc_info:
        validate_positive_int(value, "Quantity")

    assert exc_info.value.message == "Quantity must be a positive integer."
    assert exc_info.value.code == "VALIDATION_ERROR"


@pytest.mark.parametrize("value, expected", [(1, 1), (25, 25), (2.0, 2), (MAX_QUANTITY, MAX_QUANTITY)])
def test_validate_positive_int_accepts(value, expected):
    result = validate_positive_int(value, "Quantity")

    assert result == expected
    assert type(result) is int
