"""Decimal helpers for monetary amounts."""

from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Any

from coop_loans.exceptions import InvalidArgumentError


def to_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert a number or numeric string to ``Decimal``.

    Floats go through ``str`` so that ``6.5`` becomes ``Decimal("6.5")`` and
    not its binary expansion.

    Raises
    ------
    InvalidArgumentError
        If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidArgumentError(f"{name} must be a number, got {value!r}") from e
    else:
        raise InvalidArgumentError(f"{name} must be a number, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidArgumentError(f"{name} must be finite, got {value!r}")
    return result


def non_negative(value: Any, name: str) -> Decimal:
    """Convert to ``Decimal`` and require ``value >= 0``."""
    result = to_decimal(value, name)
    if result < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {result}")
    return result


def ceil_money(value: Decimal) -> Decimal:
    """Round up to the whole currency unit."""
    return value.to_integral_value(rounding=ROUND_CEILING)
