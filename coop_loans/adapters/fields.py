"""Field parsers shared by the payload adapters.

Every failure surfaces as ``MappingError`` naming the offending field.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from coop_loans.exceptions import InvalidArgumentError, MappingError
from coop_loans.money import to_decimal


def require(record: dict[str, Any], key: str) -> Any:
    """Return ``record[key]`` or raise ``MappingError``."""
    try:
        return record[key]
    except KeyError:
        raise MappingError(f"Missing required field {key!r}") from None


def parse_decimal(value: Any, name: str) -> Decimal:
    try:
        return to_decimal(value, name)
    except InvalidArgumentError as e:
        raise MappingError(str(e)) from e


def parse_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MappingError(f"{name} must be an integer, got {value!r}") from e


def parse_enum(enum_cls: Any, value: Any, name: str) -> Any:
    """Look up an enum member by value, case-insensitively."""
    try:
        return enum_cls(str(getattr(value, "value", value)).upper())
    except ValueError as e:
        raise MappingError(f"Unknown {name}: {value!r}") from e


def parse_date(value: Any) -> date | None:
    """Parse an ISO date, ignoring any time part. Empty values give ``None``."""
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise MappingError(f"Invalid date: {value!r}") from e
