"""Base model for all data models in TimePulse.

This module provides a base Pydantic model with common configuration
and small helpers shared by the entity models.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Union

from pydantic import BaseModel, ConfigDict


def utcnow() -> dt.datetime:
    """Return the current UTC time (used for created_at stamps)."""
    return dt.datetime.now(dt.timezone.utc)


def to_decimal(v: Union[str, int, float, Decimal]) -> Decimal:
    """Convert a numeric value to Decimal.

    Args:
        v: The value to convert

    Returns:
        The value as a Decimal

    Raises:
        ValueError: If the value cannot be converted to Decimal
    """
    if isinstance(v, Decimal):
        return v
    if isinstance(v, bool):
        raise ValueError(f"Cannot convert {v} to Decimal")
    try:
        return Decimal(str(v))
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ValueError(f"Cannot convert {v} to Decimal: {e}")


def strip_required(v: Any, field_name: str) -> str:
    """Validate that a string field is not empty or whitespace only."""
    if not v or not str(v).strip():
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return str(v).strip()


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - Validation on assignment (partial updates go through validators)
    - Rejection of unknown fields

    Example:
        >>> class Tag(BaseDataModel):
        ...     name: str
        >>> Tag(name="urgent").model_dump()
        {'name': 'urgent'}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date, time
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        # Unknown fields are an input error, not silently dropped
        extra="forbid",
        frozen=False,
    )
