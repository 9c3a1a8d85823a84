"""Decimal helpers for monetary fields"""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Union

from pydantic import BeforeValidator, PlainSerializer

ZERO = Decimal("0")


def to_decimal(value: Union[str, int, float, Decimal]) -> Decimal:
    """
    Convert a wire value to Decimal.

    Floats go through their string form so 25.9 becomes Decimal("25.9")
    rather than its binary expansion. Anything unparseable raises
    ValueError so pydantic reports it as a validation error.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("boolean is not a monetary value")
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        if isinstance(value, str):
            return Decimal(value.strip())
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"invalid monetary value: {value!r}") from e


def to_price_string(value: Decimal) -> str:
    """Format a price the way the backend stores decimal(10,2) columns"""
    return f"{value:.2f}"


# Backend decimal columns travel as strings ("22.90")
DecimalString = Annotated[
    Decimal,
    BeforeValidator(to_decimal),
    PlainSerializer(to_price_string, return_type=str, when_used="json"),
]

# Computed client-side amounts travel as JSON numbers
Money = Annotated[
    Decimal,
    BeforeValidator(to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]
