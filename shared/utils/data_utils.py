"""
Money helpers.

Amounts are ``Decimal`` everywhere in the service layer and are written to
JSON as plain numbers.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any

from pydantic import PlainSerializer

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Decimal that serializes as a JSON number instead of a string
Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


def to_money(value: Any) -> Decimal:
    """Coerce ``value`` to a two-place Decimal; ``None`` becomes zero."""
    if value is None:
        return ZERO.quantize(CENT)
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
