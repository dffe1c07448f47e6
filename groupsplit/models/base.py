from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any

from bson import Decimal128, ObjectId
from pydantic import BeforeValidator, PlainSerializer

CENT = Decimal("0.01")

# Balances closer to zero than this count as settled.
SETTLED_TOLERANCE = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Convert a stored amount (Decimal128, int, float, str) to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1 instead of its binary expansion.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, (int, float, str)):
        return Decimal(str(value))
    raise ValueError(f"Not a monetary amount: {value!r}")


def round_money(value: Decimal) -> Decimal:
    """Round to whole cents, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _object_id_to_str(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


ObjectIdStr = Annotated[str, BeforeValidator(_object_id_to_str)]

Money = Annotated[
    Decimal,
    BeforeValidator(to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]
