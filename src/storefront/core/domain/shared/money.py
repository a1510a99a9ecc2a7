"""Money helpers. Amounts are Decimal, quantized to cents with half-up rounding."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        # str() first so floats coming back from JSON don't drag binary noise in
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
