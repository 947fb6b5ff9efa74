"""
Money helpers shared by the record models.

Amounts are held as Decimal. Floats are converted through str() so that
0.1 becomes Decimal("0.1") rather than its binary approximation.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def coerce_money(value: Any) -> Decimal:
    """
    Convert a raw amount into a finite Decimal.

    Raises:
        ValueError: If the value is missing, boolean, non-numeric or non-finite
    """
    if value is None:
        raise ValueError("amount is required")
    if isinstance(value, bool):
        raise ValueError("amount must be numeric, got a boolean")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"amount must be numeric, got {value!r}") from None
    else:
        raise ValueError(f"amount must be numeric, got {type(value).__name__}")

    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount


def money_sum(amounts: Iterable[Decimal]) -> Decimal:
    """Sum amounts exactly, returning Decimal zero for an empty iterable."""
    return sum(amounts, ZERO)
