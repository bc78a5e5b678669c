"""
Pyramid Books Money Primitive
=============================
Decimal amounts at cent precision.

RULES:
- No floats. Amounts are Decimal end to end.
- Persisted amounts are quantized to 0.01 with ROUND_HALF_UP.
- Intermediate sums stay unquantized until persisted.
- Money columns are DecimalField(max_digits=12, decimal_places=2);
  MONEY_MAX is the largest amount they hold.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONEY_MAX = Decimal("9999999999.99")


def to_decimal(value: Any, *, field_name: str = "amount") -> Decimal:
    """Coerce str/int/Decimal into Decimal. Floats are rejected."""
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"{field_name} must be a decimal string or int, not {type(value).__name__}.")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"{field_name} must be a decimal value.") from exc
    else:
        raise ValueError(f"{field_name} must be a decimal value.")
    if not result.is_finite():
        raise ValueError(f"{field_name} must be finite.")
    return result


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    total = ZERO
    for value in values:
        total += value
    return total


def format_money(value: Decimal) -> str:
    """Two-decimal string, e.g. Decimal("80") -> "80.00"."""
    return str(quantize_money(value))


def percentage_of(amount: Decimal, percentage: Decimal) -> Decimal:
    return amount * percentage / HUNDRED


def quantize_percentage(value: Decimal) -> Decimal:
    """Percentages are stored as DecimalField(5, 2)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def exceeds_money_column(value: Decimal) -> bool:
    return abs(value) > MONEY_MAX


def has_sub_cent_digits(value: Decimal) -> bool:
    """True for values such as 12.345; trailing zeros (1.500) do not count."""
    return value.normalize().as_tuple().exponent < -2
