"""
Pyramid Books Core Primitives - Public API
==========================================
"""

from core.primitives.money import (
    CENT,
    HUNDRED,
    MONEY_MAX,
    ZERO,
    exceeds_money_column,
    format_money,
    has_sub_cent_digits,
    percentage_of,
    quantize_money,
    quantize_percentage,
    sum_money,
    to_decimal,
)

__all__ = [
    "CENT",
    "ZERO",
    "HUNDRED",
    "MONEY_MAX",
    "to_decimal",
    "quantize_money",
    "quantize_percentage",
    "exceeds_money_column",
    "has_sub_cent_digits",
    "sum_money",
    "format_money",
    "percentage_of",
]
