"""
Pyramid Books Promotions - Request Commands
===========================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.primitives.money import MONEY_MAX, exceeds_money_column, has_sub_cent_digits


@dataclass(frozen=True)
class DiscountRuleCreateRequest:
    rule_name: str
    discount_percentage: Decimal
    min_order_amount: Decimal = Decimal("0")
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    is_active: bool = True

    def __post_init__(self):
        if not self.rule_name or not isinstance(self.rule_name, str) or not self.rule_name.strip():
            raise ValueError("rule_name must be a non-empty string.")
        if not isinstance(self.discount_percentage, Decimal):
            raise ValueError("discount_percentage must be Decimal.")
        if self.discount_percentage < 0 or self.discount_percentage > 100:
            raise ValueError("discount_percentage must be between 0 and 100.")
        if has_sub_cent_digits(self.discount_percentage):
            raise ValueError("discount_percentage must have at most 2 decimal places.")
        if not isinstance(self.min_order_amount, Decimal) or self.min_order_amount < 0:
            raise ValueError("min_order_amount must be a non-negative Decimal.")
        if exceeds_money_column(self.min_order_amount):
            raise ValueError(f"min_order_amount must not exceed {MONEY_MAX}.")
        if self.valid_from is not None and self.valid_from.tzinfo is None:
            raise ValueError("valid_from must be timezone-aware.")
        if self.valid_to is not None and self.valid_to.tzinfo is None:
            raise ValueError("valid_to must be timezone-aware.")
        if (
            self.valid_from is not None
            and self.valid_to is not None
            and self.valid_from > self.valid_to
        ):
            raise ValueError("valid_from must not be after valid_to.")
