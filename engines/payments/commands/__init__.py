"""
Pyramid Books Payments - Request Commands
=========================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.primitives.money import MONEY_MAX, exceeds_money_column, quantize_money
from engines.payments.models import PaymentMethod

VALID_PAYMENT_METHODS = frozenset(PaymentMethod.values)


@dataclass(frozen=True)
class PaymentCreateRequest:
    customer_id: int
    amount: Decimal
    method: str = PaymentMethod.CASH
    order_id: Optional[int] = None
    reference_no: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.customer_id, bool) or not isinstance(self.customer_id, int) or self.customer_id <= 0:
            raise ValueError("customer_id must be a positive integer.")
        if not isinstance(self.amount, Decimal) or self.amount <= 0:
            raise ValueError("amount must be a positive Decimal.")
        if exceeds_money_column(self.amount) or exceeds_money_column(quantize_money(self.amount)):
            raise ValueError(f"amount must not exceed {MONEY_MAX}.")
        if self.method not in VALID_PAYMENT_METHODS:
            raise ValueError(f"method '{self.method}' not valid.")
        if self.order_id is not None and (
            isinstance(self.order_id, bool)
            or not isinstance(self.order_id, int)
            or self.order_id <= 0
        ):
            raise ValueError("order_id must be a positive integer or None.")
