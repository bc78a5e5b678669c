"""
Pyramid Books Customer Ledger - Request Commands
================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from core.primitives.money import MONEY_MAX, exceeds_money_column
from engines.customer.models import CustomerType

VALID_CUSTOMER_TYPES = frozenset(CustomerType.values)


@dataclass(frozen=True)
class CustomerCreateRequest:
    name: str
    customer_type: str = CustomerType.CUSTOMER
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    credit_limit: Decimal = Decimal("0")
    notes: Optional[str] = None
    assigned_salesman_id: Optional[str] = None

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string.")
        if self.customer_type not in VALID_CUSTOMER_TYPES:
            raise ValueError(f"customer_type '{self.customer_type}' not valid.")
        if not isinstance(self.credit_limit, Decimal) or self.credit_limit < 0:
            raise ValueError("credit_limit must be a non-negative Decimal.")
        if exceeds_money_column(self.credit_limit):
            raise ValueError(f"credit_limit must not exceed {MONEY_MAX}.")
