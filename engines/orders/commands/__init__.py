"""
Pyramid Books Orders - Request Commands
=======================================
Typed requests for order and cart writes.

Shape (types, ranges, non-empty collections) is validated in
__post_init__ with ValueError. References, stock, prices, credit and
permissions are checked later, inside the committing transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from core.primitives.money import MONEY_MAX, exceeds_money_column, has_sub_cent_digits
from engines.orders.models import OrderStatus

VALID_ORDER_STATUSES = frozenset(OrderStatus.values)


def _require_positive_int(value, *, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{field_name} must be a positive integer.")


def _require_money(value, *, field_name: str) -> None:
    if not isinstance(value, Decimal) or not value.is_finite() or value < 0:
        raise ValueError(f"{field_name} must be a non-negative Decimal.")
    if exceeds_money_column(value):
        raise ValueError(f"{field_name} must not exceed {MONEY_MAX}.")
    if has_sub_cent_digits(value):
        raise ValueError(f"{field_name} must have at most 2 decimal places.")


def _require_percentage(value, *, field_name: str) -> None:
    if not isinstance(value, Decimal) or not value.is_finite():
        raise ValueError(f"{field_name} must be a Decimal.")
    if value < 0 or value > 100:
        raise ValueError(f"{field_name} must be between 0 and 100.")
    if has_sub_cent_digits(value):
        raise ValueError(f"{field_name} must have at most 2 decimal places.")


# ══════════════════════════════════════════════════════════════
# STAFF ORDERS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderLineRequest:
    """One client-declared line: the engine re-checks line_total."""

    book_id: int
    qty: int
    unit_price: Decimal
    line_total: Decimal

    def __post_init__(self):
        _require_positive_int(self.book_id, field_name="book_id")
        _require_positive_int(self.qty, field_name="qty")
        _require_money(self.unit_price, field_name="unit_price")
        _require_money(self.line_total, field_name="line_total")


@dataclass(frozen=True)
class OrderCreateRequest:
    customer_id: int
    items: Tuple[OrderLineRequest, ...]
    discount: Decimal = Decimal("0")
    discount_percentage: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    notes: Optional[str] = None

    def __post_init__(self):
        _require_positive_int(self.customer_id, field_name="customer_id")
        if not isinstance(self.items, tuple) or not self.items:
            raise ValueError("items must contain at least one line.")
        for item in self.items:
            if not isinstance(item, OrderLineRequest):
                raise ValueError("items must contain OrderLineRequest instances.")
        _require_money(self.discount, field_name="discount")
        _require_percentage(self.discount_percentage, field_name="discount_percentage")
        _require_money(self.tax, field_name="tax")
        if self.notes is not None and not isinstance(self.notes, str):
            raise ValueError("notes must be a string or None.")


@dataclass(frozen=True)
class OrderStatusUpdateRequest:
    order_id: int
    status: str

    def __post_init__(self):
        _require_positive_int(self.order_id, field_name="order_id")
        if self.status not in VALID_ORDER_STATUSES:
            raise ValueError(
                f"status '{self.status}' not valid. "
                f"Must be one of: {sorted(VALID_ORDER_STATUSES)}"
            )


# ══════════════════════════════════════════════════════════════
# CART
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CartAddRequest:
    book_id: int
    qty: int = 1

    def __post_init__(self):
        _require_positive_int(self.book_id, field_name="book_id")
        _require_positive_int(self.qty, field_name="qty")


@dataclass(frozen=True)
class CartUpdateRequest:
    cart_item_id: int
    qty: int

    def __post_init__(self):
        _require_positive_int(self.cart_item_id, field_name="cart_item_id")
        _require_positive_int(self.qty, field_name="qty")
