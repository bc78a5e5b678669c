"""
Pyramid Books Orders - Policies
===============================
Pure checks over request lines and order state. Each returns a
RejectionReason or None.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.money import MONEY_MAX, exceeds_money_column
from engines.orders.status import is_transition_allowed


def line_total_matches_policy(
    *,
    book_id: int,
    qty: int,
    unit_price: Decimal,
    line_total: Decimal,
    tolerance: Decimal,
) -> Optional[RejectionReason]:
    """|line_total - qty * unit_price| must stay within tolerance."""
    expected = unit_price * qty
    if abs(line_total - expected) > tolerance:
        return RejectionReason(
            code=ReasonCode.PRICE_MISMATCH,
            message="Line total mismatch",
            policy_name="line_total_matches_policy",
            details={
                "book_id": book_id,
                "expected": str(expected),
                "declared": str(line_total),
            },
        )
    return None


def discount_within_subtotal_policy(
    *,
    subtotal: Decimal,
    discount: Decimal,
) -> Optional[RejectionReason]:
    if discount > subtotal:
        return RejectionReason(
            code=ReasonCode.VALIDATION_ERROR,
            message="Discount cannot exceed subtotal",
            policy_name="discount_within_subtotal_policy",
            details={"subtotal": str(subtotal), "discount": str(discount)},
        )
    return None


def amount_fits_column_policy(*, field_name: str, amount: Decimal) -> Optional[RejectionReason]:
    """Order money columns hold at most MONEY_MAX."""
    if exceeds_money_column(amount):
        return RejectionReason(
            code=ReasonCode.VALIDATION_ERROR,
            message=f"{field_name} exceeds the maximum amount of {MONEY_MAX}",
            policy_name="amount_fits_column_policy",
            details={"field": field_name, "amount": str(amount)},
        )
    return None


def cart_must_not_be_empty_policy(cart_items) -> Optional[RejectionReason]:
    if not cart_items:
        return RejectionReason(
            code=ReasonCode.CART_EMPTY,
            message="Cart is empty",
            policy_name="cart_must_not_be_empty_policy",
        )
    return None


def status_transition_policy(current: str, target: str) -> Optional[RejectionReason]:
    if not is_transition_allowed(current, target):
        return RejectionReason(
            code=ReasonCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot change order status from {current} to {target}",
            policy_name="status_transition_policy",
            details={"from": current, "to": target},
        )
    return None
