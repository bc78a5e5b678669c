"""
Pyramid Books Customer Ledger - Policies
========================================
The credit guard is a pure rule over three amounts; the service feeds
it the ledger figures.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.money import format_money


def credit_limit_policy(
    *,
    outstanding: Decimal,
    proposed_total: Decimal,
    credit_limit: Decimal,
) -> Optional[RejectionReason]:
    """Reject when outstanding + proposed_total exceeds credit_limit."""
    if outstanding + proposed_total > credit_limit:
        return RejectionReason(
            code=ReasonCode.CREDIT_LIMIT_EXCEEDED,
            message=(
                "Order exceeds credit limit. "
                f"Outstanding: {format_money(outstanding)}, "
                f"New order: {format_money(proposed_total)}, "
                f"Credit limit: {format_money(credit_limit)}"
            ),
            policy_name="credit_limit_policy",
            details={
                "outstanding": format_money(outstanding),
                "proposed_total": format_money(proposed_total),
                "credit_limit": format_money(credit_limit),
            },
        )
    return None


def customer_must_exist_policy(customer, customer_id: int) -> Optional[RejectionReason]:
    if customer is None:
        return RejectionReason(
            code=ReasonCode.INVALID_REFERENCE,
            message="Customer not found",
            policy_name="customer_must_exist_policy",
            details={"customer_id": customer_id},
        )
    return None
