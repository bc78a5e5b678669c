"""
Pyramid Books Promotions - Discount Resolver
============================================
Pure selection of the single best discount for a subtotal.

RULES:
- A rule qualifies when it is active, subtotal >= min_order_amount,
  and now falls inside [valid_from, valid_to] (either bound optional).
- Rules never stack: the highest qualifying percentage wins.
- Equal percentages resolve to the lowest rule id.
- No database access and no clock reads here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from core.primitives.money import ZERO


@dataclass(frozen=True)
class DiscountRuleSnapshot:
    rule_id: int
    percentage: Decimal
    min_order_amount: Decimal = ZERO
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    is_active: bool = True

    def __post_init__(self):
        if not isinstance(self.percentage, Decimal):
            raise ValueError("percentage must be Decimal.")
        if self.percentage < 0 or self.percentage > 100:
            raise ValueError("percentage must be between 0 and 100.")
        if not isinstance(self.min_order_amount, Decimal) or self.min_order_amount < 0:
            raise ValueError("min_order_amount must be a non-negative Decimal.")

    @classmethod
    def from_model(cls, rule) -> "DiscountRuleSnapshot":
        return cls(
            rule_id=rule.pk,
            percentage=rule.discount_percentage,
            min_order_amount=rule.min_order_amount,
            valid_from=rule.valid_from,
            valid_to=rule.valid_to,
            is_active=rule.is_active,
        )


def rule_qualifies(rule: DiscountRuleSnapshot, subtotal: Decimal, now: datetime) -> bool:
    if not rule.is_active:
        return False
    if subtotal < rule.min_order_amount:
        return False
    if rule.valid_from is not None and now < rule.valid_from:
        return False
    if rule.valid_to is not None and now > rule.valid_to:
        return False
    return True


def select_best_rule(
    subtotal: Decimal,
    rules: Iterable[DiscountRuleSnapshot],
    now: datetime,
) -> Optional[DiscountRuleSnapshot]:
    best: Optional[DiscountRuleSnapshot] = None
    for rule in sorted(rules, key=lambda r: r.rule_id):
        if not rule_qualifies(rule, subtotal, now):
            continue
        if best is None or rule.percentage > best.percentage:
            best = rule
    return best


def resolve_best_discount(
    subtotal: Decimal,
    rules: Iterable[DiscountRuleSnapshot],
    now: datetime,
) -> Decimal:
    """Return the winning percentage, or 0 when nothing qualifies."""
    best = select_best_rule(subtotal, rules, now)
    return best.percentage if best is not None else ZERO
