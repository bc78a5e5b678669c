"""
Pyramid Books Promotions - Application Service
==============================================
Discount rule administration and the DB-backed wrapper around the
pure resolver in engines.promotion.resolver.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.commands.errors import InvalidReference
from core.permissions.constants import PERMISSION_DISCOUNT_MANAGE
from core.permissions.policy import CapabilityPolicy
from engines.promotion.commands import DiscountRuleCreateRequest
from engines.promotion.models import DiscountRule
from engines.promotion.resolver import DiscountRuleSnapshot, resolve_best_discount

logger = logging.getLogger("pbd.promotion")


def _isoformat(value):
    return value.isoformat() if value is not None else None


def serialize_discount_rule(rule: DiscountRule) -> dict[str, Any]:
    return {
        "id": rule.pk,
        "rule_name": rule.rule_name,
        "discount_percentage": str(rule.discount_percentage),
        "min_order_amount": str(rule.min_order_amount),
        "valid_from": _isoformat(rule.valid_from),
        "valid_to": _isoformat(rule.valid_to),
        "is_active": rule.is_active,
        "created_by": rule.created_by_id,
    }


def list_active_rules() -> list[DiscountRule]:
    return list(DiscountRule.objects.filter(is_active=True).order_by("id"))


def active_rule_snapshots() -> tuple[DiscountRuleSnapshot, ...]:
    return tuple(DiscountRuleSnapshot.from_model(rule) for rule in list_active_rules())


def resolve_discount_percentage(subtotal: Decimal, now: datetime) -> Decimal:
    """Best percentage for subtotal at now, from the current active rule set."""
    percentage = resolve_best_discount(subtotal, active_rule_snapshots(), now)
    logger.debug("discount resolved subtotal=%s pct=%s", subtotal, percentage)
    return percentage


def create_discount_rule(
    *,
    policy: CapabilityPolicy,
    request: DiscountRuleCreateRequest,
) -> DiscountRule:
    policy.require(
        PERMISSION_DISCOUNT_MANAGE,
        message="Only admins can manage discount rules",
    )
    rule = DiscountRule.objects.create(
        rule_name=request.rule_name.strip(),
        discount_percentage=request.discount_percentage,
        min_order_amount=request.min_order_amount,
        valid_from=request.valid_from,
        valid_to=request.valid_to,
        is_active=request.is_active,
        created_by_id=policy.actor.actor_id,
    )
    logger.info(
        "discount rule created id=%s pct=%s min=%s",
        rule.pk,
        rule.discount_percentage,
        rule.min_order_amount,
    )
    return rule


def delete_discount_rule(*, policy: CapabilityPolicy, rule_id: int) -> None:
    policy.require(
        PERMISSION_DISCOUNT_MANAGE,
        message="Only admins can manage discount rules",
    )
    deleted, _ = DiscountRule.objects.filter(pk=rule_id).delete()
    if not deleted:
        raise InvalidReference(
            "Discount rule not found",
            policy_name="discount_rule_must_exist",
            details={"rule_id": rule_id},
        )
    logger.info("discount rule deleted id=%s", rule_id)
