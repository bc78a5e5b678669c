"""
Discount Resolver: single best qualifying percentage, never stacked.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from engines.promotion.resolver import (
    DiscountRuleSnapshot,
    resolve_best_discount,
    rule_qualifies,
    select_best_rule,
)

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _rule(rule_id, pct, min_amount="0", **kwargs) -> DiscountRuleSnapshot:
    return DiscountRuleSnapshot(
        rule_id=rule_id,
        percentage=Decimal(pct),
        min_order_amount=Decimal(min_amount),
        **kwargs,
    )


TIERED = (_rule(1, "5", "0"), _rule(2, "10", "100"))


@pytest.mark.parametrize(
    "subtotal, expected",
    [
        ("150", "10"),
        ("100", "10"),
        ("99.99", "5"),
        ("50", "5"),
        ("0", "5"),
    ],
)
def test_tiered_rules_pick_highest_qualifying(subtotal, expected):
    assert resolve_best_discount(Decimal(subtotal), TIERED, NOW) == Decimal(expected)


def test_no_rules_means_no_discount():
    assert resolve_best_discount(Decimal("150"), (), NOW) == Decimal("0")


def test_rules_do_not_stack():
    rules = (_rule(1, "5"), _rule(2, "10"), _rule(3, "3"))
    assert resolve_best_discount(Decimal("500"), rules, NOW) == Decimal("10")


def test_equal_percentages_resolve_to_lowest_rule_id():
    rules = (_rule(9, "10", "0"), _rule(4, "10", "50"), _rule(6, "8"))
    assert select_best_rule(Decimal("80"), rules, NOW).rule_id == 4
    assert select_best_rule(Decimal("20"), rules, NOW).rule_id == 9


def test_inactive_rule_ignored():
    rules = (_rule(1, "5"), _rule(2, "20", is_active=False))
    assert resolve_best_discount(Decimal("100"), rules, NOW) == Decimal("5")


def test_validity_window_bounds_are_inclusive():
    starts_now = _rule(1, "15", valid_from=NOW)
    ends_now = _rule(2, "12", valid_to=NOW)
    assert rule_qualifies(starts_now, Decimal("1"), NOW)
    assert rule_qualifies(ends_now, Decimal("1"), NOW)


def test_rules_outside_window_ignored():
    later = NOW + timedelta(days=1)
    earlier = NOW - timedelta(seconds=1)
    rules = (
        _rule(1, "30", valid_from=later),
        _rule(2, "25", valid_to=earlier),
        _rule(3, "2"),
    )
    assert resolve_best_discount(Decimal("10"), rules, NOW) == Decimal("2")


def test_resolution_depends_only_on_inputs():
    rules = list(TIERED)
    first = resolve_best_discount(Decimal("150"), rules, NOW)
    second = resolve_best_discount(Decimal("150"), list(reversed(rules)), NOW)
    assert first == second == Decimal("10")


@pytest.mark.parametrize("pct", ["-1", "100.01"])
def test_snapshot_rejects_out_of_range_percentage(pct):
    with pytest.raises(ValueError):
        _rule(1, pct)
