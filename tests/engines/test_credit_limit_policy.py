from __future__ import annotations

from decimal import Decimal

from engines.customer.policies import credit_limit_policy


def test_rejects_when_outstanding_plus_order_exceeds_limit():
    rejection = credit_limit_policy(
        outstanding=Decimal("80"),
        proposed_total=Decimal("25"),
        credit_limit=Decimal("100"),
    )
    assert rejection is not None
    assert rejection.code == "CREDIT_LIMIT_EXCEEDED"
    assert rejection.message == (
        "Order exceeds credit limit. Outstanding: 80.00, "
        "New order: 25.00, Credit limit: 100.00"
    )
    assert rejection.details == {
        "outstanding": "80.00",
        "proposed_total": "25.00",
        "credit_limit": "100.00",
    }


def test_allows_when_within_limit():
    assert (
        credit_limit_policy(
            outstanding=Decimal("80"),
            proposed_total=Decimal("15"),
            credit_limit=Decimal("100"),
        )
        is None
    )


def test_exactly_at_limit_is_allowed():
    assert (
        credit_limit_policy(
            outstanding=Decimal("80.00"),
            proposed_total=Decimal("20.00"),
            credit_limit=Decimal("100.00"),
        )
        is None
    )


def test_overpaid_customer_has_negative_outstanding():
    assert (
        credit_limit_policy(
            outstanding=Decimal("-30"),
            proposed_total=Decimal("120"),
            credit_limit=Decimal("100"),
        )
        is None
    )
