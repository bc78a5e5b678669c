from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.config.rules import OrderingConfig
from core.context.actor_context import ActorContext
from core.permissions.policy import CapabilityPolicy
from core.time.clock import FixedClock

FIXED_NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def ordering_config() -> OrderingConfig:
    return OrderingConfig()


@pytest.fixture
def policy_for():
    def _policy_for(user, customer_id=None) -> CapabilityPolicy:
        return CapabilityPolicy.for_actor(
            ActorContext(
                actor_id=user.user_id,
                role=user.role,
                customer_id=customer_id,
                email=user.email,
            )
        )

    return _policy_for


# ── Persistent fixtures (require a django_db mark) ────────────

@pytest.fixture
def admin_user():
    from core.identity_store.service import upsert_user

    return upsert_user(
        user_id="admin-1",
        role="admin",
        email="admin@pyramid.test",
        first_name="Ada",
        last_name="Admin",
    )


@pytest.fixture
def salesman_user():
    from core.identity_store.service import upsert_user

    return upsert_user(
        user_id="sales-1",
        role="salesman",
        email="sales1@pyramid.test",
        first_name="Sam",
        last_name="Seller",
    )


@pytest.fixture
def other_salesman_user():
    from core.identity_store.service import upsert_user

    return upsert_user(
        user_id="sales-2",
        role="salesman",
        email="sales2@pyramid.test",
    )


@pytest.fixture
def customer_user():
    from core.identity_store.service import upsert_user

    return upsert_user(
        user_id="cust-1",
        role="customer",
        email="cara@reader.test",
        first_name="Cara",
        last_name="Reader",
    )


@pytest.fixture
def make_book():
    from engines.catalog.models import Book

    def _make_book(title="Book", unit_price="10.00", stock_qty=10, **kwargs):
        return Book.objects.create(
            title=title,
            unit_price=Decimal(unit_price),
            stock_qty=stock_qty,
            **kwargs,
        )

    return _make_book


@pytest.fixture
def make_customer():
    from engines.customer.models import Customer

    def _make_customer(name="Riverside School", credit_limit="0", **kwargs):
        return Customer.objects.create(
            name=name,
            customer_type=kwargs.pop("customer_type", "school"),
            credit_limit=Decimal(credit_limit),
            **kwargs,
        )

    return _make_customer


@pytest.fixture
def make_discount_rule(admin_user):
    from engines.promotion.models import DiscountRule

    def _make_rule(percentage, min_order_amount="0", **kwargs):
        return DiscountRule.objects.create(
            rule_name=kwargs.pop("rule_name", f"{percentage}% off"),
            discount_percentage=Decimal(percentage),
            min_order_amount=Decimal(min_order_amount),
            created_by=admin_user,
            **kwargs,
        )

    return _make_rule
