from __future__ import annotations

from types import SimpleNamespace

import pytest

from core.commands.errors import Forbidden
from core.context.actor_context import ActorContext
from core.permissions import (
    PERMISSION_CART_CHECKOUT,
    PERMISSION_DISCOUNT_MANAGE,
    PERMISSION_ORDER_CREATE,
    PERMISSION_STOCK_RECEIVE,
)
from core.permissions.policy import CapabilityPolicy


def _policy(actor_id: str, role: str, customer_id=None) -> CapabilityPolicy:
    return CapabilityPolicy.for_actor(
        ActorContext(actor_id=actor_id, role=role, customer_id=customer_id)
    )


ADMIN = _policy("admin-1", "admin")
SALESMAN = _policy("sales-1", "salesman")
CUSTOMER = _policy("cust-1", "customer", customer_id=7)


def test_role_capabilities():
    assert ADMIN.has(PERMISSION_ORDER_CREATE)
    assert ADMIN.has(PERMISSION_DISCOUNT_MANAGE)
    assert not ADMIN.has(PERMISSION_CART_CHECKOUT)

    assert SALESMAN.has(PERMISSION_ORDER_CREATE)
    assert SALESMAN.has(PERMISSION_STOCK_RECEIVE)
    assert not SALESMAN.has(PERMISSION_DISCOUNT_MANAGE)

    assert CUSTOMER.has(PERMISSION_CART_CHECKOUT)
    assert not CUSTOMER.has(PERMISSION_ORDER_CREATE)


def test_role_shortcuts():
    assert ADMIN.is_admin and ADMIN.is_staff
    assert SALESMAN.is_salesman and SALESMAN.is_staff
    assert CUSTOMER.is_customer and not CUSTOMER.is_staff


def test_require_raises_forbidden_with_permission_details():
    with pytest.raises(Forbidden) as exc_info:
        CUSTOMER.require(PERMISSION_ORDER_CREATE, message="Only staff can create orders")
    reason = exc_info.value.reason
    assert reason.code == "FORBIDDEN"
    assert reason.message == "Only staff can create orders"
    assert reason.details == {"permission": PERMISSION_ORDER_CREATE, "role": "customer"}


def test_customer_scope_admin_all_salesman_assigned_only():
    assigned = SimpleNamespace(pk=1, assigned_salesman_id="sales-1")
    unassigned = SimpleNamespace(pk=2, assigned_salesman_id="sales-2")
    orphan = SimpleNamespace(pk=3, assigned_salesman_id=None)

    assert ADMIN.can_act_for_customer(unassigned)
    assert ADMIN.can_act_for_customer(orphan)
    assert SALESMAN.can_act_for_customer(assigned)
    assert not SALESMAN.can_act_for_customer(unassigned)
    assert not SALESMAN.can_act_for_customer(orphan)
    assert not CUSTOMER.can_act_for_customer(assigned)

    with pytest.raises(Forbidden, match="assigned customers"):
        SALESMAN.require_customer_scope(unassigned, message="only assigned customers")


def test_order_visibility():
    by_salesman = SimpleNamespace(created_by_id="sales-1", customer_id=9)
    for_customer = SimpleNamespace(created_by_id="sales-2", customer_id=7)

    assert ADMIN.can_view_order(by_salesman)
    assert SALESMAN.can_view_order(by_salesman)
    assert not SALESMAN.can_view_order(for_customer)
    assert CUSTOMER.can_view_order(for_customer)
    assert not CUSTOMER.can_view_order(by_salesman)


def test_status_update_admin_or_creating_salesman():
    by_salesman = SimpleNamespace(created_by_id="sales-1", customer_id=9)
    by_other = SimpleNamespace(created_by_id="sales-2", customer_id=9)
    by_customer = SimpleNamespace(created_by_id="cust-1", customer_id=7)

    assert ADMIN.can_update_order_status(by_other)
    assert SALESMAN.can_update_order_status(by_salesman)
    assert not SALESMAN.can_update_order_status(by_other)
    assert not CUSTOMER.can_update_order_status(by_customer)


def test_actor_context_rejects_unknown_role():
    with pytest.raises(ValueError, match="role"):
        ActorContext(actor_id="x", role="manager")
