"""
Pyramid Books Orders - Order Orchestrator
=========================================
Composes the pricing/stock engine, the discount resolver and the credit
guard under one transaction.

Staff create:      authorize -> lock books -> price declared lines
                   -> totals from declared discount/tax -> commit
Customer checkout: own customer (auto-created) -> lock cart and books
                   -> price cart -> best discount -> credit guard
                   -> commit -> clear cart

Every failure is raised inside transaction.atomic(), so no stock,
order, line, counter or cart change from a rejected request is visible.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import transaction
from django.db.models import Q

from core.commands.errors import Forbidden, InvalidReference, raise_if_rejected
from core.config.rules import OrderingConfig
from core.identity_store.models import User
from core.numbering.service import next_number, order_numbering_policy
from core.permissions.constants import (
    PERMISSION_CART_CHECKOUT,
    PERMISSION_ORDER_CREATE,
    PERMISSION_ORDER_VIEW_ALL,
)
from core.permissions.policy import POLICY_NAME as CAPABILITY_POLICY_NAME
from core.permissions.policy import CapabilityPolicy
from core.primitives.money import sum_money
from core.time.clock import Clock
from engines.catalog.services import book_summary, lock_books
from engines.customer.models import Customer
from engines.customer.services import (
    check_credit,
    customer_summary,
    get_or_create_customer_for_user,
    require_customer,
)
from engines.orders.commands import OrderCreateRequest, OrderStatusUpdateRequest
from engines.orders.models import CartItem, Order
from engines.orders.policies import cart_must_not_be_empty_policy, status_transition_policy
from engines.orders.pricing import (
    commit_order,
    compute_totals,
    price_cart_lines,
    price_declared_lines,
)
from engines.promotion.services import resolve_discount_percentage

logger = logging.getLogger("pbd.orders")


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════

def _user_summary(user: User) -> dict[str, Any]:
    return {
        "id": user.user_id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
    }


def serialize_order_header(order: Order) -> dict[str, Any]:
    return {
        "id": order.pk,
        "order_no": order.order_no,
        "customer_id": order.customer_id,
        "customer_name": order.customer.name,
        "created_by": order.created_by_id,
        "order_date": order.order_date.isoformat(),
        "status": order.status,
        "subtotal": str(order.subtotal),
        "discount_percentage": str(order.discount_percentage),
        "discount": str(order.discount),
        "tax": str(order.tax),
        "total": str(order.total),
        "notes": order.notes,
    }


def serialize_order(order: Order) -> dict[str, Any]:
    """Full order payload: header, lines with book summary, customer and creator."""
    data = serialize_order_header(order)
    data["customer"] = customer_summary(order.customer)
    data["created_by_user"] = _user_summary(order.created_by)
    data["items"] = [
        {
            "id": item.pk,
            "book_id": item.book_id,
            "qty": item.qty,
            "unit_price": str(item.unit_price),
            "line_total": str(item.line_total),
            "book": book_summary(item.book),
        }
        for item in order.items.all()
    ]
    return data


def _order_queryset():
    return Order.objects.select_related("customer", "created_by").prefetch_related(
        "items__book"
    )


# ══════════════════════════════════════════════════════════════
# STAFF ORDERS
# ══════════════════════════════════════════════════════════════

def create_order(
    *,
    policy: CapabilityPolicy,
    request: OrderCreateRequest,
    clock: Clock,
    config: OrderingConfig,
) -> Order:
    """Staff-created order with client-declared prices, discount and tax."""
    policy.require(PERMISSION_ORDER_CREATE, message="Only staff can create orders")
    order_date = clock.now_utc()

    with transaction.atomic():
        customer = require_customer(request.customer_id)
        policy.require_customer_scope(
            customer,
            message="Salesman can only create orders for assigned customers",
        )

        books = lock_books(line.book_id for line in request.items)
        lines = price_declared_lines(
            request.items, books, tolerance=config.price_tolerance
        )
        totals = compute_totals(
            lines,
            discount_percentage=request.discount_percentage,
            declared_discount=request.discount,
            tax=request.tax,
        )
        order = commit_order(
            order_no=next_number(order_numbering_policy(config), order_date),
            customer_id=customer.pk,
            created_by_id=policy.actor.actor_id,
            lines=lines,
            totals=totals,
            order_date=order_date,
            notes=request.notes,
        )

    logger.info(
        "order committed order_no=%s customer=%s total=%s lines=%d by=%s",
        order.order_no,
        customer.pk,
        order.total,
        len(lines),
        policy.actor.actor_id,
    )
    return get_order(policy=policy, order_id=order.pk)


# ══════════════════════════════════════════════════════════════
# CUSTOMER CHECKOUT
# ══════════════════════════════════════════════════════════════

def checkout_cart(
    *,
    policy: CapabilityPolicy,
    clock: Clock,
    config: OrderingConfig,
    notes: Optional[str] = None,
) -> Order:
    """Convert the actor's cart into a confirmed order at catalog prices."""
    policy.require(PERMISSION_CART_CHECKOUT, message="Only customers can checkout cart")
    actor_id = policy.actor.actor_id
    order_date = clock.now_utc()

    with transaction.atomic():
        cart_items = list(
            CartItem.objects.select_for_update().filter(user_id=actor_id).order_by("id")
        )
        raise_if_rejected(cart_must_not_be_empty_policy(cart_items))

        user = User.objects.get(pk=actor_id)
        customer, created = get_or_create_customer_for_user(user, config=config)
        # Serializes concurrent checkouts of one customer around the credit check.
        customer = Customer.objects.select_for_update().get(pk=customer.pk)

        books = lock_books(item.book_id for item in cart_items)
        lines = price_cart_lines(cart_items, books)
        subtotal = sum_money(line.line_total for line in lines)
        totals = compute_totals(
            lines,
            discount_percentage=resolve_discount_percentage(subtotal, order_date),
        )

        if not created:
            check_credit(customer.pk, totals.total)

        order = commit_order(
            order_no=next_number(order_numbering_policy(config), order_date),
            customer_id=customer.pk,
            created_by_id=actor_id,
            lines=lines,
            totals=totals,
            order_date=order_date,
            notes=notes,
        )
        CartItem.objects.filter(pk__in=[item.pk for item in cart_items]).delete()

    logger.info(
        "checkout committed order_no=%s customer=%s total=%s discount_pct=%s user=%s",
        order.order_no,
        customer.pk,
        order.total,
        order.discount_percentage,
        actor_id,
    )
    return _order_queryset().get(pk=order.pk)


# ══════════════════════════════════════════════════════════════
# READS
# ══════════════════════════════════════════════════════════════

def get_order(*, policy: CapabilityPolicy, order_id: int) -> Order:
    order = _order_queryset().filter(pk=order_id).first()
    if order is None:
        raise InvalidReference(
            "Order not found",
            policy_name="order_must_exist",
            details={"order_id": order_id},
        )
    if not policy.can_view_order(order):
        raise Forbidden(
            "Forbidden",
            policy_name=CAPABILITY_POLICY_NAME,
            details={"order_id": order_id},
        )
    return order


def list_orders(*, policy: CapabilityPolicy) -> list[Order]:
    queryset = Order.objects.select_related("customer").order_by("-order_date", "-id")
    if policy.has(PERMISSION_ORDER_VIEW_ALL):
        return list(queryset)
    if policy.is_customer and policy.actor.customer_id is not None:
        return list(
            queryset.filter(
                Q(created_by_id=policy.actor.actor_id)
                | Q(customer_id=policy.actor.customer_id)
            )
        )
    return list(queryset.filter(created_by_id=policy.actor.actor_id))


# ══════════════════════════════════════════════════════════════
# STATUS
# ══════════════════════════════════════════════════════════════

def update_order_status(
    *,
    policy: CapabilityPolicy,
    request: OrderStatusUpdateRequest,
) -> Order:
    """
    Move an order along the status machine. Amounts and stock are not
    touched; cancelling does not restock.
    """
    with transaction.atomic():
        order = Order.objects.select_for_update().filter(pk=request.order_id).first()
        if order is None:
            raise InvalidReference(
                "Order not found",
                policy_name="order_must_exist",
                details={"order_id": request.order_id},
            )
        if not policy.can_update_order_status(order):
            raise Forbidden(
                "Forbidden",
                policy_name=CAPABILITY_POLICY_NAME,
                details={"order_id": request.order_id},
            )
        previous = order.status
        raise_if_rejected(status_transition_policy(previous, request.status))
        order.status = request.status
        order.save(update_fields=["status"])

    logger.info(
        "order status changed order_no=%s %s->%s by=%s",
        order.order_no,
        previous,
        request.status,
        policy.actor.actor_id,
    )
    return get_order(policy=policy, order_id=order.pk)
