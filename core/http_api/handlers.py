"""
Pyramid Books HTTP API - Framework-Agnostic Handlers
====================================================
Pure handler functions over contracts and injected dependencies.

Each handler resolves identity and capabilities once, calls exactly one
service operation and maps known workflow errors to the transport
envelope. Unexpected exceptions propagate to the framework.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.commands.errors import OrderWorkflowError
from core.commands.rejection import RejectionReason
from core.context.actor_context import ActorContext
from core.http_api.auth.middleware import resolve_request_context
from core.http_api.contracts import (
    BookListHttpRequest,
    CheckoutHttpRequest,
    HttpApiResult,
    ResourceIdRequest,
)
from core.http_api.errors import rejection_result, success_result, workflow_error_result
from core.permissions.policy import CapabilityPolicy
from engines.catalog.commands import StockReceiptCreateRequest
from engines.catalog.services import (
    create_stock_receipt,
    list_books as list_catalog_books,
    list_stock_receipts as list_catalog_stock_receipts,
    serialize_book,
    serialize_stock_receipt,
)
from engines.orders.commands import (
    CartAddRequest,
    CartUpdateRequest,
    OrderCreateRequest,
    OrderStatusUpdateRequest,
)
from engines.orders.services import (
    checkout_cart,
    create_order,
    get_order as get_visible_order,
    list_orders as list_visible_orders,
    serialize_order,
    serialize_order_header,
    update_order_status,
)
from engines.orders.services.cart import (
    add_to_cart,
    list_cart as list_cart_items,
    remove_cart_item,
    serialize_cart_item,
    update_cart_item,
)
from engines.payments.commands import PaymentCreateRequest
from engines.payments.services import (
    list_payments as list_visible_payments,
    record_payment,
    serialize_payment,
)
from engines.promotion.commands import DiscountRuleCreateRequest
from engines.promotion.services import (
    create_discount_rule,
    delete_discount_rule as remove_discount_rule,
    list_active_rules,
    serialize_discount_rule,
)

logger = logging.getLogger("pbd.http")

Operation = Callable[[ActorContext, CapabilityPolicy], Any]


def _run(
    operation: Operation,
    dependencies,
    headers: dict[str, Any] | None,
    *,
    success_status: int = 200,
    path_lookup: bool = False,
) -> HttpApiResult:
    resolved = resolve_request_context(headers, dependencies.auth_provider)
    if isinstance(resolved, RejectionReason):
        return rejection_result(resolved)
    actor_context, policy = resolved

    try:
        data = operation(actor_context, policy)
    except OrderWorkflowError as exc:
        logger.warning(
            "request rejected code=%s policy=%s actor=%s: %s",
            exc.reason.code,
            exc.reason.policy_name,
            actor_context.actor_id,
            exc.reason.message,
        )
        return workflow_error_result(exc, path_lookup=path_lookup)
    return success_result(data, status=success_status)


# ══════════════════════════════════════════════════════════════
# ORDERS
# ══════════════════════════════════════════════════════════════

def list_orders(dependencies, headers: dict[str, Any] | None = None) -> HttpApiResult:
    def _operation(_actor, policy):
        return [serialize_order_header(order) for order in list_visible_orders(policy=policy)]

    return _run(_operation, dependencies, headers)


def get_order(
    request: ResourceIdRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        return serialize_order(get_visible_order(policy=policy, order_id=request.resource_id))

    return _run(_operation, dependencies, headers, path_lookup=True)


def post_order_create(
    request: OrderCreateRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        order = create_order(
            policy=policy,
            request=request,
            clock=dependencies.clock,
            config=dependencies.config,
        )
        return serialize_order(order)

    return _run(_operation, dependencies, headers, success_status=201)


def patch_order_status(
    request: OrderStatusUpdateRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        return serialize_order(update_order_status(policy=policy, request=request))

    return _run(_operation, dependencies, headers, path_lookup=True)


# ══════════════════════════════════════════════════════════════
# CART
# ══════════════════════════════════════════════════════════════

def list_cart(dependencies, headers: dict[str, Any] | None = None) -> HttpApiResult:
    def _operation(_actor, policy):
        return [serialize_cart_item(item) for item in list_cart_items(policy=policy)]

    return _run(_operation, dependencies, headers)


def post_cart_add(
    request: CartAddRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        return serialize_cart_item(add_to_cart(policy=policy, request=request))

    return _run(_operation, dependencies, headers, success_status=201)


def patch_cart_item(
    request: CartUpdateRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        return serialize_cart_item(update_cart_item(policy=policy, request=request))

    return _run(_operation, dependencies, headers, path_lookup=True)


def delete_cart_item(
    request: ResourceIdRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        remove_cart_item(policy=policy, cart_item_id=request.resource_id)
        return {"id": request.resource_id, "deleted": True}

    return _run(_operation, dependencies, headers, path_lookup=True)


def post_cart_checkout(
    request: CheckoutHttpRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        order = checkout_cart(
            policy=policy,
            clock=dependencies.clock,
            config=dependencies.config,
            notes=request.notes,
        )
        return serialize_order(order)

    return _run(_operation, dependencies, headers, success_status=201)


# ══════════════════════════════════════════════════════════════
# DISCOUNT RULES
# ══════════════════════════════════════════════════════════════

def list_discount_rules(dependencies, headers: dict[str, Any] | None = None) -> HttpApiResult:
    def _operation(_actor, _policy):
        return [serialize_discount_rule(rule) for rule in list_active_rules()]

    return _run(_operation, dependencies, headers)


def post_discount_rule_create(
    request: DiscountRuleCreateRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        return serialize_discount_rule(create_discount_rule(policy=policy, request=request))

    return _run(_operation, dependencies, headers, success_status=201)


def delete_discount_rule(
    request: ResourceIdRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        remove_discount_rule(policy=policy, rule_id=request.resource_id)
        return {"id": request.resource_id, "deleted": True}

    return _run(_operation, dependencies, headers, path_lookup=True)


# ══════════════════════════════════════════════════════════════
# PAYMENTS
# ══════════════════════════════════════════════════════════════

def list_payments(dependencies, headers: dict[str, Any] | None = None) -> HttpApiResult:
    def _operation(_actor, policy):
        return [serialize_payment(payment) for payment in list_visible_payments(policy=policy)]

    return _run(_operation, dependencies, headers)


def post_payment_create(
    request: PaymentCreateRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        payment = record_payment(policy=policy, request=request, clock=dependencies.clock)
        return serialize_payment(payment)

    return _run(_operation, dependencies, headers, success_status=201)


# ══════════════════════════════════════════════════════════════
# CATALOG
# ══════════════════════════════════════════════════════════════

def list_books(
    request: BookListHttpRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, _policy):
        books = list_catalog_books(
            q=request.q,
            category=request.category,
            low_stock=request.low_stock,
        )
        return [serialize_book(book) for book in books]

    return _run(_operation, dependencies, headers)


def list_stock_receipts(dependencies, headers: dict[str, Any] | None = None) -> HttpApiResult:
    def _operation(_actor, policy):
        receipts = list_catalog_stock_receipts(policy=policy)
        return [serialize_stock_receipt(receipt) for receipt in receipts]

    return _run(_operation, dependencies, headers)


def post_stock_receipt_create(
    request: StockReceiptCreateRequest,
    dependencies,
    headers: dict[str, Any] | None = None,
) -> HttpApiResult:
    def _operation(_actor, policy):
        receipt = create_stock_receipt(
            policy=policy,
            request=request,
            clock=dependencies.clock,
            config=dependencies.config,
        )
        return serialize_stock_receipt(receipt)

    return _run(_operation, dependencies, headers, success_status=201)
