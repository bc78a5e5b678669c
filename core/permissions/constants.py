"""
Pyramid Books Permissions - Canonical Roles and Permission Keys
===============================================================
"""

from __future__ import annotations

# ── Roles ─────────────────────────────────────────────────────
ROLE_ADMIN = "admin"
ROLE_SALESMAN = "salesman"
ROLE_CUSTOMER = "customer"

VALID_ROLES = frozenset({ROLE_ADMIN, ROLE_SALESMAN, ROLE_CUSTOMER})
STAFF_ROLES = frozenset({ROLE_ADMIN, ROLE_SALESMAN})

# ── Permission keys ───────────────────────────────────────────
PERMISSION_ORDER_CREATE = "order.create"
PERMISSION_ORDER_VIEW_ALL = "order.view_all"
PERMISSION_ORDER_STATUS_UPDATE = "order.status.update"
PERMISSION_CART_CHECKOUT = "cart.checkout"
PERMISSION_DISCOUNT_MANAGE = "discount.manage"
PERMISSION_PAYMENT_RECORD = "payment.record"
PERMISSION_PAYMENT_VIEW_ALL = "payment.view_all"
PERMISSION_STOCK_RECEIVE = "stock.receive"
PERMISSION_CATALOG_MANAGE = "catalog.manage"
PERMISSION_CUSTOMER_MANAGE_ALL = "customer.manage_all"

VALID_PERMISSIONS = frozenset({
    PERMISSION_ORDER_CREATE,
    PERMISSION_ORDER_VIEW_ALL,
    PERMISSION_ORDER_STATUS_UPDATE,
    PERMISSION_CART_CHECKOUT,
    PERMISSION_DISCOUNT_MANAGE,
    PERMISSION_PAYMENT_RECORD,
    PERMISSION_PAYMENT_VIEW_ALL,
    PERMISSION_STOCK_RECEIVE,
    PERMISSION_CATALOG_MANAGE,
    PERMISSION_CUSTOMER_MANAGE_ALL,
})

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    ROLE_ADMIN: frozenset({
        PERMISSION_ORDER_CREATE,
        PERMISSION_ORDER_VIEW_ALL,
        PERMISSION_ORDER_STATUS_UPDATE,
        PERMISSION_DISCOUNT_MANAGE,
        PERMISSION_PAYMENT_RECORD,
        PERMISSION_PAYMENT_VIEW_ALL,
        PERMISSION_STOCK_RECEIVE,
        PERMISSION_CATALOG_MANAGE,
        PERMISSION_CUSTOMER_MANAGE_ALL,
    }),
    ROLE_SALESMAN: frozenset({
        PERMISSION_ORDER_CREATE,
        PERMISSION_ORDER_STATUS_UPDATE,
        PERMISSION_PAYMENT_RECORD,
        PERMISSION_PAYMENT_VIEW_ALL,
        PERMISSION_STOCK_RECEIVE,
    }),
    ROLE_CUSTOMER: frozenset({
        PERMISSION_CART_CHECKOUT,
    }),
}
