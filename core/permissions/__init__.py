"""
Pyramid Books Permissions - Public API
======================================
Roles and permission keys only. CapabilityPolicy is imported from
core.permissions.policy: it depends on core.context, which imports
these constants.
"""

from core.permissions.constants import (
    PERMISSION_CART_CHECKOUT,
    PERMISSION_CATALOG_MANAGE,
    PERMISSION_CUSTOMER_MANAGE_ALL,
    PERMISSION_DISCOUNT_MANAGE,
    PERMISSION_ORDER_CREATE,
    PERMISSION_ORDER_STATUS_UPDATE,
    PERMISSION_ORDER_VIEW_ALL,
    PERMISSION_PAYMENT_RECORD,
    PERMISSION_PAYMENT_VIEW_ALL,
    PERMISSION_STOCK_RECEIVE,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_PERMISSIONS,
    ROLE_SALESMAN,
    STAFF_ROLES,
    VALID_PERMISSIONS,
    VALID_ROLES,
)

__all__ = [
    "ROLE_ADMIN",
    "ROLE_SALESMAN",
    "ROLE_CUSTOMER",
    "VALID_ROLES",
    "STAFF_ROLES",
    "ROLE_PERMISSIONS",
    "VALID_PERMISSIONS",
    "PERMISSION_ORDER_CREATE",
    "PERMISSION_ORDER_VIEW_ALL",
    "PERMISSION_ORDER_STATUS_UPDATE",
    "PERMISSION_CART_CHECKOUT",
    "PERMISSION_DISCOUNT_MANAGE",
    "PERMISSION_PAYMENT_RECORD",
    "PERMISSION_PAYMENT_VIEW_ALL",
    "PERMISSION_STOCK_RECEIVE",
    "PERMISSION_CATALOG_MANAGE",
    "PERMISSION_CUSTOMER_MANAGE_ALL",
]
