"""
Pyramid Books Customer Ledger - Application Service
===================================================
Customer records, actor-scoped listing, the auto-link used by cart
checkout and the credit guard over the order/payment ledger.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from django.db.models import Sum

from core.commands.errors import raise_if_rejected
from core.config.rules import OrderingConfig
from core.identity_store.models import User
from core.permissions.constants import PERMISSION_CUSTOMER_MANAGE_ALL
from core.permissions.policy import CapabilityPolicy
from core.primitives.money import ZERO
from engines.customer.commands import CustomerCreateRequest
from engines.customer.models import Customer, CustomerType
from engines.customer.policies import credit_limit_policy, customer_must_exist_policy

logger = logging.getLogger("pbd.customer")

AUTO_CREATED_NOTE = "Auto-created from cart checkout"


def serialize_customer(customer: Customer) -> dict[str, Any]:
    return {
        "id": customer.pk,
        "name": customer.name,
        "customer_type": customer.customer_type,
        "phone": customer.phone,
        "email": customer.email,
        "address": customer.address,
        "credit_limit": str(customer.credit_limit),
        "notes": customer.notes,
        "linked_user_id": customer.linked_user_id,
        "assigned_salesman_id": customer.assigned_salesman_id,
        "is_active": customer.is_active,
    }


def customer_summary(customer: Customer) -> dict[str, Any]:
    return {
        "id": customer.pk,
        "name": customer.name,
        "customer_type": customer.customer_type,
        "phone": customer.phone,
        "email": customer.email,
    }


# ══════════════════════════════════════════════════════════════
# READS
# ══════════════════════════════════════════════════════════════

def get_customer(customer_id: int) -> Optional[Customer]:
    return Customer.objects.filter(pk=customer_id).first()


def require_customer(customer_id: int) -> Customer:
    customer = get_customer(customer_id)
    raise_if_rejected(customer_must_exist_policy(customer, customer_id))
    return customer


def find_customer_id_for_user(user_id: str) -> Optional[int]:
    return (
        Customer.objects.filter(linked_user_id=user_id)
        .values_list("pk", flat=True)
        .first()
    )


def list_customers_for_actor(policy: CapabilityPolicy) -> list[Customer]:
    queryset = Customer.objects.order_by("-created_at", "-id")
    if policy.has(PERMISSION_CUSTOMER_MANAGE_ALL):
        return list(queryset)
    if policy.is_salesman:
        return list(queryset.filter(assigned_salesman_id=policy.actor.actor_id))
    if policy.is_customer and policy.actor.customer_id is not None:
        return list(queryset.filter(pk=policy.actor.customer_id))
    return []


# ══════════════════════════════════════════════════════════════
# WRITES
# ══════════════════════════════════════════════════════════════

def create_customer(
    *,
    policy: CapabilityPolicy,
    request: CustomerCreateRequest,
) -> Customer:
    policy.require(
        PERMISSION_CUSTOMER_MANAGE_ALL,
        message="Only admins can create customers",
    )
    customer = Customer.objects.create(
        name=request.name.strip(),
        customer_type=request.customer_type,
        phone=request.phone,
        email=request.email,
        address=request.address,
        credit_limit=request.credit_limit,
        notes=request.notes,
        assigned_salesman_id=request.assigned_salesman_id,
    )
    logger.info("customer created id=%s name=%r", customer.pk, customer.name)
    return customer


def _auto_customer_name(user: User) -> str:
    full_name = f"{user.first_name} {user.last_name}".strip()
    return full_name or user.email or "Customer"


def get_or_create_customer_for_user(
    user: User,
    *,
    config: OrderingConfig,
) -> tuple[Customer, bool]:
    """
    Return the Customer linked to user, creating it on first checkout.

    linked_user is unique, so two concurrent first checkouts converge
    on the same row through get_or_create.
    """
    customer, created = Customer.objects.get_or_create(
        linked_user=user,
        defaults={
            "name": _auto_customer_name(user),
            "customer_type": CustomerType.CUSTOMER,
            "email": user.email,
            "credit_limit": config.default_credit_limit,
            "notes": AUTO_CREATED_NOTE,
        },
    )
    if created:
        logger.info(
            "customer auto-created id=%s for user=%s", customer.pk, user.user_id
        )
    return customer, created


# ══════════════════════════════════════════════════════════════
# CREDIT GUARD
# ══════════════════════════════════════════════════════════════

def outstanding_balance(customer_id: int) -> Decimal:
    """Sum of the customer's order totals minus the sum of their payments."""
    from engines.orders.models import Order
    from engines.payments.models import Payment

    ordered = (
        Order.objects.filter(customer_id=customer_id).aggregate(total=Sum("total"))["total"]
        or ZERO
    )
    paid = (
        Payment.objects.filter(customer_id=customer_id).aggregate(total=Sum("amount"))["total"]
        or ZERO
    )
    return ordered - paid


def check_credit(customer_id: int, proposed_total: Decimal) -> None:
    """Raise CreditLimitExceeded when the proposed order would breach the limit."""
    customer = require_customer(customer_id)
    outstanding = outstanding_balance(customer.pk)
    rejection = credit_limit_policy(
        outstanding=outstanding,
        proposed_total=proposed_total,
        credit_limit=customer.credit_limit,
    )
    if rejection is not None:
        logger.warning(
            "credit guard rejected customer=%s outstanding=%s proposed=%s limit=%s",
            customer.pk,
            outstanding,
            proposed_total,
            customer.credit_limit,
        )
    raise_if_rejected(rejection)
