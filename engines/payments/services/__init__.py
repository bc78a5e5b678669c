"""
Pyramid Books Payments - Application Service
============================================
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

from core.commands.errors import InvalidReference
from core.permissions.constants import PERMISSION_PAYMENT_RECORD, PERMISSION_PAYMENT_VIEW_ALL
from core.permissions.policy import CapabilityPolicy
from core.primitives.money import quantize_money
from core.time.clock import Clock
from engines.customer.services import require_customer
from engines.orders.models import Order
from engines.payments.commands import PaymentCreateRequest
from engines.payments.models import Payment

logger = logging.getLogger("pbd.customer.payments")


def serialize_payment(payment: Payment) -> dict[str, Any]:
    return {
        "id": payment.pk,
        "customer_id": payment.customer_id,
        "customer_name": payment.customer.name,
        "order_id": payment.order_id,
        "received_by": payment.received_by_id,
        "received_at": payment.received_at.isoformat(),
        "method": payment.method,
        "amount": str(payment.amount),
        "reference_no": payment.reference_no,
        "notes": payment.notes,
    }


def record_payment(
    *,
    policy: CapabilityPolicy,
    request: PaymentCreateRequest,
    clock: Clock,
) -> Payment:
    policy.require(PERMISSION_PAYMENT_RECORD, message="Only staff can record payments")

    with transaction.atomic():
        customer = require_customer(request.customer_id)
        policy.require_customer_scope(
            customer,
            message="Salesman can only record payments for assigned customers",
        )
        if request.order_id is not None and not Order.objects.filter(
            pk=request.order_id, customer_id=customer.pk
        ).exists():
            raise InvalidReference(
                "Order not found for customer",
                policy_name="payment_order_must_belong_to_customer",
                details={"order_id": request.order_id, "customer_id": customer.pk},
            )

        payment = Payment.objects.create(
            customer=customer,
            order_id=request.order_id,
            received_by_id=policy.actor.actor_id,
            received_at=clock.now_utc(),
            method=request.method,
            amount=quantize_money(request.amount),
            reference_no=request.reference_no,
            notes=request.notes,
        )

    logger.info(
        "payment recorded id=%s customer=%s amount=%s by=%s",
        payment.pk,
        customer.pk,
        payment.amount,
        policy.actor.actor_id,
    )
    return payment


def list_payments(*, policy: CapabilityPolicy) -> list[Payment]:
    """Staff see every payment; customers only their own customer record's."""
    queryset = Payment.objects.select_related("customer").order_by("-received_at", "-id")
    if policy.has(PERMISSION_PAYMENT_VIEW_ALL):
        return list(queryset)
    if policy.actor.customer_id is None:
        return []
    return list(queryset.filter(customer_id=policy.actor.customer_id))
