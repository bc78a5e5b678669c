"""
Pyramid Books Numbering - Service
=================================
Allocates the next document number inside the caller's transaction.

The counter row is locked with SELECT ... FOR UPDATE, so two concurrent
commits for the same period serialize on it; a rollback of the caller
also rolls the counter back, leaving no gaps from failed orders.
"""

from __future__ import annotations

from datetime import datetime

from django.db import IntegrityError, transaction

from core.config.rules import OrderingConfig
from core.numbering.models import SequenceCounter
from core.numbering.policy import (
    SEQUENCE_ORDER,
    SEQUENCE_STOCK_RECEIPT,
    NumberingPolicy,
    period_key,
)


def order_numbering_policy(config: OrderingConfig) -> NumberingPolicy:
    return NumberingPolicy(
        sequence_key=SEQUENCE_ORDER,
        prefix=config.order_number_prefix,
        padding=config.sequence_padding,
    )


def stock_receipt_numbering_policy(config: OrderingConfig) -> NumberingPolicy:
    return NumberingPolicy(
        sequence_key=SEQUENCE_STOCK_RECEIPT,
        prefix=config.stock_receipt_number_prefix,
        padding=config.sequence_padding,
    )


def _locked_counter(policy: NumberingPolicy, period: str) -> SequenceCounter:
    counter = (
        SequenceCounter.objects.select_for_update()
        .filter(sequence_key=policy.sequence_key, period_key=period)
        .first()
    )
    if counter is not None:
        return counter
    try:
        with transaction.atomic():
            return SequenceCounter.objects.create(
                sequence_key=policy.sequence_key,
                period_key=period,
                next_value=policy.start_at,
            )
    except IntegrityError:
        # Another transaction created the period row first.
        return SequenceCounter.objects.select_for_update().get(
            sequence_key=policy.sequence_key,
            period_key=period,
        )


def next_number(policy: NumberingPolicy, issued_at: datetime) -> str:
    """Return the next formatted number for issued_at and advance the counter."""
    if not isinstance(issued_at, datetime):
        raise ValueError("issued_at must be datetime.")

    period = period_key(policy, issued_at)
    with transaction.atomic():
        counter = _locked_counter(policy, period)
        sequence = counter.next_value
        counter.next_value = sequence + 1
        counter.save(update_fields=["next_value", "updated_at"])
    return policy.format_number(sequence, period)
