from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.config.rules import OrderingConfig
from core.numbering.models import SequenceCounter
from core.numbering.service import (
    next_number,
    order_numbering_policy,
    stock_receipt_numbering_policy,
)

pytestmark = pytest.mark.django_db(transaction=True)

MARCH_2026 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
JANUARY_2027 = datetime(2027, 1, 2, 12, 0, tzinfo=timezone.utc)


def test_order_numbers_are_sequential_within_a_year() -> None:
    policy = order_numbering_policy(OrderingConfig())
    assert next_number(policy, MARCH_2026) == "PB-2026-000001"
    assert next_number(policy, MARCH_2026) == "PB-2026-000002"
    assert next_number(policy, MARCH_2026) == "PB-2026-000003"


def test_sequence_resets_each_year() -> None:
    policy = order_numbering_policy(OrderingConfig())
    next_number(policy, MARCH_2026)
    next_number(policy, MARCH_2026)
    assert next_number(policy, JANUARY_2027) == "PB-2027-000001"
    assert SequenceCounter.objects.filter(sequence_key="ORDER").count() == 2


def test_order_and_receipt_sequences_are_independent() -> None:
    config = OrderingConfig(order_number_prefix="PX-", stock_receipt_number_prefix="GR-")
    assert next_number(order_numbering_policy(config), MARCH_2026) == "PX-2026-000001"
    assert next_number(stock_receipt_numbering_policy(config), MARCH_2026) == "GR-2026-000001"
    assert next_number(order_numbering_policy(config), MARCH_2026) == "PX-2026-000002"


def test_issued_at_must_be_datetime() -> None:
    with pytest.raises(ValueError):
        next_number(order_numbering_policy(OrderingConfig()), "2026-03-01")
