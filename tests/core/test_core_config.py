from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from core.config.rules import OrderingConfig, load_ordering_config


def test_defaults_match_house_numbering_and_tolerance():
    config = OrderingConfig()
    assert config.order_number_prefix == "PB-"
    assert config.stock_receipt_number_prefix == "SR-"
    assert config.price_tolerance == Decimal("0.01")
    assert config.default_credit_limit == Decimal("0")


def test_load_reads_settings_object():
    settings_obj = SimpleNamespace(
        PBD_ORDER_NUMBER_PREFIX="PX-",
        PBD_STOCK_RECEIPT_NUMBER_PREFIX="GR-",
        PBD_PRICE_TOLERANCE="0.05",
        PBD_DEFAULT_CUSTOMER_CREDIT_LIMIT="250",
    )
    config = load_ordering_config(settings_obj)
    assert config.order_number_prefix == "PX-"
    assert config.stock_receipt_number_prefix == "GR-"
    assert config.price_tolerance == Decimal("0.05")
    assert config.default_credit_limit == Decimal("250")


def test_load_falls_back_to_defaults_for_missing_settings():
    assert load_ordering_config(SimpleNamespace()) == OrderingConfig()


def test_load_reads_django_settings_by_default(settings):
    settings.PBD_ORDER_NUMBER_PREFIX = "ZZ-"
    assert load_ordering_config().order_number_prefix == "ZZ-"


def test_invalid_tolerance_rejected():
    with pytest.raises(ValueError, match="PBD_PRICE_TOLERANCE"):
        load_ordering_config(SimpleNamespace(PBD_PRICE_TOLERANCE="lots"))
    with pytest.raises(ValueError):
        OrderingConfig(price_tolerance=Decimal("-1"))
