"""
Pyramid Books Core Config - Ordering Rules
==========================================
Operational constants for the ordering workflow come from Django
settings, never from literals scattered through engine code.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


@dataclass(frozen=True)
class OrderingConfig:
    """
    Frozen snapshot of ordering settings.

    Fields:
        order_number_prefix:        Prefix for order numbers ("PB-").
        stock_receipt_number_prefix: Prefix for stock receipt numbers ("SR-").
        price_tolerance:            Allowed |line_total - qty*unit_price|.
        default_credit_limit:       Credit limit for auto-created customers.
        sequence_padding:           Digit width of the sequence part.
    """

    order_number_prefix: str = "PB-"
    stock_receipt_number_prefix: str = "SR-"
    price_tolerance: Decimal = Decimal("0.01")
    default_credit_limit: Decimal = Decimal("0")
    sequence_padding: int = 6

    def __post_init__(self) -> None:
        if not isinstance(self.order_number_prefix, str):
            raise ValueError("order_number_prefix must be a string.")
        if not isinstance(self.stock_receipt_number_prefix, str):
            raise ValueError("stock_receipt_number_prefix must be a string.")
        if not isinstance(self.price_tolerance, Decimal) or self.price_tolerance < 0:
            raise ValueError("price_tolerance must be a non-negative Decimal.")
        if (
            not isinstance(self.default_credit_limit, Decimal)
            or self.default_credit_limit < 0
        ):
            raise ValueError("default_credit_limit must be a non-negative Decimal.")
        if not isinstance(self.sequence_padding, int) or self.sequence_padding < 1:
            raise ValueError("sequence_padding must be int >= 1.")


def _decimal_setting(raw: Any, *, name: str, default: Decimal) -> Decimal:
    if raw is None or raw == "":
        return default
    try:
        return Decimal(str(raw))
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a decimal value.") from exc


def load_ordering_config(settings_obj: Optional[Any] = None) -> OrderingConfig:
    """Build an OrderingConfig from Django settings (or any settings-like object)."""
    if settings_obj is None:
        from django.conf import settings as settings_obj

    defaults = OrderingConfig()
    return OrderingConfig(
        order_number_prefix=getattr(
            settings_obj, "PBD_ORDER_NUMBER_PREFIX", defaults.order_number_prefix
        ),
        stock_receipt_number_prefix=getattr(
            settings_obj,
            "PBD_STOCK_RECEIPT_NUMBER_PREFIX",
            defaults.stock_receipt_number_prefix,
        ),
        price_tolerance=_decimal_setting(
            getattr(settings_obj, "PBD_PRICE_TOLERANCE", None),
            name="PBD_PRICE_TOLERANCE",
            default=defaults.price_tolerance,
        ),
        default_credit_limit=_decimal_setting(
            getattr(settings_obj, "PBD_DEFAULT_CUSTOMER_CREDIT_LIMIT", None),
            name="PBD_DEFAULT_CUSTOMER_CREDIT_LIMIT",
            default=defaults.default_credit_limit,
        ),
    )
