"""
Pyramid Books HTTP API - Contracts
==================================
Framework-agnostic request/response DTOs and JSON body parsers.

Parsers turn decoded JSON objects into the typed engine requests.
Every shape problem surfaces as ValueError, which the transport maps
to a 400 VALIDATION_ERROR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from core.primitives.money import to_decimal
from engines.catalog.commands import StockReceiptCreateRequest, StockReceiptLine
from engines.orders.commands import (
    CartAddRequest,
    CartUpdateRequest,
    OrderCreateRequest,
    OrderLineRequest,
    OrderStatusUpdateRequest,
)
from engines.payments.commands import PaymentCreateRequest
from engines.promotion.commands import DiscountRuleCreateRequest


# ══════════════════════════════════════════════════════════════
# READ / PATH CONTRACTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ResourceIdRequest:
    resource_id: int

    def __post_init__(self):
        if (
            isinstance(self.resource_id, bool)
            or not isinstance(self.resource_id, int)
            or self.resource_id <= 0
        ):
            raise ValueError("id must be a positive integer.")


@dataclass(frozen=True)
class BookListHttpRequest:
    q: Optional[str] = None
    category: Optional[str] = None
    low_stock: bool = False


@dataclass(frozen=True)
class CheckoutHttpRequest:
    notes: Optional[str] = None

    def __post_init__(self):
        if self.notes is not None and not isinstance(self.notes, str):
            raise ValueError("notes must be a string or None.")


# ══════════════════════════════════════════════════════════════
# RESPONSE ENVELOPE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}


@dataclass(frozen=True)
class HttpApiResult:
    """Handler outcome: transport status plus the JSON envelope."""

    status: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return bool(self.body.get("ok"))

    @property
    def data(self) -> Any:
        return self.body.get("data")

    @property
    def error(self) -> Optional[dict[str, Any]]:
        return self.body.get("error")


# ══════════════════════════════════════════════════════════════
# FIELD COERCION
# ══════════════════════════════════════════════════════════════

def _required(body: dict[str, Any], key: str) -> Any:
    if key not in body or body[key] is None:
        raise ValueError(f"{key} is required.")
    return body[key]


def _int_field(value: Any, *, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"{field_name} must be an integer.")


def _optional_int(value: Any, *, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return _int_field(value, field_name=field_name)


def _decimal_field(value: Any, *, field_name: str) -> Decimal:
    # JSON numbers arrive as float; go through str() so 12.5 stays 12.5.
    if isinstance(value, float):
        value = repr(value)
    return to_decimal(value, field_name=field_name)


def _optional_decimal(value: Any, *, field_name: str, default: Decimal) -> Decimal:
    if value is None or value == "":
        return default
    return _decimal_field(value, field_name=field_name)


def _optional_str(value: Any, *, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")
    return value


def _optional_datetime(value: Any, *, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be an ISO-8601 string.")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO-8601 datetime.") from exc
    if parsed.tzinfo is None:
        raise ValueError(f"{field_name} must include a timezone offset.")
    return parsed


def _object_list(value: Any, *, field_name: str) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list.")
    for entry in value:
        if not isinstance(entry, dict):
            raise ValueError(f"{field_name} entries must be objects.")
    return value


def parse_bool_param(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


# ══════════════════════════════════════════════════════════════
# BODY PARSERS
# ══════════════════════════════════════════════════════════════

def parse_order_create(body: dict[str, Any]) -> OrderCreateRequest:
    items = tuple(
        OrderLineRequest(
            book_id=_int_field(_required(item, "book_id"), field_name="book_id"),
            qty=_int_field(_required(item, "qty"), field_name="qty"),
            unit_price=_decimal_field(_required(item, "unit_price"), field_name="unit_price"),
            line_total=_decimal_field(_required(item, "line_total"), field_name="line_total"),
        )
        for item in _object_list(_required(body, "items"), field_name="items")
    )
    return OrderCreateRequest(
        customer_id=_int_field(_required(body, "customer_id"), field_name="customer_id"),
        items=items,
        discount=_optional_decimal(body.get("discount"), field_name="discount", default=Decimal("0")),
        discount_percentage=_optional_decimal(
            body.get("discount_percentage"),
            field_name="discount_percentage",
            default=Decimal("0"),
        ),
        tax=_optional_decimal(body.get("tax"), field_name="tax", default=Decimal("0")),
        notes=_optional_str(body.get("notes"), field_name="notes"),
    )


def parse_order_status_update(order_id: int, body: dict[str, Any]) -> OrderStatusUpdateRequest:
    status = _required(body, "status")
    if not isinstance(status, str):
        raise ValueError("status must be a string.")
    return OrderStatusUpdateRequest(order_id=order_id, status=status)


def parse_cart_add(body: dict[str, Any]) -> CartAddRequest:
    qty = body.get("qty")
    return CartAddRequest(
        book_id=_int_field(_required(body, "book_id"), field_name="book_id"),
        qty=1 if qty is None else _int_field(qty, field_name="qty"),
    )


def parse_cart_update(cart_item_id: int, body: dict[str, Any]) -> CartUpdateRequest:
    return CartUpdateRequest(
        cart_item_id=cart_item_id,
        qty=_int_field(_required(body, "qty"), field_name="qty"),
    )


def parse_checkout(body: dict[str, Any]) -> CheckoutHttpRequest:
    return CheckoutHttpRequest(notes=_optional_str(body.get("notes"), field_name="notes"))


def parse_discount_rule_create(body: dict[str, Any]) -> DiscountRuleCreateRequest:
    rule_name = _required(body, "rule_name")
    if not isinstance(rule_name, str):
        raise ValueError("rule_name must be a string.")
    is_active = body.get("is_active", True)
    if not isinstance(is_active, bool):
        raise ValueError("is_active must be a boolean.")
    return DiscountRuleCreateRequest(
        rule_name=rule_name,
        discount_percentage=_decimal_field(
            _required(body, "discount_percentage"), field_name="discount_percentage"
        ),
        min_order_amount=_optional_decimal(
            body.get("min_order_amount"),
            field_name="min_order_amount",
            default=Decimal("0"),
        ),
        valid_from=_optional_datetime(body.get("valid_from"), field_name="valid_from"),
        valid_to=_optional_datetime(body.get("valid_to"), field_name="valid_to"),
        is_active=is_active,
    )


def parse_payment_create(body: dict[str, Any]) -> PaymentCreateRequest:
    method = body.get("method") or "cash"
    if not isinstance(method, str):
        raise ValueError("method must be a string.")
    return PaymentCreateRequest(
        customer_id=_int_field(_required(body, "customer_id"), field_name="customer_id"),
        amount=_decimal_field(_required(body, "amount"), field_name="amount"),
        method=method,
        order_id=_optional_int(body.get("order_id"), field_name="order_id"),
        reference_no=_optional_str(body.get("reference_no"), field_name="reference_no"),
        notes=_optional_str(body.get("notes"), field_name="notes"),
    )


def parse_stock_receipt_create(body: dict[str, Any]) -> StockReceiptCreateRequest:
    items = tuple(
        StockReceiptLine(
            book_id=_int_field(_required(item, "book_id"), field_name="book_id"),
            qty=_int_field(_required(item, "qty"), field_name="qty"),
        )
        for item in _object_list(_required(body, "items"), field_name="items")
    )
    return StockReceiptCreateRequest(
        items=items,
        publisher=_optional_str(body.get("publisher"), field_name="publisher"),
        notes=_optional_str(body.get("notes"), field_name="notes"),
    )
