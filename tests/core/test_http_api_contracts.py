from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.commands.errors import CartEmpty, InvalidReference, PriceMismatch
from core.commands.rejection import RejectionReason
from core.http_api.contracts import (
    ResourceIdRequest,
    parse_bool_param,
    parse_cart_add,
    parse_cart_update,
    parse_discount_rule_create,
    parse_order_create,
    parse_order_status_update,
    parse_payment_create,
    parse_stock_receipt_create,
)
from core.http_api.errors import (
    map_rejection_reason,
    rejection_result,
    status_for_code,
    success_result,
    validation_error_result,
    workflow_error_result,
)


def _order_body(**overrides):
    body = {
        "customer_id": 3,
        "items": [
            {"book_id": 1, "qty": 2, "unit_price": "12.50", "line_total": "25.00"},
            {"book_id": 2, "qty": 1, "unit_price": 20, "line_total": 20},
        ],
        "discount": "5",
        "tax": "2.00",
        "notes": "Term 2 delivery",
    }
    body.update(overrides)
    return body


class TestOrderCreateParsing:
    def test_parses_lines_and_amounts(self):
        request = parse_order_create(_order_body())
        assert request.customer_id == 3
        assert len(request.items) == 2
        assert request.items[0].unit_price == Decimal("12.50")
        assert request.items[1].line_total == Decimal("20")
        assert request.discount == Decimal("5")
        assert request.discount_percentage == Decimal("0")
        assert request.tax == Decimal("2.00")
        assert request.notes == "Term 2 delivery"

    def test_json_floats_keep_their_decimal_text(self):
        body = _order_body(
            items=[{"book_id": 1, "qty": 3, "unit_price": 12.1, "line_total": 36.3}]
        )
        line = parse_order_create(body).items[0]
        assert line.unit_price == Decimal("12.1")
        assert line.line_total == Decimal("36.3")

    def test_numeric_string_ids_accepted(self):
        assert parse_order_create(_order_body(customer_id="3")).customer_id == 3

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"items": []}, "at least one line"),
            ({"items": "nope"}, "items must be a list"),
            ({"customer_id": None}, "customer_id is required"),
            ({"customer_id": True}, "customer_id must be an integer"),
            ({"discount_percentage": "120"}, "between 0 and 100"),
            ({"tax": "-1"}, "tax must be a non-negative"),
            ({"discount_percentage": "12.345"}, "at most 2 decimal places"),
            ({"tax": "100000000000"}, "tax must not exceed"),
        ],
    )
    def test_shape_errors_raise_value_error(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            parse_order_create(_order_body(**overrides))

    def test_zero_qty_line_rejected(self):
        body = _order_body(
            items=[{"book_id": 1, "qty": 0, "unit_price": "1", "line_total": "0"}]
        )
        with pytest.raises(ValueError, match="qty must be a positive integer"):
            parse_order_create(body)

    def test_amounts_beyond_money_column_rejected(self):
        body = _order_body(
            items=[{"book_id": 1, "qty": 1, "unit_price": 1e11, "line_total": 1e11}]
        )
        with pytest.raises(ValueError, match="unit_price must not exceed"):
            parse_order_create(body)


def test_status_update_parsing():
    request = parse_order_status_update(5, {"status": "shipped"})
    assert (request.order_id, request.status) == (5, "shipped")
    with pytest.raises(ValueError, match="not valid"):
        parse_order_status_update(5, {"status": "lost"})
    with pytest.raises(ValueError, match="status is required"):
        parse_order_status_update(5, {})


def test_cart_parsing_defaults_qty_to_one():
    assert parse_cart_add({"book_id": 4}).qty == 1
    assert parse_cart_add({"book_id": 4, "qty": 3}).qty == 3
    assert parse_cart_update(9, {"qty": 2}).cart_item_id == 9
    with pytest.raises(ValueError):
        parse_cart_update(9, {"qty": 0})


def test_discount_rule_parsing_requires_aware_datetimes():
    request = parse_discount_rule_create(
        {
            "rule_name": "Back to school",
            "discount_percentage": "7.5",
            "min_order_amount": 100,
            "valid_from": "2026-01-01T00:00:00Z",
            "valid_to": "2026-02-01T00:00:00+00:00",
        }
    )
    assert request.discount_percentage == Decimal("7.5")
    assert request.min_order_amount == Decimal("100")
    assert request.valid_from == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert request.is_active is True

    with pytest.raises(ValueError, match="timezone offset"):
        parse_discount_rule_create(
            {"rule_name": "x", "discount_percentage": "5", "valid_from": "2026-01-01T00:00:00"}
        )
    with pytest.raises(ValueError, match="after valid_to"):
        parse_discount_rule_create(
            {
                "rule_name": "x",
                "discount_percentage": "5",
                "valid_from": "2026-03-01T00:00:00Z",
                "valid_to": "2026-02-01T00:00:00Z",
            }
        )


def test_payment_parsing():
    request = parse_payment_create({"customer_id": 2, "amount": "150.00", "order_id": 8})
    assert request.method == "cash"
    assert request.amount == Decimal("150.00")
    assert request.order_id == 8
    with pytest.raises(ValueError, match="amount must be a positive"):
        parse_payment_create({"customer_id": 2, "amount": "0"})
    with pytest.raises(ValueError, match="method"):
        parse_payment_create({"customer_id": 2, "amount": "1", "method": "barter"})


def test_stock_receipt_parsing():
    request = parse_stock_receipt_create(
        {"items": [{"book_id": 1, "qty": 12}], "publisher": "Nile Press"}
    )
    assert request.items[0].qty == 12
    assert request.publisher == "Nile Press"
    with pytest.raises(ValueError, match="non-empty"):
        parse_stock_receipt_create({"items": []})


def test_resource_id_and_bool_params():
    assert ResourceIdRequest(resource_id=3).resource_id == 3
    with pytest.raises(ValueError):
        ResourceIdRequest(resource_id=0)
    assert parse_bool_param("true") is True
    assert parse_bool_param("1") is True
    assert parse_bool_param("no") is False
    assert parse_bool_param(None) is False


# ── Error mapping ─────────────────────────────────────────────

@pytest.mark.parametrize(
    "code, path_lookup, status",
    [
        ("UNAUTHORIZED", False, 401),
        ("FORBIDDEN", False, 403),
        ("INVALID_REFERENCE", True, 404),
        ("INVALID_REFERENCE", False, 400),
        ("INSUFFICIENT_STOCK", False, 400),
        ("PRICE_MISMATCH", False, 400),
        ("CREDIT_LIMIT_EXCEEDED", False, 400),
        ("VALIDATION_ERROR", False, 400),
        ("CART_EMPTY", False, 400),
    ],
)
def test_status_mapping(code, path_lookup, status):
    assert status_for_code(code, path_lookup=path_lookup) == status


def test_rejection_mapping_includes_policy_name():
    reason = RejectionReason(
        code="INSUFFICIENT_STOCK",
        message="Insufficient stock for Atlas",
        policy_name="sufficient_stock_policy",
        details={"book_id": 1},
    )
    body = map_rejection_reason(reason)
    assert body.details == {"book_id": 1, "policy_name": "sufficient_stock_policy"}
    result = rejection_result(reason)
    assert result.status == 400
    assert result.body == {
        "ok": False,
        "error": {
            "code": "INSUFFICIENT_STOCK",
            "message": "Insufficient stock for Atlas",
            "details": {"book_id": 1, "policy_name": "sufficient_stock_policy"},
        },
    }


def test_workflow_errors_map_through_their_reason():
    missing = workflow_error_result(
        InvalidReference("Order not found", policy_name="order_must_exist"),
        path_lookup=True,
    )
    assert missing.status == 404
    assert missing.error["code"] == "INVALID_REFERENCE"

    empty = workflow_error_result(CartEmpty("Cart is empty", policy_name="p"))
    assert (empty.status, empty.error["code"]) == (400, "CART_EMPTY")

    mismatch = workflow_error_result(PriceMismatch("Line total mismatch", policy_name="p"))
    assert mismatch.error["message"] == "Line total mismatch"


def test_success_and_validation_envelopes():
    created = success_result({"id": 1}, status=201)
    assert created.status == 201
    assert created.ok is True
    assert created.data == {"id": 1}

    invalid = validation_error_result("qty is required.")
    assert invalid.status == 400
    assert invalid.ok is False
    assert invalid.error == {
        "code": "VALIDATION_ERROR",
        "message": "qty is required.",
        "details": {},
    }
