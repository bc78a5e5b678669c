from __future__ import annotations

from decimal import Decimal

import pytest

from core.http_api import handlers
from core.http_api.auth.provider import AuthPrincipal, InMemoryAuthProvider
from core.http_api.contracts import (
    BookListHttpRequest,
    CheckoutHttpRequest,
    ResourceIdRequest,
    parse_order_create,
)
from core.http_api.dependencies import HttpApiDependencies
from engines.catalog.models import Book
from engines.orders.commands import CartAddRequest, OrderStatusUpdateRequest
from engines.orders.models import Order

pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def dependencies(admin_user, salesman_user, customer_user, clock, ordering_config):
    provider = InMemoryAuthProvider(
        {
            "admin-1": AuthPrincipal(user_id="admin-1", role="admin"),
            "sales-1": AuthPrincipal(user_id="sales-1", role="salesman"),
            "cust-1": AuthPrincipal(user_id="cust-1", role="customer"),
        }
    )
    return HttpApiDependencies(auth_provider=provider, clock=clock, config=ordering_config)


def _as(user_id):
    return {"X-User-Id": user_id}


def _order_body(customer, book, qty=2, line_total=None, **extra):
    total = line_total if line_total is not None else book.unit_price * qty
    body = {
        "customer_id": customer.pk,
        "items": [
            {
                "book_id": book.pk,
                "qty": qty,
                "unit_price": str(book.unit_price),
                "line_total": str(total),
            }
        ],
    }
    body.update(extra)
    return parse_order_create(body)


def test_missing_header_is_unauthorized(dependencies):
    result = handlers.list_orders(dependencies, headers={})

    assert result.status == 401
    assert result.body == {
        "ok": False,
        "error": {
            "code": "UNAUTHORIZED",
            "message": "Missing required header X-User-Id.",
            "details": {"policy_name": "http_api_auth_resolver"},
        },
    }


def test_unknown_user_is_unauthorized(dependencies):
    result = handlers.list_orders(dependencies, headers=_as("ghost"))
    assert result.status == 401
    assert result.error["message"] == "Unknown or inactive user."


def test_staff_order_create_returns_201(dependencies, make_customer, make_book, salesman_user):
    customer = make_customer(assigned_salesman=salesman_user)
    book = make_book(title="Form One English", unit_price="21.00", stock_qty=10)

    result = handlers.post_order_create(
        _order_body(customer, book, qty=2, discount="2.00"),
        dependencies,
        headers=_as("sales-1"),
    )

    assert result.status == 201
    assert result.ok is True
    assert result.data["order_no"] == "PB-2026-000001"
    assert result.data["status"] == "confirmed"
    assert result.data["subtotal"] == "42.00"
    assert result.data["total"] == "40.00"
    assert result.data["items"][0]["book"]["title"] == "Form One English"
    assert Book.objects.get(pk=book.pk).stock_qty == 8


def test_order_create_failures_map_to_400(dependencies, make_customer, make_book):
    customer = make_customer()
    book = make_book(title="Scarce", unit_price="10.00", stock_qty=1)

    short = handlers.post_order_create(
        _order_body(customer, book, qty=3), dependencies, headers=_as("admin-1")
    )
    assert short.status == 400
    assert short.error["code"] == "INSUFFICIENT_STOCK"
    assert short.error["message"] == "Insufficient stock for Scarce"

    mismatch = handlers.post_order_create(
        _order_body(customer, book, qty=1, line_total=Decimal("9.50")),
        dependencies,
        headers=_as("admin-1"),
    )
    assert mismatch.status == 400
    assert mismatch.error["code"] == "PRICE_MISMATCH"
    assert mismatch.error["details"]["policy_name"] == "line_total_matches_policy"

    assert Order.objects.count() == 0


def test_unknown_customer_in_body_is_400_not_404(dependencies, make_book):
    book = make_book()
    body = parse_order_create(
        {
            "customer_id": 999,
            "items": [{"book_id": book.pk, "qty": 1, "unit_price": "10.00", "line_total": "10.00"}],
        }
    )
    result = handlers.post_order_create(body, dependencies, headers=_as("admin-1"))
    assert result.status == 400
    assert result.error["code"] == "INVALID_REFERENCE"


def test_customer_cannot_create_staff_orders(dependencies, make_customer, make_book):
    result = handlers.post_order_create(
        _order_body(make_customer(), make_book()), dependencies, headers=_as("cust-1")
    )
    assert result.status == 403
    assert result.error["code"] == "FORBIDDEN"
    assert result.error["details"]["policy_name"] == "capability_policy"


def test_order_path_lookups(dependencies, make_customer, make_book):
    created = handlers.post_order_create(
        _order_body(make_customer(), make_book()), dependencies, headers=_as("admin-1")
    )
    order_id = created.data["id"]

    found = handlers.get_order(ResourceIdRequest(order_id), dependencies, headers=_as("admin-1"))
    assert found.status == 200
    assert found.data == created.data

    missing = handlers.get_order(ResourceIdRequest(9999), dependencies, headers=_as("admin-1"))
    assert missing.status == 404
    assert missing.error["code"] == "INVALID_REFERENCE"

    hidden = handlers.get_order(ResourceIdRequest(order_id), dependencies, headers=_as("sales-1"))
    assert hidden.status == 403

    shipped = handlers.patch_order_status(
        OrderStatusUpdateRequest(order_id=order_id, status="shipped"),
        dependencies,
        headers=_as("admin-1"),
    )
    assert shipped.status == 200
    assert shipped.data["status"] == "shipped"

    backwards = handlers.patch_order_status(
        OrderStatusUpdateRequest(order_id=order_id, status="confirmed"),
        dependencies,
        headers=_as("admin-1"),
    )
    assert backwards.status == 400
    assert backwards.error["code"] == "INVALID_STATUS_TRANSITION"


def test_cart_checkout_flow(dependencies, make_book, make_discount_rule):
    make_discount_rule("10", "100")
    book = make_book(title="Poetry Reader", unit_price="50.00", stock_qty=5)

    empty = handlers.post_cart_checkout(CheckoutHttpRequest(), dependencies, headers=_as("cust-1"))
    assert empty.status == 400
    assert empty.error["code"] == "CART_EMPTY"

    added = handlers.post_cart_add(
        CartAddRequest(book_id=book.pk, qty=3), dependencies, headers=_as("cust-1")
    )
    assert added.status == 201
    assert handlers.list_cart(dependencies, headers=_as("cust-1")).data[0]["qty"] == 3

    order = handlers.post_cart_checkout(
        CheckoutHttpRequest(notes="Deliver to gate B"), dependencies, headers=_as("cust-1")
    )
    assert order.status == 201
    assert order.data["subtotal"] == "150.00"
    assert order.data["discount_percentage"] == "10.00"
    assert order.data["total"] == "135.00"
    assert order.data["notes"] == "Deliver to gate B"
    assert handlers.list_cart(dependencies, headers=_as("cust-1")).data == []


def test_cart_item_path_lookup_is_404(dependencies):
    result = handlers.delete_cart_item(ResourceIdRequest(4242), dependencies, headers=_as("cust-1"))
    assert result.status == 404


def test_books_listing_is_open_to_any_user(dependencies, make_book):
    make_book(title="Atlas", category="reference")
    make_book(title="Reader", category="fiction")

    result = handlers.list_books(
        BookListHttpRequest(category="reference"), dependencies, headers=_as("cust-1")
    )
    assert result.status == 200
    assert [book["title"] for book in result.data] == ["Atlas"]


def test_discount_rule_delete_missing_is_404(dependencies):
    result = handlers.delete_discount_rule(
        ResourceIdRequest(77), dependencies, headers=_as("admin-1")
    )
    assert result.status == 404
    assert result.error["message"] == "Discount rule not found"
