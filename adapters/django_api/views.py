"""
Pyramid Books Django Adapter Views
==================================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api import handlers
from core.http_api.contracts import (
    BookListHttpRequest,
    HttpApiResult,
    ResourceIdRequest,
    parse_bool_param,
    parse_cart_add,
    parse_cart_update,
    parse_checkout,
    parse_discount_rule_create,
    parse_order_create,
    parse_order_status_update,
    parse_payment_create,
    parse_stock_receipt_create,
)
from core.http_api.errors import error_response, validation_error_result


def _headers_from_request(request: HttpRequest) -> dict[str, str]:
    return {str(key): str(value) for key, value in request.headers.items()}


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _respond(result: HttpApiResult) -> JsonResponse:
    return JsonResponse(result.body, status=result.status)


def _method_not_allowed() -> JsonResponse:
    return JsonResponse(
        error_response(
            code="METHOD_NOT_ALLOWED",
            message="Method not allowed for this endpoint.",
        ),
        status=405,
    )


def _dispatch_list(list_handler, request: HttpRequest) -> JsonResponse:
    return _respond(
        list_handler(build_dependencies(), headers=_headers_from_request(request))
    )


def _dispatch(
    handler,
    contract_factory: Callable[[], Any],
    request: HttpRequest,
) -> JsonResponse:
    headers = _headers_from_request(request)
    try:
        contract = contract_factory()
    except ValueError as exc:
        return _respond(validation_error_result(str(exc)))
    return _respond(handler(contract, build_dependencies(), headers=headers))


# ── Orders ────────────────────────────────────────────────────

@csrf_exempt
def orders_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_list(handlers.list_orders, request)
    if request.method == "POST":
        return _dispatch(
            handlers.post_order_create,
            lambda: parse_order_create(_parse_json_body(request)),
            request,
        )
    return _method_not_allowed()


@csrf_exempt
def order_detail_view(request: HttpRequest, order_id: int) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch(
        handlers.get_order,
        lambda: ResourceIdRequest(resource_id=order_id),
        request,
    )


@csrf_exempt
def order_status_view(request: HttpRequest, order_id: int) -> JsonResponse:
    if request.method not in {"PATCH", "PUT"}:
        return _method_not_allowed()
    return _dispatch(
        handlers.patch_order_status,
        lambda: parse_order_status_update(order_id, _parse_json_body(request)),
        request,
    )


# ── Cart ──────────────────────────────────────────────────────

@csrf_exempt
def cart_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_list(handlers.list_cart, request)
    if request.method == "POST":
        return _dispatch(
            handlers.post_cart_add,
            lambda: parse_cart_add(_parse_json_body(request)),
            request,
        )
    return _method_not_allowed()


@csrf_exempt
def cart_item_view(request: HttpRequest, cart_item_id: int) -> JsonResponse:
    if request.method in {"PATCH", "PUT"}:
        return _dispatch(
            handlers.patch_cart_item,
            lambda: parse_cart_update(cart_item_id, _parse_json_body(request)),
            request,
        )
    if request.method == "DELETE":
        return _dispatch(
            handlers.delete_cart_item,
            lambda: ResourceIdRequest(resource_id=cart_item_id),
            request,
        )
    return _method_not_allowed()


@csrf_exempt
def cart_checkout_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch(
        handlers.post_cart_checkout,
        lambda: parse_checkout(_parse_json_body(request)),
        request,
    )


# ── Discount rules ────────────────────────────────────────────

@csrf_exempt
def discount_rules_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_list(handlers.list_discount_rules, request)
    if request.method == "POST":
        return _dispatch(
            handlers.post_discount_rule_create,
            lambda: parse_discount_rule_create(_parse_json_body(request)),
            request,
        )
    return _method_not_allowed()


@csrf_exempt
def discount_rule_detail_view(request: HttpRequest, rule_id: int) -> JsonResponse:
    if request.method != "DELETE":
        return _method_not_allowed()
    return _dispatch(
        handlers.delete_discount_rule,
        lambda: ResourceIdRequest(resource_id=rule_id),
        request,
    )


# ── Payments ──────────────────────────────────────────────────

@csrf_exempt
def payments_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_list(handlers.list_payments, request)
    if request.method == "POST":
        return _dispatch(
            handlers.post_payment_create,
            lambda: parse_payment_create(_parse_json_body(request)),
            request,
        )
    return _method_not_allowed()


# ── Catalog ───────────────────────────────────────────────────

@csrf_exempt
def stock_receipts_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch_list(handlers.list_stock_receipts, request)
    if request.method == "POST":
        return _dispatch(
            handlers.post_stock_receipt_create,
            lambda: parse_stock_receipt_create(_parse_json_body(request)),
            request,
        )
    return _method_not_allowed()


@csrf_exempt
def books_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch(
        handlers.list_books,
        lambda: BookListHttpRequest(
            q=request.GET.get("q") or None,
            category=request.GET.get("category") or None,
            low_stock=parse_bool_param(request.GET.get("low_stock")),
        ),
        request,
    )
