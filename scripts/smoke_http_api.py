"""
Manual smoke runner for Pyramid Books Django adapter endpoints.

Seed the dev users first:
    python manage.py migrate
    python manage.py shell -c "from core.identity_store.service import bootstrap_dev_users; bootstrap_dev_users()"

Usage:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
from urllib import error, request


DEV_ADMIN_USER_ID = "dev-admin"
DEV_SALESMAN_USER_ID = "dev-salesman"
DEV_CUSTOMER_USER_ID = "dev-customer"


def _call(
    *,
    method: str,
    url: str,
    headers: dict[str, str],
    body: dict | None = None,
) -> tuple[int, dict]:
    encoded = None
    req_headers = dict(headers)
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=req_headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            status = response.status
            payload = json.loads(response.read().decode("utf-8"))
            return status, payload
    except error.HTTPError as exc:
        payload = json.loads(exc.read().decode("utf-8"))
        return exc.code, payload


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    print(json.dumps(payload, indent=2, sort_keys=True))


def _as(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def run(base_url: str) -> None:
    api = base_url.rstrip("/") + "/api"

    status, payload = _call(method="GET", url=f"{api}/orders", headers={})
    _print_case("missing-identity", status, payload)

    status, payload = _call(method="GET", url=f"{api}/orders", headers=_as("nobody"))
    _print_case("unknown-identity", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/discount-rules",
        headers=_as(DEV_SALESMAN_USER_ID),
        body={"rule_name": "Bulk", "discount_percentage": "10", "min_order_amount": "100"},
    )
    _print_case("discount-rule-forbidden", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/discount-rules",
        headers=_as(DEV_ADMIN_USER_ID),
        body={"rule_name": "Bulk", "discount_percentage": "10", "min_order_amount": "100"},
    )
    _print_case("discount-rule-created", status, payload)

    status, books = _call(
        method="GET",
        url=f"{api}/books",
        headers=_as(DEV_CUSTOMER_USER_ID),
    )
    _print_case("books", status, books)
    if not books.get("data"):
        print("\nNo books in the catalog; stopping before cart checks.")
        return
    book_id = books["data"][0]["id"]

    status, payload = _call(
        method="POST",
        url=f"{api}/cart/checkout",
        headers=_as(DEV_CUSTOMER_USER_ID),
        body={},
    )
    _print_case("checkout-empty-cart", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/cart",
        headers=_as(DEV_CUSTOMER_USER_ID),
        body={"book_id": book_id, "qty": 1},
    )
    _print_case("cart-add", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/cart/checkout",
        headers=_as(DEV_CUSTOMER_USER_ID),
        body={"notes": "smoke run"},
    )
    _print_case("checkout", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/orders",
        headers=_as(DEV_CUSTOMER_USER_ID),
    )
    _print_case("customer-orders", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
