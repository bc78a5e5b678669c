"""
Pyramid Books Orders - Pricing & Stock Engine
=============================================
Turns request lines or cart contents into priced lines, computes order
totals and commits the order with its stock decrement.

RULES:
- Every referenced book must exist and hold enough stock.
- Declared staff lines must satisfy |line_total - qty*unit_price| <= tolerance.
- Cart lines are priced from the live catalog price.
- subtotal = sum(line_total); discount = subtotal * pct / 100 when a
  percentage applies, else the declared absolute discount;
  total = subtotal - discount + tax.
- Amounts are quantized to 0.01 (ROUND_HALF_UP) when persisted.
- commit_order must run inside transaction.atomic(); any failure rolls
  back stock, order and lines together.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from core.commands.errors import raise_if_rejected
from core.primitives.money import (
    ZERO,
    percentage_of,
    quantize_money,
    quantize_percentage,
    sum_money,
)
from engines.catalog.models import Book
from engines.catalog.policies import book_must_exist_policy, sufficient_stock_policy
from engines.catalog.services import decrement_stock
from engines.orders.commands import OrderLineRequest
from engines.orders.models import Order, OrderItem, OrderStatus
from engines.orders.policies import (
    amount_fits_column_policy,
    discount_within_subtotal_policy,
    line_total_matches_policy,
)


@dataclass(frozen=True)
class PricedLine:
    book_id: int
    title: str
    qty: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    discount_percentage: Decimal
    discount: Decimal
    tax: Decimal
    total: Decimal


class _StockLedger:
    """Remaining stock per book while lines of one order are validated."""

    def __init__(self, books: Mapping[int, Book]):
        self._books = books
        self._reserved: dict[int, int] = {}

    def reserve(self, book_id: int, qty: int) -> Book:
        book = self._books.get(book_id)
        raise_if_rejected(book_must_exist_policy(book, book_id))

        already = self._reserved.get(book_id, 0)
        raise_if_rejected(
            sufficient_stock_policy(book, qty, available=book.stock_qty - already)
        )
        self._reserved[book_id] = already + qty
        return book


# ══════════════════════════════════════════════════════════════
# LINE PRICING
# ══════════════════════════════════════════════════════════════

def price_declared_lines(
    lines: Sequence[OrderLineRequest],
    books: Mapping[int, Book],
    *,
    tolerance: Decimal,
) -> tuple[PricedLine, ...]:
    """Validate staff-declared lines against the locked book snapshot."""
    ledger = _StockLedger(books)
    priced: list[PricedLine] = []
    for line in lines:
        book = ledger.reserve(line.book_id, line.qty)
        raise_if_rejected(
            line_total_matches_policy(
                book_id=line.book_id,
                qty=line.qty,
                unit_price=line.unit_price,
                line_total=line.line_total,
                tolerance=tolerance,
            )
        )
        priced.append(
            PricedLine(
                book_id=book.pk,
                title=book.title,
                qty=line.qty,
                unit_price=line.unit_price,
                line_total=line.line_total,
            )
        )
    return tuple(priced)


def price_cart_lines(
    cart_items: Iterable,
    books: Mapping[int, Book],
) -> tuple[PricedLine, ...]:
    """Price cart contents at the current catalog unit price."""
    ledger = _StockLedger(books)
    priced: list[PricedLine] = []
    for item in cart_items:
        book = ledger.reserve(item.book_id, item.qty)
        priced.append(
            PricedLine(
                book_id=book.pk,
                title=book.title,
                qty=item.qty,
                unit_price=book.unit_price,
                line_total=book.unit_price * item.qty,
            )
        )
    return tuple(priced)


# ══════════════════════════════════════════════════════════════
# TOTALS
# ══════════════════════════════════════════════════════════════

def compute_totals(
    lines: Sequence[PricedLine],
    *,
    discount_percentage: Decimal = ZERO,
    declared_discount: Decimal = ZERO,
    tax: Decimal = ZERO,
) -> OrderTotals:
    for line in lines:
        raise_if_rejected(
            amount_fits_column_policy(field_name="line_total", amount=line.line_total)
        )
    subtotal = sum_money(line.line_total for line in lines)
    # The percentage is persisted at 2 places; the discount must use that value.
    discount_percentage = quantize_percentage(discount_percentage)
    if discount_percentage > 0:
        discount = percentage_of(subtotal, discount_percentage)
    else:
        discount = declared_discount
    raise_if_rejected(
        discount_within_subtotal_policy(subtotal=subtotal, discount=discount)
    )

    subtotal = quantize_money(subtotal)
    discount = quantize_money(discount)
    tax = quantize_money(tax)
    total = subtotal - discount + tax
    for field_name, amount in (("subtotal", subtotal), ("tax", tax), ("total", total)):
        raise_if_rejected(amount_fits_column_policy(field_name=field_name, amount=amount))
    return OrderTotals(
        subtotal=subtotal,
        discount_percentage=discount_percentage,
        discount=discount,
        tax=tax,
        total=total,
    )


# ══════════════════════════════════════════════════════════════
# COMMIT
# ══════════════════════════════════════════════════════════════

def commit_order(
    *,
    order_no: str,
    customer_id: int,
    created_by_id: str,
    lines: Sequence[PricedLine],
    totals: OrderTotals,
    order_date: datetime,
    notes: Optional[str] = None,
    status: str = OrderStatus.CONFIRMED,
) -> Order:
    """Decrement stock, insert the order and its lines. Caller owns the transaction."""
    for line in lines:
        decrement_stock(line.book_id, line.qty, title=line.title)

    order = Order.objects.create(
        order_no=order_no,
        customer_id=customer_id,
        created_by_id=created_by_id,
        order_date=order_date,
        status=status,
        subtotal=totals.subtotal,
        discount_percentage=totals.discount_percentage,
        discount=totals.discount,
        tax=totals.tax,
        total=totals.total,
        notes=notes,
    )
    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                book_id=line.book_id,
                qty=line.qty,
                unit_price=quantize_money(line.unit_price),
                line_total=quantize_money(line.line_total),
            )
            for line in lines
        ]
    )
    return order
