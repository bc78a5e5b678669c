"""
Pricing/Stock Engine over in-memory book snapshots.
"""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from core.commands.errors import (
    InsufficientStock,
    InvalidReference,
    PriceMismatch,
    ValidationError,
)
from engines.orders.commands import OrderLineRequest
from engines.orders.pricing import compute_totals, price_cart_lines, price_declared_lines

TOLERANCE = Decimal("0.01")


def _book(pk, title, unit_price, stock_qty):
    return SimpleNamespace(pk=pk, title=title, unit_price=Decimal(unit_price), stock_qty=stock_qty)


BOOKS = {
    1: _book(1, "Atlas of Africa", "12.50", 10),
    2: _book(2, "Primary Maths 4", "20.00", 5),
}


def _line(book_id, qty, unit_price, line_total):
    return OrderLineRequest(
        book_id=book_id,
        qty=qty,
        unit_price=Decimal(unit_price),
        line_total=Decimal(line_total),
    )


class TestDeclaredLines:
    def test_lines_priced_as_declared(self):
        lines = price_declared_lines(
            [_line(1, 2, "12.50", "25.00"), _line(2, 1, "20.00", "20.00")],
            BOOKS,
            tolerance=TOLERANCE,
        )
        assert [(line.book_id, line.qty, line.line_total) for line in lines] == [
            (1, 2, Decimal("25.00")),
            (2, 1, Decimal("20.00")),
        ]
        assert lines[0].title == "Atlas of Africa"

    def test_line_total_within_tolerance_accepted(self):
        lines = price_declared_lines(
            [_line(1, 2, "12.50", "25.01")], BOOKS, tolerance=TOLERANCE
        )
        assert lines[0].line_total == Decimal("25.01")

    def test_line_total_beyond_tolerance_rejected(self):
        with pytest.raises(PriceMismatch) as exc_info:
            price_declared_lines([_line(1, 2, "12.50", "25.02")], BOOKS, tolerance=TOLERANCE)
        assert exc_info.value.message == "Line total mismatch"
        assert exc_info.value.reason.details["book_id"] == 1

    def test_unknown_book_rejected(self):
        with pytest.raises(InvalidReference, match="Book not found: 99"):
            price_declared_lines([_line(99, 1, "1.00", "1.00")], BOOKS, tolerance=TOLERANCE)

    def test_insufficient_stock_rejected(self):
        with pytest.raises(InsufficientStock, match="Insufficient stock for Primary Maths 4"):
            price_declared_lines([_line(2, 6, "20.00", "120.00")], BOOKS, tolerance=TOLERANCE)

    def test_repeated_book_lines_share_one_stock_level(self):
        lines = [_line(1, 6, "12.50", "75.00"), _line(1, 6, "12.50", "75.00")]
        with pytest.raises(InsufficientStock) as exc_info:
            price_declared_lines(lines, BOOKS, tolerance=TOLERANCE)
        assert exc_info.value.reason.details["available"] == 4

    def test_stock_checked_before_price(self):
        with pytest.raises(InsufficientStock):
            price_declared_lines([_line(2, 9, "20.00", "1.00")], BOOKS, tolerance=TOLERANCE)


class TestCartLines:
    def test_cart_uses_live_catalog_price(self):
        cart = [SimpleNamespace(book_id=1, qty=3), SimpleNamespace(book_id=2, qty=2)]
        lines = price_cart_lines(cart, BOOKS)
        assert [line.unit_price for line in lines] == [Decimal("12.50"), Decimal("20.00")]
        assert [line.line_total for line in lines] == [Decimal("37.50"), Decimal("40.00")]

    def test_cart_stock_shortfall_rejected(self):
        with pytest.raises(InsufficientStock):
            price_cart_lines([SimpleNamespace(book_id=2, qty=6)], BOOKS)


class TestTotals:
    def _lines(self):
        return price_declared_lines(
            [_line(1, 2, "12.50", "25.00"), _line(2, 1, "20.00", "20.00")],
            BOOKS,
            tolerance=TOLERANCE,
        )

    def test_declared_discount_and_tax(self):
        totals = compute_totals(
            self._lines(), declared_discount=Decimal("5"), tax=Decimal("2")
        )
        assert totals.subtotal == Decimal("45.00")
        assert totals.discount == Decimal("5.00")
        assert totals.tax == Decimal("2.00")
        assert totals.total == Decimal("42.00")

    def test_percentage_overrides_declared_discount(self):
        totals = compute_totals(
            self._lines(),
            discount_percentage=Decimal("10"),
            declared_discount=Decimal("30"),
        )
        assert totals.discount == Decimal("4.50")
        assert totals.total == Decimal("40.50")

    def test_percentage_discount_rounds_half_up(self):
        lines = price_cart_lines([SimpleNamespace(book_id=1, qty=1)], BOOKS)
        totals = compute_totals(lines, discount_percentage=Decimal("7"))
        # 12.50 * 7% = 0.875
        assert totals.discount == Decimal("0.88")
        assert totals.total == Decimal("11.62")

    def test_no_discount(self):
        totals = compute_totals(self._lines())
        assert totals.discount == Decimal("0.00")
        assert totals.total == totals.subtotal

    def test_discount_above_subtotal_rejected(self):
        with pytest.raises(ValidationError, match="Discount cannot exceed subtotal"):
            compute_totals(self._lines(), declared_discount=Decimal("45.01"))

    def test_percentage_is_rounded_before_the_discount_is_taken(self):
        books = {3: _book(3, "Encyclopaedia Box Set", "100.00", 10)}
        lines = price_cart_lines([SimpleNamespace(book_id=3, qty=10)], books)
        totals = compute_totals(lines, discount_percentage=Decimal("12.345"))
        assert totals.discount_percentage == Decimal("12.35")
        assert totals.discount == Decimal("123.50")
        assert totals.total == Decimal("876.50")


class TestColumnLimits:
    def test_cart_line_beyond_money_column_rejected(self):
        books = {4: _book(4, "Collector Folio", "9999999999.99", 5)}
        lines = price_cart_lines([SimpleNamespace(book_id=4, qty=2)], books)
        with pytest.raises(ValidationError, match="line_total exceeds the maximum amount"):
            compute_totals(lines)

    def test_subtotal_beyond_money_column_rejected(self):
        books = {
            5: _book(5, "Collector Folio I", "6000000000.00", 5),
            6: _book(6, "Collector Folio II", "6000000000.00", 5),
        }
        lines = price_cart_lines(
            [SimpleNamespace(book_id=5, qty=1), SimpleNamespace(book_id=6, qty=1)], books
        )
        with pytest.raises(ValidationError) as exc_info:
            compute_totals(lines)
        assert exc_info.value.reason.details["field"] == "subtotal"

    def test_total_with_tax_beyond_money_column_rejected(self):
        books = {7: _book(7, "Collector Folio", "9999999999.99", 5)}
        lines = price_cart_lines([SimpleNamespace(book_id=7, qty=1)], books)
        with pytest.raises(ValidationError) as exc_info:
            compute_totals(lines, tax=Decimal("1.00"))
        assert exc_info.value.reason.details["field"] == "total"

    def test_largest_storable_amount_accepted(self):
        books = {8: _book(8, "Collector Folio", "9999999999.99", 5)}
        totals = compute_totals(price_cart_lines([SimpleNamespace(book_id=8, qty=1)], books))
        assert totals.total == Decimal("9999999999.99")


class TestLineRequestBounds:
    def test_unit_price_beyond_money_column_rejected(self):
        with pytest.raises(ValueError, match="unit_price must not exceed"):
            _line(1, 1, "100000000000", "100000000000")

    def test_sub_cent_unit_price_rejected(self):
        with pytest.raises(ValueError, match="unit_price must have at most 2 decimal places"):
            _line(1, 1, "12.505", "12.51")

    def test_trailing_zeros_are_not_sub_cent(self):
        line = _line(1, 2, "12.500", "25.000")
        assert line.unit_price == Decimal("12.5")
