"""
Pyramid Books Catalog - Request Commands
========================================
Typed requests for catalog writes. Shape is validated here; references
and permissions are checked by the services.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from core.primitives.money import MONEY_MAX, exceeds_money_column, has_sub_cent_digits


def _require_positive_int(value, *, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{field_name} must be a positive integer.")


def _require_price(value) -> None:
    if not isinstance(value, Decimal) or value < 0:
        raise ValueError("unit_price must be a non-negative Decimal.")
    if exceeds_money_column(value):
        raise ValueError(f"unit_price must not exceed {MONEY_MAX}.")
    if has_sub_cent_digits(value):
        raise ValueError("unit_price must have at most 2 decimal places.")


@dataclass(frozen=True)
class StockReceiptLine:
    book_id: int
    qty: int

    def __post_init__(self):
        _require_positive_int(self.book_id, field_name="book_id")
        _require_positive_int(self.qty, field_name="qty")


@dataclass(frozen=True)
class StockReceiptCreateRequest:
    items: Tuple[StockReceiptLine, ...]
    publisher: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.items, tuple) or not self.items:
            raise ValueError("items must be a non-empty tuple.")
        for item in self.items:
            if not isinstance(item, StockReceiptLine):
                raise ValueError("items must contain StockReceiptLine instances.")


@dataclass(frozen=True)
class BookCreateRequest:
    title: str
    unit_price: Decimal
    isbn: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    stock_qty: int = 0
    reorder_level: int = 10

    def __post_init__(self):
        if not self.title or not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("title must be a non-empty string.")
        _require_price(self.unit_price)
        if isinstance(self.stock_qty, bool) or not isinstance(self.stock_qty, int) or self.stock_qty < 0:
            raise ValueError("stock_qty must be a non-negative integer.")
        if (
            isinstance(self.reorder_level, bool)
            or not isinstance(self.reorder_level, int)
            or self.reorder_level < 0
        ):
            raise ValueError("reorder_level must be a non-negative integer.")


UPDATABLE_BOOK_FIELDS = frozenset({
    "isbn",
    "title",
    "author",
    "publisher",
    "category",
    "description",
    "unit_price",
    "reorder_level",
    "is_active",
})


@dataclass(frozen=True)
class BookUpdateRequest:
    """
    Partial update. stock_qty is deliberately absent: stock only moves
    through orders and stock receipts.
    """

    book_id: int
    changes: Tuple[Tuple[str, object], ...]

    def __post_init__(self):
        _require_positive_int(self.book_id, field_name="book_id")
        if not isinstance(self.changes, tuple) or not self.changes:
            raise ValueError("changes must be a non-empty tuple.")
        for field_name, value in self.changes:
            if field_name not in UPDATABLE_BOOK_FIELDS:
                raise ValueError(f"Field '{field_name}' cannot be updated.")
            if field_name == "title" and (not isinstance(value, str) or not value.strip()):
                raise ValueError("title must be a non-empty string.")
            if field_name == "unit_price":
                _require_price(value)

    def as_dict(self) -> dict:
        return dict(self.changes)
