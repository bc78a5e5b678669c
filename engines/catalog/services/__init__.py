"""
Pyramid Books Catalog - Application Service
===========================================
Book reads and writes, stock movements and inbound stock receipts.

Stock only moves through two paths:
- decrement_stock: conditional update used by order commits
- increment_stock: used by stock receipts
Both must run inside the caller's transaction.atomic() block.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from django.db import transaction
from django.db.models import F, Q

from core.commands.errors import InsufficientStock, InvalidReference, raise_if_rejected
from core.config.rules import OrderingConfig
from core.numbering.service import next_number, stock_receipt_numbering_policy
from core.permissions.constants import PERMISSION_CATALOG_MANAGE, PERMISSION_STOCK_RECEIVE
from core.permissions.policy import CapabilityPolicy
from core.time.clock import Clock
from engines.catalog.commands import (
    BookCreateRequest,
    BookUpdateRequest,
    StockReceiptCreateRequest,
)
from engines.catalog.models import Book, StockReceipt, StockReceiptItem
from engines.catalog.policies import book_must_exist_policy

logger = logging.getLogger("pbd.catalog")


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════

def serialize_book(book: Book) -> dict[str, Any]:
    return {
        "id": book.pk,
        "isbn": book.isbn,
        "title": book.title,
        "author": book.author,
        "publisher": book.publisher,
        "category": book.category,
        "description": book.description,
        "unit_price": str(book.unit_price),
        "stock_qty": book.stock_qty,
        "reorder_level": book.reorder_level,
        "is_active": book.is_active,
    }


def book_summary(book: Book) -> dict[str, Any]:
    return {
        "id": book.pk,
        "title": book.title,
        "isbn": book.isbn,
        "author": book.author,
    }


def serialize_stock_receipt(receipt: StockReceipt) -> dict[str, Any]:
    return {
        "id": receipt.pk,
        "receipt_no": receipt.receipt_no,
        "received_by": receipt.received_by_id,
        "publisher": receipt.publisher,
        "notes": receipt.notes,
        "received_at": receipt.received_at.isoformat(),
        "items": [
            {
                "id": item.pk,
                "book_id": item.book_id,
                "qty": item.qty,
                "book": book_summary(item.book),
            }
            for item in receipt.items.all()
        ],
    }


# ══════════════════════════════════════════════════════════════
# BOOK READS
# ══════════════════════════════════════════════════════════════

def get_book(book_id: int) -> Optional[Book]:
    return Book.objects.filter(pk=book_id).first()


def list_books(
    *,
    q: Optional[str] = None,
    category: Optional[str] = None,
    low_stock: bool = False,
    include_inactive: bool = False,
) -> list[Book]:
    queryset = Book.objects.all()
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    if q:
        queryset = queryset.filter(
            Q(title__icontains=q) | Q(author__icontains=q) | Q(isbn__icontains=q)
        )
    if category:
        queryset = queryset.filter(category=category)
    if low_stock:
        queryset = queryset.filter(stock_qty__lte=F("reorder_level"))
    return list(queryset.order_by("title", "id"))


def lock_books(book_ids: Iterable[int]) -> dict[int, Book]:
    """
    Lock the referenced book rows (SELECT ... FOR UPDATE) in id order.

    Locking in a fixed order keeps concurrent commits touching the
    same books from deadlocking each other.
    """
    ids = sorted(set(book_ids))
    if not ids:
        return {}
    books = Book.objects.select_for_update().filter(pk__in=ids).order_by("pk")
    return {book.pk: book for book in books}


# ══════════════════════════════════════════════════════════════
# BOOK WRITES
# ══════════════════════════════════════════════════════════════

def create_book(*, policy: CapabilityPolicy, request: BookCreateRequest) -> Book:
    policy.require(PERMISSION_CATALOG_MANAGE, message="Only admins can manage books")
    book = Book.objects.create(
        isbn=request.isbn,
        title=request.title.strip(),
        author=request.author,
        publisher=request.publisher,
        category=request.category,
        description=request.description,
        unit_price=request.unit_price,
        stock_qty=request.stock_qty,
        reorder_level=request.reorder_level,
    )
    logger.info("book created id=%s title=%r", book.pk, book.title)
    return book


def update_book(*, policy: CapabilityPolicy, request: BookUpdateRequest) -> Book:
    policy.require(PERMISSION_CATALOG_MANAGE, message="Only admins can manage books")
    with transaction.atomic():
        book = Book.objects.select_for_update().filter(pk=request.book_id).first()
        raise_if_rejected(book_must_exist_policy(book, request.book_id))

        update_fields: list[str] = []
        for field_name, value in request.changes:
            if getattr(book, field_name) != value:
                setattr(book, field_name, value)
                update_fields.append(field_name)
        if update_fields:
            update_fields.append("updated_at")
            book.save(update_fields=update_fields)
    logger.info("book updated id=%s fields=%s", book.pk, update_fields)
    return book


# ══════════════════════════════════════════════════════════════
# STOCK MOVEMENTS
# ══════════════════════════════════════════════════════════════

def decrement_stock(book_id: int, qty: int, *, title: str = "") -> None:
    """
    UPDATE ... SET stock_qty = stock_qty - qty WHERE id = ? AND stock_qty >= qty.

    Zero affected rows means another commit consumed the stock first;
    raising here rolls the caller's whole transaction back.
    """
    updated = Book.objects.filter(pk=book_id, stock_qty__gte=qty).update(
        stock_qty=F("stock_qty") - qty
    )
    if updated != 1:
        raise InsufficientStock(
            f"Insufficient stock for {title or book_id}",
            policy_name="conditional_stock_decrement",
            details={"book_id": book_id, "requested": qty},
        )


def increment_stock(book_id: int, qty: int) -> None:
    updated = Book.objects.filter(pk=book_id).update(stock_qty=F("stock_qty") + qty)
    if updated != 1:
        raise InvalidReference(
            f"Book not found: {book_id}",
            policy_name="stock_increment",
            details={"book_id": book_id},
        )


# ══════════════════════════════════════════════════════════════
# STOCK RECEIPTS
# ══════════════════════════════════════════════════════════════

def create_stock_receipt(
    *,
    policy: CapabilityPolicy,
    request: StockReceiptCreateRequest,
    clock: Clock,
    config: OrderingConfig,
) -> StockReceipt:
    """Record inbound stock and raise book stock levels in one transaction."""
    policy.require(
        PERMISSION_STOCK_RECEIVE,
        message="Only staff can record stock receipts",
    )
    received_at = clock.now_utc()

    with transaction.atomic():
        books = lock_books(line.book_id for line in request.items)
        for line in request.items:
            raise_if_rejected(book_must_exist_policy(books.get(line.book_id), line.book_id))

        receipt = StockReceipt.objects.create(
            receipt_no=next_number(stock_receipt_numbering_policy(config), received_at),
            received_by_id=policy.actor.actor_id,
            publisher=request.publisher,
            notes=request.notes,
            received_at=received_at,
        )
        StockReceiptItem.objects.bulk_create(
            [
                StockReceiptItem(receipt=receipt, book_id=line.book_id, qty=line.qty)
                for line in request.items
            ]
        )
        for line in request.items:
            increment_stock(line.book_id, line.qty)

    logger.info(
        "stock receipt committed receipt_no=%s lines=%d by=%s",
        receipt.receipt_no,
        len(request.items),
        policy.actor.actor_id,
    )
    return receipt


def list_stock_receipts(*, policy: CapabilityPolicy) -> list[StockReceipt]:
    policy.require(
        PERMISSION_STOCK_RECEIVE,
        message="Only staff can view stock receipts",
    )
    return list(
        StockReceipt.objects.select_related("received_by")
        .prefetch_related("items__book")
        .order_by("-received_at", "-id")
    )
