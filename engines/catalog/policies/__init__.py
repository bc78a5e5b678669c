"""
Pyramid Books Catalog - Policies
================================
Pure stock checks over a book snapshot. Each returns a RejectionReason
or None.
"""

from __future__ import annotations

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason


def book_must_exist_policy(book, book_id: int) -> Optional[RejectionReason]:
    if book is None:
        return RejectionReason(
            code=ReasonCode.INVALID_REFERENCE,
            message=f"Book not found: {book_id}",
            policy_name="book_must_exist_policy",
            details={"book_id": book_id},
        )
    return None


def book_must_be_active_policy(book) -> Optional[RejectionReason]:
    if not book.is_active:
        return RejectionReason(
            code=ReasonCode.VALIDATION_ERROR,
            message=f"Book is not available: {book.title}",
            policy_name="book_must_be_active_policy",
            details={"book_id": book.pk},
        )
    return None


def sufficient_stock_policy(
    book,
    qty: int,
    *,
    available: Optional[int] = None,
) -> Optional[RejectionReason]:
    """
    Reject when stock cannot cover qty.

    available overrides book.stock_qty when earlier lines of the same
    order already claimed part of it.
    """
    if available is None:
        available = book.stock_qty
    if available < qty:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=f"Insufficient stock for {book.title}",
            policy_name="sufficient_stock_policy",
            details={
                "book_id": book.pk,
                "available": available,
                "requested": qty,
            },
        )
    return None
