"""
Pyramid Books Catalog - Relational State
========================================
Book.stock_qty never goes negative: a check constraint backs the
conditional decrement in engines.catalog.services.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone


class Book(models.Model):
    isbn = models.CharField(max_length=32, null=True, blank=True)
    title = models.CharField(max_length=500)
    author = models.CharField(max_length=255, null=True, blank=True)
    publisher = models.CharField(max_length=255, null=True, blank=True)
    category = models.CharField(max_length=64, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    stock_qty = models.IntegerField(default=0)
    reorder_level = models.IntegerField(default=10)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "pbd_books"
        ordering = ["title", "id"]
        indexes = [
            models.Index(fields=["title"], name="idx_books_title"),
            models.Index(fields=["isbn"], name="idx_books_isbn"),
            models.Index(fields=["category"], name="idx_books_category"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock_qty__gte=0),
                name="ck_books_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(unit_price__gte=0),
                name="ck_books_unit_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.stock_qty})"


class StockReceipt(models.Model):
    receipt_no = models.CharField(max_length=32, unique=True)
    received_by = models.ForeignKey(
        "core_identity_store.User",
        on_delete=models.PROTECT,
        related_name="stock_receipts",
        db_column="received_by_user_id",
    )
    publisher = models.CharField(max_length=255, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    received_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "pbd_stock_receipts"
        ordering = ["-received_at", "-id"]
        indexes = [
            models.Index(fields=["received_by"], name="idx_stock_rcpt_received_by"),
        ]

    def __str__(self) -> str:
        return self.receipt_no


class StockReceiptItem(models.Model):
    receipt = models.ForeignKey(
        StockReceipt,
        on_delete=models.CASCADE,
        related_name="items",
    )
    book = models.ForeignKey(
        Book,
        on_delete=models.PROTECT,
        related_name="receipt_items",
    )
    qty = models.IntegerField()

    class Meta:
        db_table = "pbd_stock_receipt_items"
        ordering = ["receipt_id", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(qty__gt=0),
                name="ck_stock_rcpt_item_qty_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.receipt_id}:{self.book_id}x{self.qty}"
