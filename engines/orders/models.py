"""
Pyramid Books Orders - Relational State
=======================================
Monetary fields of Order and OrderItem are written once, at commit,
and never re-priced afterwards.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone


class OrderStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    CONFIRMED = "confirmed", "Confirmed"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class Order(models.Model):
    order_no = models.CharField(max_length=32, unique=True)
    customer = models.ForeignKey(
        "customer.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    created_by = models.ForeignKey(
        "core_identity_store.User",
        on_delete=models.PROTECT,
        related_name="created_orders",
        db_column="created_by_user_id",
    )
    order_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(
        max_length=32,
        choices=OrderStatus.choices,
        default=OrderStatus.DRAFT,
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    discount_percentage = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("0")
    )
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "pbd_orders"
        ordering = ["-order_date", "-id"]
        indexes = [
            models.Index(fields=["customer"], name="idx_orders_customer"),
            models.Index(fields=["created_by"], name="idx_orders_created_by"),
            models.Index(fields=["status"], name="idx_orders_status"),
        ]

    def __str__(self) -> str:
        return f"{self.order_no} ({self.status})"


class OrderItem(models.Model):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    book = models.ForeignKey(
        "catalog.Book",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    qty = models.IntegerField()
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    line_total = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = "pbd_order_items"
        ordering = ["order_id", "id"]
        indexes = [
            models.Index(fields=["order"], name="idx_order_items_order"),
            models.Index(fields=["book"], name="idx_order_items_book"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(qty__gt=0),
                name="ck_order_items_qty_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_id}:{self.book_id}x{self.qty}"


class CartItem(models.Model):
    user = models.ForeignKey(
        "core_identity_store.User",
        on_delete=models.CASCADE,
        related_name="cart_items",
        db_column="user_id",
    )
    book = models.ForeignKey(
        "catalog.Book",
        on_delete=models.CASCADE,
        related_name="cart_items",
    )
    qty = models.IntegerField()
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pbd_cart_items"
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "book"],
                name="uq_cart_items_user_book",
            ),
            models.CheckConstraint(
                condition=models.Q(qty__gt=0),
                name="ck_cart_items_qty_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id}:{self.book_id}x{self.qty}"
