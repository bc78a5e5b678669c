"""
Pyramid Books Payments - Relational State
=========================================
Payments reduce a customer's outstanding balance.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class PaymentMethod(models.TextChoices):
    CASH = "cash", "Cash"
    BANK_TRANSFER = "bank_transfer", "Bank transfer"
    CHEQUE = "cheque", "Cheque"
    CARD = "card", "Card"
    OTHER = "other", "Other"


class Payment(models.Model):
    customer = models.ForeignKey(
        "customer.Customer",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
    )
    received_by = models.ForeignKey(
        "core_identity_store.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="received_payments",
        db_column="received_by_user_id",
    )
    received_at = models.DateTimeField(default=timezone.now)
    method = models.CharField(
        max_length=32,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    reference_no = models.CharField(max_length=64, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "pbd_payments"
        ordering = ["-received_at", "-id"]
        indexes = [
            models.Index(fields=["customer"], name="idx_payments_customer"),
            models.Index(fields=["order"], name="idx_payments_order"),
            models.Index(fields=["received_by"], name="idx_payments_received_by"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="ck_payments_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.customer_id}:{self.amount} ({self.method})"
