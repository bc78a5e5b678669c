"""
Pyramid Books Promotions - Relational State
===========================================
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models


class DiscountRule(models.Model):
    rule_name = models.CharField(max_length=255)
    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2)
    min_order_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0")
    )
    valid_from = models.DateTimeField(null=True, blank=True)
    valid_to = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        "core_identity_store.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="discount_rules",
        db_column="created_by_user_id",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pbd_discount_rules"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["is_active"], name="idx_discount_rules_active"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount_percentage__gte=0)
                & models.Q(discount_percentage__lte=100),
                name="ck_discount_rules_pct_range",
            ),
            models.CheckConstraint(
                condition=models.Q(min_order_amount__gte=0),
                name="ck_discount_rules_min_amount",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.rule_name} ({self.discount_percentage}%)"
