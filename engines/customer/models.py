"""
Pyramid Books Customer Ledger - Relational State
================================================
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models


class CustomerType(models.TextChoices):
    SCHOOL = "school", "School"
    BOOKSTORE = "bookstore", "Bookstore"
    INSTITUTION = "institution", "Institution"
    CUSTOMER = "customer", "Customer"


class Customer(models.Model):
    name = models.CharField(max_length=255)
    customer_type = models.CharField(
        max_length=32,
        choices=CustomerType.choices,
        default=CustomerType.CUSTOMER,
    )
    phone = models.CharField(max_length=32, null=True, blank=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    credit_limit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    notes = models.TextField(null=True, blank=True)
    linked_user = models.OneToOneField(
        "core_identity_store.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customer",
        db_column="linked_user_id",
    )
    assigned_salesman = models.ForeignKey(
        "core_identity_store.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_customers",
        db_column="assigned_salesman_user_id",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "pbd_customers"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["customer_type"], name="idx_customers_type"),
            models.Index(fields=["assigned_salesman"], name="idx_customers_salesman"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(credit_limit__gte=0),
                name="ck_customers_credit_limit_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.customer_type})"
