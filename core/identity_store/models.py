"""
Pyramid Books Identity Store - Relational Identity State
========================================================
Users are keyed by the opaque id issued by the session layer.
"""

from __future__ import annotations

from django.db import models


class UserRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    SALESMAN = "salesman", "Salesman"
    CUSTOMER = "customer", "Customer"


class User(models.Model):
    user_id = models.CharField(primary_key=True, max_length=255)
    email = models.EmailField(max_length=255, null=True, blank=True, unique=True)
    first_name = models.CharField(max_length=150, default="", blank=True)
    last_name = models.CharField(max_length=150, default="", blank=True)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CUSTOMER,
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "pbd_users"
        ordering = ["user_id"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="idx_user_role_active"),
        ]

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or (self.email or "")

    def __str__(self) -> str:
        return f"{self.user_id} ({self.role})"
