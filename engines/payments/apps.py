"""
Pyramid Books Payments - App Configuration
==========================================
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "engines.payments"
    label = "payments"
    verbose_name = "Pyramid Books Payments"
