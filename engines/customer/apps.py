"""
Pyramid Books Customer Ledger - App Configuration
=================================================
"""

from django.apps import AppConfig


class CustomerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "engines.customer"
    label = "customer"
    verbose_name = "Pyramid Books Customer Ledger"
