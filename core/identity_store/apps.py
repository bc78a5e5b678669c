"""
Pyramid Books Identity Store - App Configuration
================================================
Persistent users and their roles.
"""

from django.apps import AppConfig


class CoreIdentityStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.identity_store"
    label = "core_identity_store"
    verbose_name = "Pyramid Books Identity Store"
