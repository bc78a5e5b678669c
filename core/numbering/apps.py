"""
Pyramid Books Numbering - App Configuration
===========================================
"""

from django.apps import AppConfig


class CoreNumberingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.numbering"
    label = "core_numbering"
    verbose_name = "Pyramid Books Document Numbering"
