"""
Pyramid Books Core Config - Public API
======================================
"""

from core.config.rules import OrderingConfig, load_ordering_config

__all__ = [
    "OrderingConfig",
    "load_ordering_config",
]
