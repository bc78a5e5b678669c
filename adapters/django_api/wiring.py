"""
Pyramid Books Django Adapter Wiring
===================================
Constructs HttpApiDependencies for the running service.

Identity comes from the user table, time from the system clock and
ordering rules from Django settings.
"""

from __future__ import annotations

import threading

from core.config import load_ordering_config
from core.http_api.dependencies import HttpApiDependencies
from core.identity_store.provider import DbAuthProvider
from core.time import SystemClock
from engines.customer.services import find_customer_id_for_user


_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _create_dependencies() -> HttpApiDependencies:
    return HttpApiDependencies(
        auth_provider=DbAuthProvider(customer_lookup=find_customer_id_for_user),
        clock=SystemClock(),
        config=load_ordering_config(),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the cached wiring so settings overrides take effect."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
