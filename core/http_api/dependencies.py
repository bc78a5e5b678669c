"""
Pyramid Books HTTP API - Dependencies
=====================================
Injected collaborators for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config.rules import OrderingConfig
from core.http_api.auth.provider import AuthProvider
from core.time.clock import Clock


@dataclass(frozen=True)
class HttpApiDependencies:
    auth_provider: AuthProvider
    clock: Clock
    config: OrderingConfig
