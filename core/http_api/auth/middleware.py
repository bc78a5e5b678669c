"""
Pyramid Books HTTP API Auth - Request Context Utility
=====================================================
Framework-agnostic identity and capability resolution, once per request.
"""

from __future__ import annotations

from typing import Any

from core.commands.rejection import RejectionReason
from core.context.actor_context import ActorContext
from core.http_api.auth.resolver import resolve_actor_context
from core.permissions.policy import CapabilityPolicy


def resolve_request_context(
    headers: dict[str, Any] | None,
    auth_provider,
) -> tuple[ActorContext, CapabilityPolicy] | RejectionReason:
    actor_context = resolve_actor_context(headers, auth_provider)
    if isinstance(actor_context, RejectionReason):
        return actor_context
    return actor_context, CapabilityPolicy.for_actor(actor_context)
