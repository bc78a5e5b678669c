"""
Pyramid Books HTTP API Auth - Context Resolvers
===============================================
Resolve the request-scoped ActorContext from request headers.
"""

from __future__ import annotations

from typing import Any

from core.commands.rejection import ReasonCode, RejectionReason
from core.context.actor_context import ActorContext
from core.http_api.auth.provider import AuthPrincipal

HEADER_USER_ID = "x-user-id"

POLICY_NAME = "http_api_auth_resolver"


def _normalize_headers(headers: dict[str, Any] | None) -> dict[str, str]:
    normalized: dict[str, str] = {}
    for key, value in (headers or {}).items():
        normalized_key = str(key).strip().lower().replace("_", "-")
        normalized[normalized_key] = str(value).strip()
    return normalized


def _reject(message: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.UNAUTHORIZED,
        message=message,
        policy_name=POLICY_NAME,
    )


def resolve_auth_principal(
    headers: dict[str, Any] | None,
    provider,
) -> AuthPrincipal | RejectionReason:
    user_id = _normalize_headers(headers).get(HEADER_USER_ID)
    if not user_id:
        return _reject("Missing required header X-User-Id.")

    principal = provider.resolve_user_id(user_id)
    if principal is None:
        return _reject("Unknown or inactive user.")
    return principal


def resolve_actor_context_from_principal(principal: AuthPrincipal) -> ActorContext:
    return ActorContext(
        actor_id=principal.user_id,
        role=principal.role,
        customer_id=principal.customer_id,
        display_name=principal.display_name,
        email=principal.email,
    )


def resolve_actor_context(
    headers: dict[str, Any] | None,
    provider,
) -> ActorContext | RejectionReason:
    principal = resolve_auth_principal(headers, provider)
    if isinstance(principal, RejectionReason):
        return principal
    return resolve_actor_context_from_principal(principal)
