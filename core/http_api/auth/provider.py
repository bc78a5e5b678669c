"""
Pyramid Books HTTP API Auth - Provider and Principal Models
===========================================================
Opaque user-id principal resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from core.permissions.constants import ROLE_CUSTOMER, VALID_ROLES


@dataclass(frozen=True)
class AuthPrincipal:
    user_id: str
    role: str
    customer_id: Optional[int] = None
    display_name: str = ""
    email: Optional[str] = None

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if self.role not in VALID_ROLES:
            raise ValueError(f"role '{self.role}' is not valid.")
        if self.customer_id is not None and self.role != ROLE_CUSTOMER:
            raise ValueError("customer_id is only valid for customer principals.")


class AuthProvider(Protocol):
    def resolve_user_id(self, user_id: str) -> AuthPrincipal | None:
        ...


class InMemoryAuthProvider:
    """
    Deterministic in-memory auth provider for tests/bootstrap.
    """

    def __init__(self, principals: Mapping[str, AuthPrincipal] | None = None):
        normalized: dict[str, AuthPrincipal] = {}
        for user_id, principal in sorted(
            dict(principals or {}).items(),
            key=lambda item: item[0],
        ):
            if not isinstance(user_id, str) or not user_id.strip():
                raise ValueError("User id must be a non-empty string.")
            if not isinstance(principal, AuthPrincipal):
                raise ValueError("Principal must be AuthPrincipal.")
            normalized[user_id] = principal
        self._principals = normalized

    def resolve_user_id(self, user_id: str) -> AuthPrincipal | None:
        if not isinstance(user_id, str):
            return None
        return self._principals.get(user_id)
