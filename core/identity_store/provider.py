"""
Pyramid Books Identity Store - DB-backed Auth Provider
======================================================
Resolves an opaque user id into an AuthPrincipal from persistent users.
"""

from __future__ import annotations

from typing import Callable, Optional

from core.http_api.auth.provider import AuthPrincipal, AuthProvider
from core.identity_store.service import get_user
from core.permissions.constants import ROLE_CUSTOMER

CustomerLookup = Callable[[str], Optional[int]]


class DbAuthProvider(AuthProvider):
    """
    customer_lookup maps a user id to its linked Customer id. It is
    injected by the adapter so this module stays free of engine imports.
    """

    def __init__(self, customer_lookup: Optional[CustomerLookup] = None):
        self._customer_lookup = customer_lookup

    def resolve_user_id(self, user_id: str) -> AuthPrincipal | None:
        user = get_user(user_id)
        if user is None or not user.is_active:
            return None

        customer_id = None
        if user.role == ROLE_CUSTOMER and self._customer_lookup is not None:
            customer_id = self._customer_lookup(user.user_id)

        return AuthPrincipal(
            user_id=user.user_id,
            role=user.role,
            customer_id=customer_id,
            display_name=user.display_name,
            email=user.email,
        )
