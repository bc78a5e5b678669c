"""
Pyramid Books Context - ActorContext
====================================
Immutable, request-scoped identity passed explicitly into every operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.permissions.constants import VALID_ROLES


@dataclass(frozen=True)
class ActorContext:
    """
    Canonical actor identity for one request.

    customer_id is set only for customer-role users that already have
    a linked Customer record.
    """

    actor_id: str
    role: str
    customer_id: Optional[int] = None
    display_name: str = ""
    email: Optional[str] = None

    def __post_init__(self):
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

        if self.role not in VALID_ROLES:
            raise ValueError(
                f"role '{self.role}' not valid. "
                f"Must be one of: {sorted(VALID_ROLES)}"
            )

        if self.customer_id is not None and (
            not isinstance(self.customer_id, int) or self.customer_id <= 0
        ):
            raise ValueError("customer_id must be a positive int or None.")
