"""
Pyramid Books Permissions - Capability Policy
=============================================
Capabilities are resolved once per request from the actor's role.
Services ask the policy instead of branching on role strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.commands.errors import Forbidden
from core.context.actor_context import ActorContext
from core.permissions.constants import (
    PERMISSION_CUSTOMER_MANAGE_ALL,
    PERMISSION_ORDER_STATUS_UPDATE,
    PERMISSION_ORDER_VIEW_ALL,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_PERMISSIONS,
    ROLE_SALESMAN,
    STAFF_ROLES,
)

POLICY_NAME = "capability_policy"


@dataclass(frozen=True)
class CapabilityPolicy:
    actor: ActorContext
    permissions: frozenset[str]

    @classmethod
    def for_actor(cls, actor: ActorContext) -> "CapabilityPolicy":
        return cls(
            actor=actor,
            permissions=ROLE_PERMISSIONS.get(actor.role, frozenset()),
        )

    # ── Role shortcuts ────────────────────────────────────────

    @property
    def is_admin(self) -> bool:
        return self.actor.role == ROLE_ADMIN

    @property
    def is_salesman(self) -> bool:
        return self.actor.role == ROLE_SALESMAN

    @property
    def is_customer(self) -> bool:
        return self.actor.role == ROLE_CUSTOMER

    @property
    def is_staff(self) -> bool:
        return self.actor.role in STAFF_ROLES

    # ── Capability checks ─────────────────────────────────────

    def has(self, permission: str) -> bool:
        return permission in self.permissions

    def require(self, permission: str, *, message: str) -> None:
        if not self.has(permission):
            raise Forbidden(
                message,
                policy_name=POLICY_NAME,
                details={"permission": permission, "role": self.actor.role},
            )

    def can_act_for_customer(self, customer: Any) -> bool:
        """
        Staff scope over one customer record.

        Admins act for everyone; salesmen only for customers
        assigned to them.
        """
        if self.has(PERMISSION_CUSTOMER_MANAGE_ALL):
            return True
        if self.is_salesman:
            return customer.assigned_salesman_id == self.actor.actor_id
        return False

    def require_customer_scope(self, customer: Any, *, message: str) -> None:
        if not self.can_act_for_customer(customer):
            raise Forbidden(
                message,
                policy_name=POLICY_NAME,
                details={"customer_id": customer.pk},
            )

    def can_view_order(self, order: Any) -> bool:
        if self.has(PERMISSION_ORDER_VIEW_ALL):
            return True
        if order.created_by_id == self.actor.actor_id:
            return True
        return (
            self.is_customer
            and self.actor.customer_id is not None
            and order.customer_id == self.actor.customer_id
        )

    def can_update_order_status(self, order: Any) -> bool:
        if not self.has(PERMISSION_ORDER_STATUS_UPDATE):
            return False
        if self.is_admin:
            return True
        return order.created_by_id == self.actor.actor_id
