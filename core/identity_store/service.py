"""
Pyramid Books Identity Store - Service Layer
============================================
DB-backed user CRUD used by identity resolution and bootstrap.
"""

from __future__ import annotations

from typing import Any, Optional

from django.db import transaction

from core.identity_store.models import User
from core.permissions.constants import VALID_ROLES


def _clean_string(value: Any, *, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return cleaned


def _clean_optional_string(value: Any, *, default: str) -> str:
    if value is None:
        return default
    cleaned = str(value).strip()
    return cleaned or default


def _normalize_role(role: str) -> str:
    normalized = _clean_string(role, field_name="role").lower()
    if normalized not in VALID_ROLES:
        raise ValueError(f"role must be one of {', '.join(sorted(VALID_ROLES))}.")
    return normalized


def serialize_user(user: User) -> dict[str, Any]:
    return {
        "id": user.user_id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
        "is_active": user.is_active,
    }


def get_user(user_id: str) -> Optional[User]:
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    return User.objects.filter(user_id=user_id.strip()).first()


def upsert_user(
    *,
    user_id: str,
    role: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    is_active: bool = True,
) -> User:
    """Create the user or bring an existing row in line with the given fields."""
    user_id = _clean_string(user_id, field_name="user_id")
    role = _normalize_role(role)
    email_value = _clean_optional_string(email, default="") or None
    first_name_value = _clean_optional_string(first_name, default="")
    last_name_value = _clean_optional_string(last_name, default="")

    with transaction.atomic():
        user, created = User.objects.get_or_create(
            user_id=user_id,
            defaults={
                "role": role,
                "email": email_value,
                "first_name": first_name_value,
                "last_name": last_name_value,
                "is_active": bool(is_active),
            },
        )
        if created:
            return user

        update_fields: list[str] = []
        for field_name, value in (
            ("role", role),
            ("email", email_value),
            ("first_name", first_name_value),
            ("last_name", last_name_value),
            ("is_active", bool(is_active)),
        ):
            if getattr(user, field_name) != value:
                setattr(user, field_name, value)
                update_fields.append(field_name)
        if update_fields:
            update_fields.append("updated_at")
            user.save(update_fields=update_fields)
        return user


DEV_ADMIN_USER_ID = "dev-admin"
DEV_SALESMAN_USER_ID = "dev-salesman"
DEV_CUSTOMER_USER_ID = "dev-customer"

_DEV_USER_SPECS: tuple[dict[str, str], ...] = (
    {
        "user_id": DEV_ADMIN_USER_ID,
        "role": "admin",
        "email": "admin@pyramid.local",
        "first_name": "Dev",
        "last_name": "Admin",
    },
    {
        "user_id": DEV_SALESMAN_USER_ID,
        "role": "salesman",
        "email": "sales@pyramid.local",
        "first_name": "Dev",
        "last_name": "Salesman",
    },
    {
        "user_id": DEV_CUSTOMER_USER_ID,
        "role": "customer",
        "email": "reader@pyramid.local",
        "first_name": "Dev",
        "last_name": "Reader",
    },
)


def bootstrap_dev_users() -> dict[str, dict[str, Any]]:
    """
    Idempotently upsert one user per role for local runs.

    Returns serialized users keyed by role. Repeated calls return equal
    payloads.
    """
    users = [upsert_user(**fields) for fields in _DEV_USER_SPECS]
    return {user.role: serialize_user(user) for user in users}
