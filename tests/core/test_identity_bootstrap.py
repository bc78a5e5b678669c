from __future__ import annotations

import pytest

from core.identity_store.models import User
from core.identity_store.service import (
    DEV_ADMIN_USER_ID,
    DEV_CUSTOMER_USER_ID,
    DEV_SALESMAN_USER_ID,
    bootstrap_dev_users,
)

pytestmark = pytest.mark.django_db(transaction=True)


def test_bootstrap_creates_one_user_per_role_deterministically() -> None:
    first = bootstrap_dev_users()
    second = bootstrap_dev_users()

    assert first == second
    assert sorted(first) == ["admin", "customer", "salesman"]
    assert first["admin"]["id"] == DEV_ADMIN_USER_ID
    assert first["salesman"]["id"] == DEV_SALESMAN_USER_ID
    assert first["customer"]["id"] == DEV_CUSTOMER_USER_ID
    assert User.objects.count() == 3


def test_bootstrap_reactivates_disabled_dev_user() -> None:
    bootstrap_dev_users()
    User.objects.filter(user_id=DEV_SALESMAN_USER_ID).update(is_active=False)

    bootstrap_dev_users()

    assert User.objects.get(user_id=DEV_SALESMAN_USER_ID).is_active is True
