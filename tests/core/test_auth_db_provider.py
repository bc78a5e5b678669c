from __future__ import annotations

import pytest

from core.identity_store.models import User
from core.identity_store.provider import DbAuthProvider
from core.identity_store.service import get_user, serialize_user, upsert_user

pytestmark = pytest.mark.django_db(transaction=True)


def test_db_auth_provider_resolves_active_user_to_principal() -> None:
    upsert_user(
        user_id="db-admin",
        role="admin",
        email="db-admin@pyramid.test",
        first_name="Dana",
        last_name="Boss",
    )

    principal = DbAuthProvider().resolve_user_id("db-admin")

    assert principal is not None
    assert principal.user_id == "db-admin"
    assert principal.role == "admin"
    assert principal.customer_id is None
    assert principal.display_name == "Dana Boss"
    assert principal.email == "db-admin@pyramid.test"


def test_db_auth_provider_returns_none_for_inactive_or_unknown_user() -> None:
    upsert_user(user_id="db-gone", role="salesman", is_active=False)

    provider = DbAuthProvider()
    assert provider.resolve_user_id("db-gone") is None
    assert provider.resolve_user_id("db-never-existed") is None


def test_customer_principal_uses_injected_customer_lookup() -> None:
    upsert_user(user_id="db-cust", role="customer")
    upsert_user(user_id="db-sales", role="salesman")
    seen = []

    def _lookup(user_id):
        seen.append(user_id)
        return 41

    provider = DbAuthProvider(customer_lookup=_lookup)

    assert provider.resolve_user_id("db-cust").customer_id == 41
    assert provider.resolve_user_id("db-sales").customer_id is None
    assert seen == ["db-cust"]


def test_upsert_user_normalizes_and_updates_in_place() -> None:
    created = upsert_user(user_id="  db-user  ", role=" Salesman ", email=" ")
    assert created.user_id == "db-user"
    assert created.role == "salesman"
    assert created.email is None

    updated = upsert_user(
        user_id="db-user",
        role="admin",
        email="db-user@pyramid.test",
        first_name="Uma",
    )
    assert User.objects.count() == 1
    assert updated.role == "admin"
    assert serialize_user(get_user("db-user")) == {
        "id": "db-user",
        "email": "db-user@pyramid.test",
        "first_name": "Uma",
        "last_name": "",
        "role": "admin",
        "is_active": True,
    }


def test_upsert_user_rejects_unknown_role() -> None:
    with pytest.raises(ValueError, match="role must be one of"):
        upsert_user(user_id="db-bad", role="owner")
    assert get_user("db-bad") is None
