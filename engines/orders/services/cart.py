"""
Pyramid Books Orders - Cart Service
===================================
Per-user cart lines. Adding a book already in the cart merges the
quantity into the existing line. Lines for inactive books cannot be added or
changed; stock is only checked at checkout.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import transaction
from django.db.models import F

from core.commands.errors import InvalidReference, raise_if_rejected
from core.permissions.policy import CapabilityPolicy
from engines.catalog.policies import book_must_be_active_policy, book_must_exist_policy
from engines.catalog.services import book_summary, get_book
from engines.orders.commands import CartAddRequest, CartUpdateRequest
from engines.orders.models import CartItem

logger = logging.getLogger("pbd.orders")


def serialize_cart_item(item: CartItem) -> dict[str, Any]:
    return {
        "id": item.pk,
        "book_id": item.book_id,
        "qty": item.qty,
        "unit_price": str(item.book.unit_price),
        "line_total": str(item.book.unit_price * item.qty),
        "book": book_summary(item.book),
    }


def list_cart(*, policy: CapabilityPolicy) -> list[CartItem]:
    return list(
        CartItem.objects.select_related("book")
        .filter(user_id=policy.actor.actor_id)
        .order_by("id")
    )


def _owned_item(policy: CapabilityPolicy, cart_item_id: int) -> CartItem:
    item = (
        CartItem.objects.select_for_update()
        .select_related("book")
        .filter(pk=cart_item_id, user_id=policy.actor.actor_id)
        .first()
    )
    if item is None:
        raise InvalidReference(
            "Cart item not found",
            policy_name="cart_item_must_belong_to_user",
            details={"cart_item_id": cart_item_id},
        )
    return item


def add_to_cart(*, policy: CapabilityPolicy, request: CartAddRequest) -> CartItem:
    with transaction.atomic():
        book = get_book(request.book_id)
        raise_if_rejected(book_must_exist_policy(book, request.book_id))
        raise_if_rejected(book_must_be_active_policy(book))

        item, created = CartItem.objects.get_or_create(
            user_id=policy.actor.actor_id,
            book_id=book.pk,
            defaults={"qty": request.qty},
        )
        if not created:
            CartItem.objects.filter(pk=item.pk).update(qty=F("qty") + request.qty)
            item.refresh_from_db()

    logger.info(
        "cart line %s user=%s book=%s qty=%s",
        "added" if created else "merged",
        policy.actor.actor_id,
        book.pk,
        item.qty,
    )
    return CartItem.objects.select_related("book").get(pk=item.pk)


def update_cart_item(*, policy: CapabilityPolicy, request: CartUpdateRequest) -> CartItem:
    with transaction.atomic():
        item = _owned_item(policy, request.cart_item_id)
        raise_if_rejected(book_must_be_active_policy(item.book))
        item.qty = request.qty
        item.save(update_fields=["qty"])
    return item


def remove_cart_item(*, policy: CapabilityPolicy, cart_item_id: int) -> None:
    with transaction.atomic():
        item = _owned_item(policy, cart_item_id)
        item.delete()
    logger.info("cart line removed user=%s id=%s", policy.actor.actor_id, cart_item_id)


def clear_cart(*, policy: CapabilityPolicy) -> int:
    deleted, _ = CartItem.objects.filter(user_id=policy.actor.actor_id).delete()
    return deleted
