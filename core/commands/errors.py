"""
Pyramid Books Command Layer - Workflow Errors
==============================================
Typed failures raised by order, cart, catalog and ledger services.

Every error carries a RejectionReason so the transport layer can map
it without string matching. Errors raised inside transaction.atomic()
roll the whole unit of work back; none of them are retried.
"""

from __future__ import annotations

from typing import Any, Optional

from core.commands.rejection import ReasonCode, RejectionReason


class OrderWorkflowError(Exception):
    """Base error for all rejected workflow requests."""

    code = ReasonCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        *,
        policy_name: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.reason = RejectionReason(
            code=self.code,
            message=message,
            policy_name=policy_name,
            details=details,
        )
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.reason.message


class Unauthorized(OrderWorkflowError):
    """No resolvable identity for the request."""

    code = ReasonCode.UNAUTHORIZED


class Forbidden(OrderWorkflowError):
    """Identity resolved but role or ownership does not allow the action."""

    code = ReasonCode.FORBIDDEN


class InvalidReference(OrderWorkflowError):
    """Referenced book, customer, order, cart line or rule does not exist."""

    code = ReasonCode.INVALID_REFERENCE


class InsufficientStock(OrderWorkflowError):
    code = ReasonCode.INSUFFICIENT_STOCK


class PriceMismatch(OrderWorkflowError):
    code = ReasonCode.PRICE_MISMATCH


class CreditLimitExceeded(OrderWorkflowError):
    code = ReasonCode.CREDIT_LIMIT_EXCEEDED


class ValidationError(OrderWorkflowError):
    """Malformed input shape or illegal state change."""

    code = ReasonCode.VALIDATION_ERROR


class CartEmpty(ValidationError):
    code = ReasonCode.CART_EMPTY


class InvalidStatusTransition(ValidationError):
    code = ReasonCode.INVALID_STATUS_TRANSITION


_ERROR_BY_CODE: dict[str, type[OrderWorkflowError]] = {
    error_cls.code: error_cls
    for error_cls in (
        Unauthorized,
        Forbidden,
        InvalidReference,
        InsufficientStock,
        PriceMismatch,
        CreditLimitExceeded,
        ValidationError,
        CartEmpty,
        InvalidStatusTransition,
    )
}


def error_from_rejection(reason: RejectionReason) -> OrderWorkflowError:
    """Build the typed error matching a policy's RejectionReason."""
    error_cls = _ERROR_BY_CODE.get(reason.code, ValidationError)
    return error_cls(
        reason.message,
        policy_name=reason.policy_name,
        details=reason.details,
    )


def raise_if_rejected(reason: Optional[RejectionReason]) -> None:
    if reason is not None:
        raise error_from_rejection(reason)
