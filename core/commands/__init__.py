"""
Pyramid Books Command Layer
==============================
Every write begins as a typed request.
Every rejected request produces exactly one structured reason.
"""

from core.commands.errors import (
    CartEmpty,
    CreditLimitExceeded,
    Forbidden,
    InsufficientStock,
    InvalidReference,
    InvalidStatusTransition,
    OrderWorkflowError,
    PriceMismatch,
    Unauthorized,
    ValidationError,
    error_from_rejection,
    raise_if_rejected,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
    # ── Errors ────────────────────────────────────────────────
    "OrderWorkflowError",
    "Unauthorized",
    "Forbidden",
    "InvalidReference",
    "InsufficientStock",
    "PriceMismatch",
    "CreditLimitExceeded",
    "ValidationError",
    "CartEmpty",
    "InvalidStatusTransition",
    "error_from_rejection",
    "raise_if_rejected",
]
