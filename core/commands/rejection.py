"""
Pyramid Books Command Layer - Rejection Model
==============================================
Structured rejection reasons for denied requests.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for request rejection.

    Fields:
        code:        Machine-readable rejection code (e.g. 'INSUFFICIENT_STOCK').
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
        details:     Optional structured values (amounts, ids) for clients.
    """

    code: str
    message: str
    policy_name: str
    details: Optional[dict[str, Any]] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
            "details": dict(self.details or {}),
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Identity / authorization ──────────────────────────────
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # ── References ────────────────────────────────────────────
    INVALID_REFERENCE = "INVALID_REFERENCE"

    # ── Pricing / stock ───────────────────────────────────────
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    PRICE_MISMATCH = "PRICE_MISMATCH"

    # ── Credit ────────────────────────────────────────────────
    CREDIT_LIMIT_EXCEEDED = "CREDIT_LIMIT_EXCEEDED"

    # ── Request shape / state ─────────────────────────────────
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CART_EMPTY = "CART_EMPTY"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
