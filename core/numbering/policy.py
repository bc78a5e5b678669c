"""
Pyramid Books Numbering - Policy
================================
Declares how document numbers are formatted and when sequences reset.

Rules:
- Same policy + sequence position + period -> same number.
- Time is passed explicitly, never read here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

RESET_NEVER = "NEVER"
RESET_MONTHLY = "MONTHLY"
RESET_YEARLY = "YEARLY"

VALID_RESET_PERIODS = frozenset({RESET_NEVER, RESET_MONTHLY, RESET_YEARLY})

SEQUENCE_ORDER = "ORDER"
SEQUENCE_STOCK_RECEIPT = "STOCK_RECEIPT"


@dataclass(frozen=True)
class NumberingPolicy:
    """
    Fields:
        sequence_key: counter identity, e.g. "ORDER"
        prefix:       prepended before the period, e.g. "PB-"
        padding:      minimum digit width of the sequence part
        reset_period: NEVER / MONTHLY / YEARLY
        start_at:     first sequence value of each period
    """

    sequence_key: str
    prefix: str = ""
    padding: int = 6
    reset_period: str = RESET_YEARLY
    start_at: int = 1

    def __post_init__(self):
        if not self.sequence_key or not isinstance(self.sequence_key, str):
            raise ValueError("sequence_key must be a non-empty string.")
        if not isinstance(self.prefix, str):
            raise ValueError("prefix must be a string.")
        if not isinstance(self.padding, int) or self.padding < 1:
            raise ValueError("padding must be int >= 1.")
        if self.reset_period not in VALID_RESET_PERIODS:
            raise ValueError(
                f"reset_period '{self.reset_period}' is not valid. "
                f"Must be one of: {sorted(VALID_RESET_PERIODS)}"
            )
        if not isinstance(self.start_at, int) or self.start_at < 1:
            raise ValueError("start_at must be int >= 1.")

    def format_number(self, sequence: int, period: str) -> str:
        """
        e.g. prefix "PB-", period "2026", sequence 42 -> "PB-2026-000042".
        """
        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be int >= 1.")
        padded = str(sequence).zfill(self.padding)
        if period:
            return f"{self.prefix}{period}-{padded}"
        return f"{self.prefix}{padded}"


def period_key(policy: NumberingPolicy, issued_at: datetime) -> str:
    """
    Key of the reset period containing issued_at (UTC).

    - NEVER   -> ""
    - MONTHLY -> "2026-02"
    - YEARLY  -> "2026"
    """
    if policy.reset_period == RESET_NEVER:
        return ""
    if issued_at.tzinfo is None:
        issued_at = issued_at.replace(tzinfo=timezone.utc)
    else:
        issued_at = issued_at.astimezone(timezone.utc)

    if policy.reset_period == RESET_MONTHLY:
        return issued_at.strftime("%Y-%m")
    return issued_at.strftime("%Y")
