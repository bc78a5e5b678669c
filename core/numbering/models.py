"""
Pyramid Books Numbering - Sequence State
========================================
One row per (sequence, period). Rows are locked while a number is taken.
"""

from __future__ import annotations

from django.db import models


class SequenceCounter(models.Model):
    sequence_key = models.CharField(max_length=64)
    period_key = models.CharField(max_length=16, default="", blank=True)
    next_value = models.PositiveIntegerField(default=1)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "pbd_sequence_counters"
        ordering = ["sequence_key", "period_key"]
        constraints = [
            models.UniqueConstraint(
                fields=["sequence_key", "period_key"],
                name="uq_sequence_counter_key_period",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.sequence_key}:{self.period_key}={self.next_value}"
