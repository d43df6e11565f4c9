# File: trainees/hours.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .exceptions import NegativeDuration

logger = logging.getLogger("logcha.engine")

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
_MICROS_PER_HOUR = Decimal(3600 * 1_000_000)


def quantize_2(value) -> Decimal:
    """Round half-up to two decimal places (the stored precision of every figure)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class HourBreakdown:
    am_hours: Decimal
    pm_hours: Decimal
    total_hours: Decimal


def _span_micros(prefix: str, t_in: Optional[time], t_out: Optional[time]) -> int:
    """Raw session length in microseconds; 0 unless both ends are set."""
    if t_in is None or t_out is None:
        return 0
    # same-day clock times; no wrap past midnight
    span = datetime.combine(date.min, t_out) - datetime.combine(date.min, t_in)
    if span <= timedelta(0):
        logger.warning(f"Refusing {prefix.upper()} session {t_in}–{t_out}: time out is not after time in")
        raise NegativeDuration(prefix)
    return span // timedelta(microseconds=1)


def compute_hours(record) -> HourBreakdown:
    """
    Derive am/pm/total hours from a record's raw clock times.

    Each field is computed from raw durations and rounded on its own, so
    `total_hours` is round(am_raw + pm_raw), not the sum of the rounded halves.
    A half-filled session counts as 0 hours. A session whose time out is not
    after its time in raises NegativeDuration; run validate_time_record first
    on user input.
    """
    am = _span_micros("am", getattr(record, "am_time_in", None), getattr(record, "am_time_out", None))
    pm = _span_micros("pm", getattr(record, "pm_time_in", None), getattr(record, "pm_time_out", None))
    return HourBreakdown(
        am_hours=quantize_2(Decimal(am) / _MICROS_PER_HOUR),
        pm_hours=quantize_2(Decimal(pm) / _MICROS_PER_HOUR),
        total_hours=quantize_2(Decimal(am + pm) / _MICROS_PER_HOUR),
    )
