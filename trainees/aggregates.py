# File: trainees/aggregates.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

"""
Weekly, monthly and OJT figures derived from time records.

Pure functions over already-fetched data: trainees and records are any
objects exposing the model attribute names. Persisting the results is the
job of trainees.services.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from .choices import ATTENDED_STATUSES, CAPPED_TYPES, RecordStatus, TraineeStatus, TraineeType
from .exceptions import InvalidTraineeConfig
from .hours import ZERO, compute_hours, quantize_2

logger = logging.getLogger("logcha.engine")


# ------------------------------
# result types
# ------------------------------

@dataclass(frozen=True)
class WeekTotals:
    trainee_id: object
    week_start_date: date
    week_end_date: date
    total_hours_worked: Decimal
    billable_hours: Decimal
    gross_pay: Decimal
    days_present: int


@dataclass(frozen=True)
class MonthTotals:
    trainee_id: object
    year: int
    month: int
    total_hours_worked: Decimal
    total_billable_hours: Decimal
    total_gross_pay: Decimal
    days_present: int
    days_absent: int


@dataclass(frozen=True)
class OJTProgress:
    trainee_id: object
    first_name: str
    last_name: str
    total_required_hours: Decimal
    hours_rendered: Decimal
    remaining_hours: Decimal
    completion_percentage: Decimal


# ------------------------------
# week helpers
# ------------------------------

def week_start_for(day: date) -> date:
    """Monday of the ISO week containing `day`."""
    return day - timedelta(days=day.weekday())


def week_bounds(week_start: date) -> tuple[date, date]:
    """Inclusive [start, start + 6 days]."""
    return week_start, week_start + timedelta(days=6)


# ------------------------------
# internals
# ------------------------------

def _invalid(field: str, message: str) -> InvalidTraineeConfig:
    logger.warning(f"Trainee config rejected during calculation: {field}: {message}")
    return InvalidTraineeConfig(field, message)


def _record_hours(record) -> Decimal:
    stored = getattr(record, "total_hours", None)
    if stored is not None:
        return Decimal(stored)
    return compute_hours(record).total_hours


def _in_range(records: Iterable, start: date, end: date) -> list:
    return [r for r in records if start <= r.date <= end]


def _kind(trainee) -> str:
    kind = str(getattr(trainee, "trainee_type", "") or "")
    if kind not in TraineeType.values:
        raise _invalid("trainee_type", f"unknown trainee type {kind!r}")
    return kind


def _billable(trainee, kind: str, worked: Decimal) -> Decimal:
    if kind not in CAPPED_TYPES:
        return worked
    ceiling = getattr(trainee, "max_weekly_hours", None)
    if ceiling is None or Decimal(ceiling) < 0:
        raise _invalid("max_weekly_hours", "required for interns")
    return min(worked, Decimal(ceiling))


def _rate(trainee, kind: str) -> Optional[Decimal]:
    if kind != TraineeType.PAID_INTERN.value:
        return None
    rate = getattr(trainee, "hourly_rate", None)
    if rate is None or Decimal(rate) <= 0:
        raise _invalid("hourly_rate", "required for paid interns")
    return Decimal(rate)


def _pay(billable: Decimal, rate: Optional[Decimal]) -> Decimal:
    if rate is None:
        return ZERO
    return quantize_2(billable * rate)


# ------------------------------
# weekly
# ------------------------------

def compute_weekly_summary(trainee, records: Iterable, week_start: date) -> WeekTotals:
    """
    Aggregate one Monday–Sunday window.

    `week_start` is taken as given (see week_start_for to align a date).
    Records outside [week_start, week_start + 6] are ignored. Interns are
    billed up to max_weekly_hours; OJT hours are never capped. Only paid
    interns earn gross pay.
    """
    kind = _kind(trainee)
    start, end = week_bounds(week_start)
    rows = _in_range(records, start, end)

    worked = quantize_2(sum((_record_hours(r) for r in rows), ZERO))
    billable = quantize_2(_billable(trainee, kind, worked))
    gross = _pay(billable, _rate(trainee, kind))
    present = sum(1 for r in rows if str(r.status) in ATTENDED_STATUSES)

    return WeekTotals(
        trainee_id=getattr(trainee, "id", None),
        week_start_date=start,
        week_end_date=end,
        total_hours_worked=worked,
        billable_hours=billable,
        gross_pay=gross,
        days_present=present,
    )


# ------------------------------
# monthly
# ------------------------------

def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def compute_monthly_report(trainee, records: Iterable, year: int, month: int) -> MonthTotals:
    """
    Same derivation as the weekly summary, scoped to a calendar month.

    The weekly ceiling still applies per Monday–Sunday week; weeks that
    straddle a month boundary only contribute the days inside this month.
    """
    kind = _kind(trainee)
    first, last = month_bounds(year, month)
    rows = _in_range(records, first, last)

    by_week: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for r in rows:
        by_week[week_start_for(r.date)] += _record_hours(r)

    worked = quantize_2(sum(by_week.values(), ZERO))
    billable = quantize_2(sum((_billable(trainee, kind, h) for h in by_week.values()), ZERO))
    gross = _pay(billable, _rate(trainee, kind))

    present = sum(1 for r in rows if str(r.status) in ATTENDED_STATUSES)
    absent = sum(1 for r in rows if str(r.status) == RecordStatus.ABSENT.value)

    return MonthTotals(
        trainee_id=getattr(trainee, "id", None),
        year=year,
        month=month,
        total_hours_worked=worked,
        total_billable_hours=billable,
        total_gross_pay=gross,
        days_present=present,
        days_absent=absent,
    )


# ------------------------------
# OJT progress
# ------------------------------

def compute_ojt_progress(trainee, records: Iterable) -> OJTProgress:
    """
    Lifetime progress of an OJT trainee towards total_required_hours.

    remaining_hours is a plain subtraction and goes negative once the
    trainee renders more than required.
    """
    if _kind(trainee) != TraineeType.OJT.value:
        raise _invalid("trainee_type", "progress is only tracked for OJT trainees")
    required = getattr(trainee, "total_required_hours", None)
    if required is None or Decimal(required) <= 0:
        raise _invalid("total_required_hours", "must be greater than zero")

    required = Decimal(required)
    rendered = quantize_2(sum((_record_hours(r) for r in records), ZERO))

    return OJTProgress(
        trainee_id=getattr(trainee, "id", None),
        first_name=getattr(trainee, "first_name", "") or "",
        last_name=getattr(trainee, "last_name", "") or "",
        total_required_hours=required,
        hours_rendered=rendered,
        remaining_hours=quantize_2(required - rendered),
        completion_percentage=quantize_2(rendered / required * 100),
    )


def is_tracked_ojt(trainee) -> bool:
    return (
        str(getattr(trainee, "trainee_type", "")) == TraineeType.OJT.value
        and str(getattr(trainee, "status", "")) == TraineeStatus.ACTIVE.value
    )


def compute_ojt_progress_batch(trainees: Iterable, records: Iterable, *, trainee_id=None) -> list[OJTProgress]:
    """Map compute_ojt_progress over active OJT trainees, optionally just one of them."""
    grouped: dict[object, list] = defaultdict(list)
    for r in records:
        grouped[r.trainee_id].append(r)

    out: list[OJTProgress] = []
    for t in trainees:
        if not is_tracked_ojt(t):
            continue
        if trainee_id is not None and t.id != trainee_id:
            continue
        out.append(compute_ojt_progress(t, grouped.get(t.id, [])))
    return out
