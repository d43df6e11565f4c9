# File: trainees/services.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

"""
Data-access layer around the calculators.

Fetches a consistent snapshot of records, hands it to the pure functions in
trainees.aggregates and writes the result back. Recomputing from the same
rows always yields the same figures, so every function here is safe to call
repeatedly.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .aggregates import (
    OJTProgress,
    compute_monthly_report,
    compute_ojt_progress_batch,
    compute_weekly_summary,
    month_bounds,
    week_bounds,
    week_start_for,
)
from .choices import TraineeStatus, TraineeType
from .exceptions import EditWindowClosed
from .models import MonthlyReport, TimeRecord, Trainee, WeeklySummary
from .rules import edit_window_open

logger = logging.getLogger("logcha.services")


def edit_window_days() -> int:
    return int(getattr(settings, "LOGCHA_EDIT_WINDOW_DAYS", 7))


def records_in_range(trainee: Trainee, start: date, end: date):
    return TimeRecord.objects.filter(trainee=trainee, date__gte=start, date__lte=end).order_by("date")


# ------------------------------
# weekly summaries
# ------------------------------

def recompute_weekly_summary(trainee: Trainee, week_start: date, *, commit: bool = True):
    """
    Recompute the summary for the week starting on `week_start` (a Monday).

    With commit=False the computed WeekTotals are returned without touching
    the database.
    """
    start, end = week_bounds(week_start)
    with transaction.atomic():
        rows = list(records_in_range(trainee, start, end))
        totals = compute_weekly_summary(trainee, rows, start)
        if not commit:
            return totals

        obj, created = WeeklySummary.objects.update_or_create(
            trainee=trainee,
            week_start_date=start,
            defaults={
                "week_end_date": totals.week_end_date,
                "total_hours_worked": totals.total_hours_worked,
                "billable_hours": totals.billable_hours,
                "gross_pay": totals.gross_pay,
                "days_present": totals.days_present,
            },
        )
    logger.info(
        f"Weekly summary {'created' if created else 'updated'}: trainee#{trainee.pk} "
        f"week {start.isoformat()} worked={totals.total_hours_worked} "
        f"billable={totals.billable_hours} pay={totals.gross_pay}"
    )
    return obj


def refresh_cached_week(trainee: Trainee, day: date) -> Optional[WeeklySummary]:
    """Recompute the week containing `day`, but only if a summary is already cached."""
    start = week_start_for(day)
    if not WeeklySummary.objects.filter(trainee=trainee, week_start_date=start).exists():
        return None
    return recompute_weekly_summary(trainee, start)


# ------------------------------
# monthly reports
# ------------------------------

def generate_monthly_report(trainee: Trainee, year: int, month: int, *, commit: bool = True):
    first, last = month_bounds(year, month)
    with transaction.atomic():
        rows = list(records_in_range(trainee, first, last))
        totals = compute_monthly_report(trainee, rows, year, month)
        if not commit:
            return totals

        obj, created = MonthlyReport.objects.update_or_create(
            trainee=trainee,
            year=year,
            month=month,
            defaults={
                "total_hours_worked": totals.total_hours_worked,
                "total_billable_hours": totals.total_billable_hours,
                "total_gross_pay": totals.total_gross_pay,
                "days_present": totals.days_present,
                "days_absent": totals.days_absent,
                "generated_at": timezone.now(),
            },
        )
    logger.info(
        f"Monthly report {'created' if created else 'updated'}: trainee#{trainee.pk} "
        f"{year}-{month:02d} worked={totals.total_hours_worked} pay={totals.total_gross_pay}"
    )
    return obj


# ------------------------------
# OJT progress
# ------------------------------

def ojt_progress(trainee_id=None, *, company=None) -> list[OJTProgress]:
    """Progress of active OJT trainees, system-wide or for one company / one trainee."""
    trainees = Trainee.objects.filter(trainee_type=TraineeType.OJT, status=TraineeStatus.ACTIVE)
    if company is not None:
        trainees = trainees.filter(company=company)
    if trainee_id is not None:
        trainees = trainees.filter(pk=trainee_id)

    with transaction.atomic():
        trainees = list(trainees)
        records = TimeRecord.objects.filter(trainee__in=trainees).only("trainee_id", "date", "status", "total_hours")
        return compute_ojt_progress_batch(trainees, records)


# ------------------------------
# trainee-side edits
# ------------------------------

def update_time_record(record: TimeRecord, *, today: Optional[date] = None, enforce_edit_window: bool = True, **changes) -> TimeRecord:
    """
    Apply a trainee's changes to an existing record.

    Trainees may only touch records dated within the edit window
    (LOGCHA_EDIT_WINDOW_DAYS, default 7). Admin corrections pass
    enforce_edit_window=False. The record is fully validated before saving.
    """
    ref = today or timezone.localdate()
    days = edit_window_days()
    if enforce_edit_window:
        targets = {record.date, changes.get("date", record.date)}
        if not all(edit_window_open(d, ref, days=days) for d in targets):
            logger.warning(
                f"Edit refused for time record #{record.pk} ({record.date.isoformat()}): "
                f"older than {days} days"
            )
            raise EditWindowClosed(f"Records older than {days} days can no longer be edited.")

    old_date = record.date
    previous = {field: getattr(record, field) for field in changes}
    for field, value in changes.items():
        setattr(record, field, value)

    try:
        _full_clean(record, today=ref)
    except ValidationError:
        # caller keeps the record as it was stored
        for field, value in previous.items():
            setattr(record, field, value)
        raise

    with transaction.atomic():
        record.save()
        if record.date != old_date:
            refresh_cached_week(record.trainee, old_date)
    return record


def _full_clean(record: TimeRecord, *, today: date) -> None:
    """Model.full_clean() with the business date of the edit passed to clean()."""
    errors = {}
    for step in (record.clean_fields, lambda: record.clean(today=today), record.validate_unique, record.validate_constraints):
        try:
            step()
        except ValidationError as e:
            errors = e.update_error_dict(errors)
    if errors:
        raise ValidationError(errors)
