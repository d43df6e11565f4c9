# File: trainees/rules.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

"""
Cross-field business rules for time records and trainee configuration.

Both validators are pure: they take any object exposing the expected
attributes (a model instance, a dataclass, a form's cleaned data wrapped in
SimpleNamespace) and return the set of violated rules. An empty set means
the input is valid. Nothing here raises on bad user input.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Set

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .choices import RecordStatus, TraineeType


class Rule(models.TextChoices):
    # time records
    INVALID_SESSION_ORDER = "invalid_session_order", _("Invalid session order")
    SESSION_OVERLAP = "session_overlap", _("Session overlap")
    INCOMPLETE_SESSION_FOR_PRESENT = "incomplete_session_for_present", _("Incomplete session for present")
    FUTURE_DATE_NOT_ALLOWED = "future_date_not_allowed", _("Future date not allowed")
    # trainee configuration
    HOURLY_RATE_REQUIRED = "hourly_rate_required", _("Hourly rate required")
    HOURLY_RATE_NOT_APPLICABLE = "hourly_rate_not_applicable", _("Hourly rate not applicable")
    MAX_WEEKLY_HOURS_REQUIRED = "max_weekly_hours_required", _("Max weekly hours required")
    REQUIRED_HOURS_REQUIRED = "required_hours_required", _("Required hours required")
    END_DATE_BEFORE_START = "end_date_before_start", _("End date before start")


@dataclass(frozen=True)
class Violation:
    rule: str
    field: str
    message: str
    session: Optional[str] = None  # 'am' | 'pm' for session-order rules


def _has_session(record, prefix: str) -> bool:
    return (
        getattr(record, f"{prefix}_time_in", None) is not None
        and getattr(record, f"{prefix}_time_out", None) is not None
    )


# ------------------------------
# Time records
# ------------------------------

def validate_time_record(record, *, today: Optional[date] = None) -> Set[Violation]:
    """
    Check a candidate time record against the attendance rules.

    Every violated rule is reported once, so a form can show all problems
    in one go:
      1. AM out must be after AM in        → INVALID_SESSION_ORDER (am)
      2. PM out must be after PM in        → INVALID_SESSION_ORDER (pm)
      3. PM in must be after AM out        → SESSION_OVERLAP
      4. 'present' needs one full session  → INCOMPLETE_SESSION_FOR_PRESENT
      5. date must not lie after `today`   → FUTURE_DATE_NOT_ALLOWED

    `today` defaults to the business calendar date (settings.TIME_ZONE).
    """
    out: Set[Violation] = set()

    for prefix in ("am", "pm"):
        if _has_session(record, prefix):
            t_in = getattr(record, f"{prefix}_time_in")
            t_out = getattr(record, f"{prefix}_time_out")
            if t_out <= t_in:
                out.add(Violation(
                    Rule.INVALID_SESSION_ORDER.value,
                    f"{prefix}_time_out",
                    str(_("{session} time out must be after {session} time in.")).format(session=prefix.upper()),
                    session=prefix,
                ))

    am_out = getattr(record, "am_time_out", None)
    pm_in = getattr(record, "pm_time_in", None)
    if am_out is not None and pm_in is not None and pm_in <= am_out:
        out.add(Violation(
            Rule.SESSION_OVERLAP.value,
            "pm_time_in",
            str(_("PM time in must be after AM time out.")),
        ))

    status = getattr(record, "status", None)
    if status is not None and str(status) == RecordStatus.PRESENT.value:
        if not (_has_session(record, "am") or _has_session(record, "pm")):
            out.add(Violation(
                Rule.INCOMPLETE_SESSION_FOR_PRESENT.value,
                "status",
                str(_("At least one complete session (AM or PM) is required for present status.")),
            ))

    day = getattr(record, "date", None)
    if day is not None:
        ref = today or timezone.localdate()
        if day > ref:
            out.add(Violation(
                Rule.FUTURE_DATE_NOT_ALLOWED.value,
                "date",
                str(_("Cannot enter future dates.")),
            ))

    return out


def edit_window_open(record_date: date, today: Optional[date] = None, *, days: int = 7) -> bool:
    """True while `record_date` is no older than `days` before `today`."""
    ref = today or timezone.localdate()
    return record_date >= ref - timedelta(days=days)


# ------------------------------
# Trainee configuration
# ------------------------------

def validate_trainee_config(trainee) -> Set[Violation]:
    """
    Type-dependent requirements of a trainee's engagement:
      - paid interns need a positive hourly rate; nobody else may carry one
      - paid/unpaid interns need max_weekly_hours >= 1
      - OJT students need total_required_hours > 0
      - end_date, if set, lies strictly after start_date
    """
    out: Set[Violation] = set()
    kind = str(getattr(trainee, "trainee_type", "") or "")
    rate = getattr(trainee, "hourly_rate", None)
    weekly = getattr(trainee, "max_weekly_hours", None)
    required = getattr(trainee, "total_required_hours", None)

    if kind == TraineeType.PAID_INTERN.value:
        if rate is None or Decimal(rate) <= 0:
            out.add(Violation(
                Rule.HOURLY_RATE_REQUIRED.value,
                "hourly_rate",
                str(_("Hourly rate is required for paid interns.")),
            ))
    elif rate is not None:
        out.add(Violation(
            Rule.HOURLY_RATE_NOT_APPLICABLE.value,
            "hourly_rate",
            str(_("Only paid interns have an hourly rate.")),
        ))

    if kind in (TraineeType.PAID_INTERN.value, TraineeType.UNPAID_INTERN.value):
        if weekly is None or Decimal(weekly) < 1:
            out.add(Violation(
                Rule.MAX_WEEKLY_HOURS_REQUIRED.value,
                "max_weekly_hours",
                str(_("Maximum weekly hours must be at least 1.")),
            ))

    if kind == TraineeType.OJT.value:
        if required is None or Decimal(required) <= 0:
            out.add(Violation(
                Rule.REQUIRED_HOURS_REQUIRED.value,
                "total_required_hours",
                str(_("Total required hours is required for OJT students.")),
            ))

    start = getattr(trainee, "start_date", None)
    end = getattr(trainee, "end_date", None)
    if start and end and end <= start:
        out.add(Violation(
            Rule.END_DATE_BEFORE_START.value,
            "end_date",
            str(_("End date must be after start date.")),
        ))

    return out


def violations_to_errors(violations: Iterable[Violation]) -> dict[str, list[str]]:
    """Shape violations like the `errors` dict handed to ValidationError."""
    errors: dict[str, list[str]] = {}
    for v in sorted(violations, key=lambda v: (v.field, v.rule)):
        errors.setdefault(v.field, []).append(v.message)
    return errors
