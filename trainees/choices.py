# File: trainees/choices.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from django.db import models
from django.utils.translation import gettext_lazy as _


class TraineeType(models.TextChoices):
    PAID_INTERN = "paid_intern", _("Paid intern")
    UNPAID_INTERN = "unpaid_intern", _("Unpaid intern")
    OJT = "ojt", _("OJT student")


class TraineeStatus(models.TextChoices):
    ACTIVE = "active", _("Active")
    COMPLETED = "completed", _("Completed")
    TERMINATED = "terminated", _("Terminated")


class RecordStatus(models.TextChoices):
    PRESENT = "present", _("Present")
    HALF_DAY_AM = "half_day_am", _("Half day (AM)")
    HALF_DAY_PM = "half_day_pm", _("Half day (PM)")
    ABSENT = "absent", _("Absent")


# Types whose billable hours are capped by max_weekly_hours
CAPPED_TYPES = frozenset({TraineeType.PAID_INTERN.value, TraineeType.UNPAID_INTERN.value})

# Statuses counted as a day of attendance
ATTENDED_STATUSES = frozenset({
    RecordStatus.PRESENT.value,
    RecordStatus.HALF_DAY_AM.value,
    RecordStatus.HALF_DAY_PM.value,
})
