# File: trainees/models.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from simple_history.models import HistoricalRecords
from concurrency.fields import AutoIncVersionField

from .aggregates import week_bounds
from .choices import CAPPED_TYPES, RecordStatus, TraineeStatus, TraineeType
from .hours import compute_hours
from .rules import validate_time_record, validate_trainee_config, violations_to_errors


# ------------------------------
# Company
# ------------------------------

class Company(models.Model):
    name = models.CharField(_("Name"), max_length=255)
    address = models.TextField(_("Address"), blank=True)
    contact_person = models.CharField(_("Contact person"), max_length=100, blank=True)
    contact_email = models.EmailField(_("Contact e-mail"), blank=True)
    contact_phone = models.CharField(_("Contact phone"), max_length=20, blank=True)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    class Meta:
        verbose_name = _("Company")
        verbose_name_plural = _("Companies")
        ordering = ("name",)
        indexes = [
            models.Index(fields=["name"], name="trainees_co_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name


# ------------------------------
# Trainee
# ------------------------------

class Trainee(models.Model):
    """
    One person's engagement at a company.

    Which optional fields are required depends on `trainee_type`
    (see rules.validate_trainee_config). Trainees are never deleted;
    terminated ones keep their records and are soft-marked via `status`.
    """
    Type = TraineeType
    Status = TraineeStatus

    company = models.ForeignKey(
        Company, on_delete=models.PROTECT, related_name="trainees", verbose_name=_("Company")
    )
    first_name = models.CharField(_("First name"), max_length=100)
    last_name = models.CharField(_("Last name"), max_length=100)
    email = models.EmailField(_("E-mail"), blank=True)
    employee_id = models.CharField(_("Employee ID"), max_length=50, blank=True)

    trainee_type = models.CharField(_("Type"), max_length=16, choices=TraineeType.choices)

    # interns
    hourly_rate = models.DecimalField(
        _("Hourly rate"), max_digits=10, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Paid interns only."),
    )
    max_weekly_hours = models.PositiveIntegerField(
        _("Max weekly hours"), null=True, blank=True,
        help_text=_("Weekly billable ceiling for interns. Ignored for OJT."),
    )

    # OJT
    total_required_hours = models.PositiveIntegerField(
        _("Total required hours"), null=True, blank=True,
        help_text=_("OJT students only."),
    )

    start_date = models.DateField(_("Start date"))
    end_date = models.DateField(_("End date"), null=True, blank=True)
    status = models.CharField(_("Status"), max_length=16, choices=TraineeStatus.choices, default=TraineeStatus.ACTIVE)

    school_name = models.CharField(_("School"), max_length=255, blank=True)
    course = models.CharField(_("Course"), max_length=255, blank=True)
    year_level = models.CharField(_("Year level"), max_length=50, blank=True)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    history = HistoricalRecords()

    class Meta:
        verbose_name = _("Trainee")
        verbose_name_plural = _("Trainees")
        ordering = ("last_name", "first_name", "id")
        indexes = [
            models.Index(fields=["company", "status"], name="trainees_tr_company_status_idx"),
            models.Index(fields=["trainee_type"], name="trainees_tr_type_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["company", "employee_id"],
                condition=~models.Q(employee_id=""),
                name="uq_trainee_company_employee_id",
            ),
            models.CheckConstraint(
                condition=models.Q(end_date__isnull=True) | models.Q(end_date__gt=models.F("start_date")),
                name="ck_trainee_dates_order",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.last_name}, {self.first_name} ({self.get_trainee_type_display()})"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_capped(self) -> bool:
        return self.trainee_type in CAPPED_TYPES

    def clean(self):
        super().clean()
        errors = violations_to_errors(validate_trainee_config(self))
        if errors:
            raise ValidationError(errors)


# ------------------------------
# Time records
# ------------------------------

class TimeRecord(models.Model):
    """
    One calendar day of attendance, split into an AM and a PM session.

    am_hours / pm_hours / total_hours are derived from the clock times on
    every save and cannot be set independently.
    """
    Status = RecordStatus

    trainee = models.ForeignKey(
        Trainee, on_delete=models.PROTECT, related_name="time_records", verbose_name=_("Trainee")
    )
    date = models.DateField(_("Date"))

    am_time_in = models.TimeField(_("AM time in"), null=True, blank=True)
    am_time_out = models.TimeField(_("AM time out"), null=True, blank=True)
    pm_time_in = models.TimeField(_("PM time in"), null=True, blank=True)
    pm_time_out = models.TimeField(_("PM time out"), null=True, blank=True)

    am_hours = models.DecimalField(_("AM hours"), max_digits=4, decimal_places=2, default=Decimal("0.00"), editable=False)
    pm_hours = models.DecimalField(_("PM hours"), max_digits=4, decimal_places=2, default=Decimal("0.00"), editable=False)
    total_hours = models.DecimalField(_("Total hours"), max_digits=4, decimal_places=2, default=Decimal("0.00"), editable=False)

    status = models.CharField(_("Status"), max_length=16, choices=RecordStatus.choices, default=RecordStatus.PRESENT)
    notes = models.TextField(_("Notes"), blank=True)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    history = HistoricalRecords()
    version = AutoIncVersionField()

    class Meta:
        verbose_name = _("Time record")
        verbose_name_plural = _("Time records")
        ordering = ("date", "id")
        constraints = [
            models.UniqueConstraint(fields=["trainee", "date"], name="uq_timerecord_trainee_date"),
            models.CheckConstraint(
                condition=models.Q(am_time_in__isnull=True) | models.Q(am_time_out__isnull=True) | models.Q(am_time_out__gt=models.F("am_time_in")),
                name="ck_timerecord_am_order",
            ),
            models.CheckConstraint(
                condition=models.Q(pm_time_in__isnull=True) | models.Q(pm_time_out__isnull=True) | models.Q(pm_time_out__gt=models.F("pm_time_in")),
                name="ck_timerecord_pm_order",
            ),
        ]
        indexes = [
            models.Index(fields=["trainee", "date"], name="trainees_ti_trainee_date_idx"),
            models.Index(fields=["date"], name="trainees_ti_date_idx"),
            models.Index(fields=["status"], name="trainees_ti_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.date.isoformat()} — {self.get_status_display()} ({self.total_hours}h)"

    def clean(self, today=None):
        super().clean()
        errors = violations_to_errors(validate_time_record(self, today=today))

        # Check for duplicate day
        if self.trainee_id and self.date:
            existing = TimeRecord.objects.filter(
                trainee_id=self.trainee_id,
                date=self.date,
            ).exclude(pk=self.pk).exists()

            if existing:
                errors.setdefault("__all__", []).append(
                    _("A time record already exists for this trainee on {date}.").format(date=self.date.isoformat())
                )

        if errors:
            raise ValidationError(errors)

    def recompute_hours(self):
        breakdown = compute_hours(self)
        self.am_hours = breakdown.am_hours
        self.pm_hours = breakdown.pm_hours
        self.total_hours = breakdown.total_hours

    def save(self, *args, **kwargs):
        # derived columns follow the clock times
        self.recompute_hours()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"am_hours", "pm_hours", "total_hours"}

        from .services import refresh_cached_week

        # row and cached weekly summary change together
        with transaction.atomic():
            super().save(*args, **kwargs)
            refresh_cached_week(self.trainee, self.date)

    def delete(self, *args, **kwargs):
        from .services import refresh_cached_week

        trainee, day = self.trainee, self.date
        with transaction.atomic():
            result = super().delete(*args, **kwargs)
            refresh_cached_week(trainee, day)
        return result


# ------------------------------
# Cached aggregates
# ------------------------------

class WeeklySummary(models.Model):
    """Derived cache over one Monday–Sunday week; recompute, never edit."""
    trainee = models.ForeignKey(
        Trainee, on_delete=models.CASCADE, related_name="weekly_summaries", verbose_name=_("Trainee")
    )
    week_start_date = models.DateField(_("Week start"))
    week_end_date = models.DateField(_("Week end"))

    total_hours_worked = models.DecimalField(_("Hours worked"), max_digits=6, decimal_places=2, default=Decimal("0.00"))
    billable_hours = models.DecimalField(_("Billable hours"), max_digits=6, decimal_places=2, default=Decimal("0.00"))
    gross_pay = models.DecimalField(_("Gross pay"), max_digits=10, decimal_places=2, default=Decimal("0.00"))
    days_present = models.PositiveSmallIntegerField(_("Days present"), default=0)

    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    class Meta:
        verbose_name = _("Weekly summary")
        verbose_name_plural = _("Weekly summaries")
        ordering = ("-week_start_date", "trainee_id")
        constraints = [
            models.UniqueConstraint(fields=["trainee", "week_start_date"], name="uq_weeklysummary_trainee_week"),
        ]
        indexes = [
            models.Index(fields=["week_start_date", "week_end_date"], name="trainees_we_week_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.trainee} — week of {self.week_start_date.isoformat()}"

    def clean(self):
        errors = {}
        if self.week_start_date:
            if self.week_start_date.weekday() != 0:
                errors["week_start_date"] = _("Weeks start on a Monday.")
            elif self.week_end_date and self.week_end_date != week_bounds(self.week_start_date)[1]:
                errors["week_end_date"] = _("Week end must be six days after week start.")
        if errors:
            raise ValidationError(errors)


class MonthlyReport(models.Model):
    trainee = models.ForeignKey(
        Trainee, on_delete=models.CASCADE, related_name="monthly_reports", verbose_name=_("Trainee")
    )
    year = models.PositiveIntegerField(_("Year"), validators=[MinValueValidator(2000), MaxValueValidator(9999)])
    month = models.PositiveSmallIntegerField(_("Month"), validators=[MinValueValidator(1), MaxValueValidator(12)])

    total_hours_worked = models.DecimalField(_("Hours worked"), max_digits=8, decimal_places=2, default=Decimal("0.00"))
    total_billable_hours = models.DecimalField(_("Billable hours"), max_digits=8, decimal_places=2, default=Decimal("0.00"))
    total_gross_pay = models.DecimalField(_("Gross pay"), max_digits=12, decimal_places=2, default=Decimal("0.00"))
    days_present = models.PositiveSmallIntegerField(_("Days present"), default=0)
    days_absent = models.PositiveSmallIntegerField(_("Days absent"), default=0)

    generated_at = models.DateTimeField(_("Generated at"), default=timezone.now)

    class Meta:
        verbose_name = _("Monthly report")
        verbose_name_plural = _("Monthly reports")
        ordering = ("-year", "-month", "trainee_id")
        constraints = [
            models.UniqueConstraint(fields=["trainee", "year", "month"], name="uq_monthlyreport_trainee_month"),
            models.CheckConstraint(
                condition=models.Q(month__gte=1, month__lte=12),
                name="ck_monthlyreport_month_range",
            ),
        ]
        indexes = [
            models.Index(fields=["year", "month"], name="trainees_mo_year_month_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.trainee} — {self.year}-{self.month:02d}"
