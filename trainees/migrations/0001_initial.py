# trainees/migrations/0001_initial.py
from decimal import Decimal

import concurrency.fields
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import simple_history.models
from django.conf import settings
from django.db import migrations, models


HISTORY_TYPES = [("+", "Created"), ("~", "Changed"), ("-", "Deleted")]

TRAINEE_TYPES = [("paid_intern", "Paid intern"), ("unpaid_intern", "Unpaid intern"), ("ojt", "OJT student")]
TRAINEE_STATUSES = [("active", "Active"), ("completed", "Completed"), ("terminated", "Terminated")]
RECORD_STATUSES = [
    ("present", "Present"),
    ("half_day_am", "Half day (AM)"),
    ("half_day_pm", "Half day (PM)"),
    ("absent", "Absent"),
]


def trainee_fields():
    return [
        ("first_name", models.CharField(max_length=100, verbose_name="First name")),
        ("last_name", models.CharField(max_length=100, verbose_name="Last name")),
        ("email", models.EmailField(blank=True, max_length=254, verbose_name="E-mail")),
        ("employee_id", models.CharField(blank=True, max_length=50, verbose_name="Employee ID")),
        ("trainee_type", models.CharField(choices=TRAINEE_TYPES, max_length=16, verbose_name="Type")),
        ("hourly_rate", models.DecimalField(blank=True, decimal_places=2, help_text="Paid interns only.", max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))], verbose_name="Hourly rate")),
        ("max_weekly_hours", models.PositiveIntegerField(blank=True, help_text="Weekly billable ceiling for interns. Ignored for OJT.", null=True, verbose_name="Max weekly hours")),
        ("total_required_hours", models.PositiveIntegerField(blank=True, help_text="OJT students only.", null=True, verbose_name="Total required hours")),
        ("start_date", models.DateField(verbose_name="Start date")),
        ("end_date", models.DateField(blank=True, null=True, verbose_name="End date")),
        ("status", models.CharField(choices=TRAINEE_STATUSES, default="active", max_length=16, verbose_name="Status")),
        ("school_name", models.CharField(blank=True, max_length=255, verbose_name="School")),
        ("course", models.CharField(blank=True, max_length=255, verbose_name="Course")),
        ("year_level", models.CharField(blank=True, max_length=50, verbose_name="Year level")),
    ]


def timerecord_fields():
    return [
        ("date", models.DateField(verbose_name="Date")),
        ("am_time_in", models.TimeField(blank=True, null=True, verbose_name="AM time in")),
        ("am_time_out", models.TimeField(blank=True, null=True, verbose_name="AM time out")),
        ("pm_time_in", models.TimeField(blank=True, null=True, verbose_name="PM time in")),
        ("pm_time_out", models.TimeField(blank=True, null=True, verbose_name="PM time out")),
        ("am_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=4, verbose_name="AM hours")),
        ("pm_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=4, verbose_name="PM hours")),
        ("total_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=4, verbose_name="Total hours")),
        ("status", models.CharField(choices=RECORD_STATUSES, default="present", max_length=16, verbose_name="Status")),
        ("notes", models.TextField(blank=True, verbose_name="Notes")),
    ]


def history_fields():
    return [
        ("history_id", models.AutoField(primary_key=True, serialize=False)),
        ("history_date", models.DateTimeField(db_index=True)),
        ("history_change_reason", models.CharField(max_length=100, null=True)),
        ("history_type", models.CharField(choices=HISTORY_TYPES, max_length=1)),
        ("history_user", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
    ]


def history_options(label):
    return {
        "verbose_name": f"historical {label}",
        "verbose_name_plural": f"historical {label}s",
        "ordering": ("-history_date", "-history_id"),
        "get_latest_by": ("history_date", "history_id"),
    }


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("address", models.TextField(blank=True, verbose_name="Address")),
                ("contact_person", models.CharField(blank=True, max_length=100, verbose_name="Contact person")),
                ("contact_email", models.EmailField(blank=True, max_length=254, verbose_name="Contact e-mail")),
                ("contact_phone", models.CharField(blank=True, max_length=20, verbose_name="Contact phone")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
            ],
            options={
                "verbose_name": "Company",
                "verbose_name_plural": "Companies",
                "ordering": ("name",),
                "indexes": [models.Index(fields=["name"], name="trainees_co_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="Trainee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *trainee_fields(),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="trainees", to="trainees.company", verbose_name="Company")),
            ],
            options={
                "verbose_name": "Trainee",
                "verbose_name_plural": "Trainees",
                "ordering": ("last_name", "first_name", "id"),
                "indexes": [
                    models.Index(fields=["company", "status"], name="trainees_tr_company_status_idx"),
                    models.Index(fields=["trainee_type"], name="trainees_tr_type_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("employee_id", ""), _negated=True), fields=("company", "employee_id"), name="uq_trainee_company_employee_id"),
                    models.CheckConstraint(condition=models.Q(("end_date__isnull", True), ("end_date__gt", models.F("start_date")), _connector="OR"), name="ck_trainee_dates_order"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TimeRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *timerecord_fields(),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("version", concurrency.fields.AutoIncVersionField(default=0, help_text="record revision number")),
                ("trainee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="time_records", to="trainees.trainee", verbose_name="Trainee")),
            ],
            options={
                "verbose_name": "Time record",
                "verbose_name_plural": "Time records",
                "ordering": ("date", "id"),
                "indexes": [
                    models.Index(fields=["trainee", "date"], name="trainees_ti_trainee_date_idx"),
                    models.Index(fields=["date"], name="trainees_ti_date_idx"),
                    models.Index(fields=["status"], name="trainees_ti_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("trainee", "date"), name="uq_timerecord_trainee_date"),
                    models.CheckConstraint(condition=models.Q(("am_time_in__isnull", True), ("am_time_out__isnull", True), ("am_time_out__gt", models.F("am_time_in")), _connector="OR"), name="ck_timerecord_am_order"),
                    models.CheckConstraint(condition=models.Q(("pm_time_in__isnull", True), ("pm_time_out__isnull", True), ("pm_time_out__gt", models.F("pm_time_in")), _connector="OR"), name="ck_timerecord_pm_order"),
                ],
            },
        ),
        migrations.CreateModel(
            name="WeeklySummary",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("week_start_date", models.DateField(verbose_name="Week start")),
                ("week_end_date", models.DateField(verbose_name="Week end")),
                ("total_hours_worked", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=6, verbose_name="Hours worked")),
                ("billable_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=6, verbose_name="Billable hours")),
                ("gross_pay", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, verbose_name="Gross pay")),
                ("days_present", models.PositiveSmallIntegerField(default=0, verbose_name="Days present")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("trainee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="weekly_summaries", to="trainees.trainee", verbose_name="Trainee")),
            ],
            options={
                "verbose_name": "Weekly summary",
                "verbose_name_plural": "Weekly summaries",
                "ordering": ("-week_start_date", "trainee_id"),
                "indexes": [models.Index(fields=["week_start_date", "week_end_date"], name="trainees_we_week_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("trainee", "week_start_date"), name="uq_weeklysummary_trainee_week"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MonthlyReport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("year", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(9999)], verbose_name="Year")),
                ("month", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name="Month")),
                ("total_hours_worked", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8, verbose_name="Hours worked")),
                ("total_billable_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8, verbose_name="Billable hours")),
                ("total_gross_pay", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, verbose_name="Gross pay")),
                ("days_present", models.PositiveSmallIntegerField(default=0, verbose_name="Days present")),
                ("days_absent", models.PositiveSmallIntegerField(default=0, verbose_name="Days absent")),
                ("generated_at", models.DateTimeField(default=django.utils.timezone.now, verbose_name="Generated at")),
                ("trainee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="monthly_reports", to="trainees.trainee", verbose_name="Trainee")),
            ],
            options={
                "verbose_name": "Monthly report",
                "verbose_name_plural": "Monthly reports",
                "ordering": ("-year", "-month", "trainee_id"),
                "indexes": [models.Index(fields=["year", "month"], name="trainees_mo_year_month_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("trainee", "year", "month"), name="uq_monthlyreport_trainee_month"),
                    models.CheckConstraint(condition=models.Q(("month__gte", 1), ("month__lte", 12)), name="ck_monthlyreport_month_range"),
                ],
            },
        ),

        # simple_history tables
        migrations.CreateModel(
            name="HistoricalTrainee",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                *trainee_fields(),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="Updated at")),
                *history_fields(),
                ("company", models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="trainees.company", verbose_name="Company")),
            ],
            options=history_options("Trainee"),
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="HistoricalTimeRecord",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                *timerecord_fields(),
                ("created_at", models.DateTimeField(blank=True, editable=False, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(blank=True, editable=False, verbose_name="Updated at")),
                ("version", concurrency.fields.AutoIncVersionField(default=0, help_text="record revision number")),
                *history_fields(),
                ("trainee", models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name="+", to="trainees.trainee", verbose_name="Trainee")),
            ],
            options=history_options("Time record"),
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
