# File: trainees/tests/utils.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from trainees.aggregates import week_start_for
from trainees.models import Company, Trainee


class TraineeTestMixin:
    """Mixin providing one company with a trainee of each type."""

    def setUp(self):
        super().setUp()

        self.today = timezone.localdate()
        # last fully past week, so no record lands in the future
        self.monday = week_start_for(self.today) - timedelta(days=7)

        self.company = Company.objects.create(name="Acme Software Inc.")

        self.paid = Trainee.objects.create(
            company=self.company,
            first_name="Juan",
            last_name="Dela Cruz",
            employee_id="ACME-001",
            trainee_type=Trainee.Type.PAID_INTERN,
            hourly_rate=Decimal("75.00"),
            max_weekly_hours=16,
            start_date=self.today - timedelta(days=120),
        )
        self.unpaid = Trainee.objects.create(
            company=self.company,
            first_name="Ana",
            last_name="Reyes",
            employee_id="ACME-002",
            trainee_type=Trainee.Type.UNPAID_INTERN,
            max_weekly_hours=20,
            start_date=self.today - timedelta(days=120),
        )
        self.ojt = Trainee.objects.create(
            company=self.company,
            first_name="Paolo",
            last_name="Garcia",
            employee_id="ACME-003",
            trainee_type=Trainee.Type.OJT,
            total_required_hours=500,
            start_date=self.today - timedelta(days=120),
        )
