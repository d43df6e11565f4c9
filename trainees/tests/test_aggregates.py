# File: trainees/tests/test_aggregates.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from datetime import date, time, timedelta
from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase

from trainees.aggregates import (
    compute_monthly_report,
    compute_ojt_progress,
    compute_ojt_progress_batch,
    compute_weekly_summary,
    week_bounds,
    week_start_for,
)
from trainees.exceptions import InvalidTraineeConfig

MONDAY = date(2026, 10, 12)


def trainee(id=1, **kw):
    base = dict(
        id=id,
        first_name="Juan",
        last_name="Dela Cruz",
        trainee_type="paid_intern",
        status="active",
        hourly_rate=Decimal("75.00"),
        max_weekly_hours=16,
        total_required_hours=None,
    )
    base.update(kw)
    return SimpleNamespace(**base)


def ojt(id=1, required=500, **kw):
    return trainee(id=id, trainee_type="ojt", hourly_rate=None, max_weekly_hours=None,
                   total_required_hours=required, **kw)


def rec(day, hours, status="present", trainee_id=1):
    return SimpleNamespace(trainee_id=trainee_id, date=day, status=status, total_hours=Decimal(hours))


def week_of(hours_per_day, days=5, start=MONDAY):
    return [rec(start + timedelta(days=i), hours_per_day) for i in range(days)]


class WeekHelperTests(SimpleTestCase):

    def test_week_start_for(self):
        self.assertEqual(week_start_for(date(2026, 10, 12)), MONDAY)   # Monday
        self.assertEqual(week_start_for(date(2026, 10, 15)), MONDAY)   # Thursday
        self.assertEqual(week_start_for(date(2026, 10, 18)), MONDAY)   # Sunday
        self.assertEqual(week_start_for(date(2026, 10, 19)), date(2026, 10, 19))

    def test_week_bounds(self):
        self.assertEqual(week_bounds(MONDAY), (MONDAY, date(2026, 10, 18)))


class WeeklySummaryTests(SimpleTestCase):

    def test_empty_week_is_all_zero(self):
        s = compute_weekly_summary(trainee(), [], MONDAY)
        self.assertEqual(s.total_hours_worked, Decimal("0.00"))
        self.assertEqual(s.billable_hours, Decimal("0.00"))
        self.assertEqual(s.gross_pay, Decimal("0.00"))
        self.assertEqual(s.days_present, 0)
        self.assertEqual(s.week_end_date, date(2026, 10, 18))

    def test_paid_intern_capped(self):
        """5 days × 4h = 20h against a 16h ceiling"""
        s = compute_weekly_summary(trainee(), week_of("4.00"), MONDAY)
        self.assertEqual(s.total_hours_worked, Decimal("20.00"))
        self.assertEqual(s.billable_hours, Decimal("16.00"))
        self.assertEqual(s.gross_pay, Decimal("1200.00"))  # 16 × 75
        self.assertEqual(s.days_present, 5)

    def test_paid_intern_under_cap(self):
        s = compute_weekly_summary(trainee(), week_of("3.50", days=4), MONDAY)
        self.assertEqual(s.billable_hours, Decimal("14.00"))
        self.assertEqual(s.gross_pay, Decimal("1050.00"))

    def test_unpaid_intern_capped_without_pay(self):
        t = trainee(trainee_type="unpaid_intern", hourly_rate=None)
        s = compute_weekly_summary(t, week_of("4.00"), MONDAY)
        self.assertEqual(s.billable_hours, Decimal("16.00"))
        self.assertEqual(s.gross_pay, Decimal("0.00"))

    def test_ojt_uncapped(self):
        s = compute_weekly_summary(ojt(), week_of("8.00"), MONDAY)
        self.assertEqual(s.total_hours_worked, Decimal("40.00"))
        self.assertEqual(s.billable_hours, s.total_hours_worked)
        self.assertEqual(s.gross_pay, Decimal("0.00"))

    def test_absent_not_counted_as_present(self):
        rows = [
            rec(MONDAY, "8.00"),
            rec(MONDAY + timedelta(days=1), "4.00", status="half_day_am"),
            rec(MONDAY + timedelta(days=2), "4.00", status="half_day_pm"),
            rec(MONDAY + timedelta(days=3), "0.00", status="absent"),
        ]
        s = compute_weekly_summary(trainee(), rows, MONDAY)
        self.assertEqual(s.days_present, 3)

    def test_records_outside_week_ignored(self):
        rows = week_of("4.00") + [rec(MONDAY - timedelta(days=1), "8.00"), rec(MONDAY + timedelta(days=7), "8.00")]
        s = compute_weekly_summary(ojt(), rows, MONDAY)
        self.assertEqual(s.total_hours_worked, Decimal("20.00"))
        self.assertEqual(s.days_present, 5)

    def test_sunday_included(self):
        s = compute_weekly_summary(ojt(), [rec(MONDAY + timedelta(days=6), "2.00")], MONDAY)
        self.assertEqual(s.total_hours_worked, Decimal("2.00"))

    def test_deterministic(self):
        rows = week_of("4.25")
        self.assertEqual(
            compute_weekly_summary(trainee(), rows, MONDAY),
            compute_weekly_summary(trainee(), rows, MONDAY),
        )

    def test_record_without_stored_hours_uses_clock_times(self):
        raw = SimpleNamespace(
            trainee_id=1, date=MONDAY, status="present", total_hours=None,
            am_time_in=time(8), am_time_out=time(12), pm_time_in=time(13), pm_time_out=time(17),
        )
        s = compute_weekly_summary(ojt(), [raw], MONDAY)
        self.assertEqual(s.total_hours_worked, Decimal("8.00"))

    def test_paid_intern_without_rate_fails(self):
        with self.assertRaises(InvalidTraineeConfig) as cm:
            compute_weekly_summary(trainee(hourly_rate=None), week_of("4.00"), MONDAY)
        self.assertEqual(cm.exception.field, "hourly_rate")

    def test_paid_intern_zero_rate_fails(self):
        with self.assertRaises(InvalidTraineeConfig) as cm:
            compute_weekly_summary(trainee(hourly_rate=Decimal("0.00")), week_of("4.00"), MONDAY)
        self.assertEqual(cm.exception.field, "hourly_rate")

    def test_intern_without_ceiling_fails(self):
        with self.assertRaises(InvalidTraineeConfig) as cm:
            compute_weekly_summary(trainee(max_weekly_hours=None), [], MONDAY)
        self.assertEqual(cm.exception.field, "max_weekly_hours")

    def test_unknown_type_fails(self):
        with self.assertRaises(InvalidTraineeConfig):
            compute_weekly_summary(trainee(trainee_type="volunteer"), [], MONDAY)


class MonthlyReportTests(SimpleTestCase):

    def test_month_with_cap_per_week(self):
        """
        October 2026: Thu 1 – Sat 31.
        Week of Sep 28 contributes Oct 1–2 only (2 × 4h = 8h, under cap);
        week of Oct 5 has 5 × 4h = 20h → capped to 16h.
        """
        rows = [
            rec(date(2026, 9, 30), "4.00"),      # previous month, ignored
            rec(date(2026, 10, 1), "4.00"),
            rec(date(2026, 10, 2), "4.00"),
        ] + week_of("4.00", start=date(2026, 10, 5)) + [
            rec(date(2026, 10, 13), "0.00", status="absent"),
        ]
        m = compute_monthly_report(trainee(), rows, 2026, 10)
        self.assertEqual(m.total_hours_worked, Decimal("28.00"))
        self.assertEqual(m.total_billable_hours, Decimal("24.00"))
        self.assertEqual(m.total_gross_pay, Decimal("1800.00"))
        self.assertEqual(m.days_present, 7)
        self.assertEqual(m.days_absent, 1)

    def test_empty_month(self):
        m = compute_monthly_report(ojt(), [], 2026, 2)
        self.assertEqual(m.total_hours_worked, Decimal("0.00"))
        self.assertEqual(m.days_present, 0)
        self.assertEqual(m.days_absent, 0)

    def test_ojt_month_uncapped(self):
        rows = week_of("8.00", start=date(2026, 10, 5)) + week_of("8.00", start=date(2026, 10, 12))
        m = compute_monthly_report(ojt(), rows, 2026, 10)
        self.assertEqual(m.total_billable_hours, Decimal("80.00"))
        self.assertEqual(m.total_gross_pay, Decimal("0.00"))


class OJTProgressTests(SimpleTestCase):

    def test_quarter_done(self):
        rows = [rec(MONDAY + timedelta(days=i), "5.00") for i in range(25)]  # 125h
        p = compute_ojt_progress(ojt(), rows)
        self.assertEqual(p.hours_rendered, Decimal("125.00"))
        self.assertEqual(p.remaining_hours, Decimal("375.00"))
        self.assertEqual(p.completion_percentage, Decimal("25.00"))

    def test_exactly_complete(self):
        p = compute_ojt_progress(ojt(required=8), [rec(MONDAY, "8.00")])
        self.assertEqual(p.completion_percentage, Decimal("100.00"))
        self.assertEqual(p.remaining_hours, Decimal("0.00"))

    def test_overshoot_goes_negative(self):
        p = compute_ojt_progress(ojt(required=8), [rec(MONDAY, "8.00"), rec(MONDAY + timedelta(days=1), "2.00")])
        self.assertEqual(p.remaining_hours, Decimal("-2.00"))
        self.assertEqual(p.completion_percentage, Decimal("125.00"))

    def test_percentage_rounded(self):
        """1h of 3h = 33.333…%"""
        p = compute_ojt_progress(ojt(required=3), [rec(MONDAY, "1.00")])
        self.assertEqual(p.completion_percentage, Decimal("33.33"))

    def test_no_records(self):
        p = compute_ojt_progress(ojt(), [])
        self.assertEqual(p.hours_rendered, Decimal("0.00"))
        self.assertEqual(p.completion_percentage, Decimal("0.00"))

    def test_zero_required_hours_fails(self):
        with self.assertRaises(InvalidTraineeConfig) as cm:
            compute_ojt_progress(ojt(required=0), [rec(MONDAY, "8.00")])
        self.assertEqual(cm.exception.field, "total_required_hours")

    def test_non_ojt_fails(self):
        with self.assertRaises(InvalidTraineeConfig):
            compute_ojt_progress(trainee(), [])

    def test_batch_groups_per_trainee(self):
        trainees = [
            ojt(id=1, required=100),
            ojt(id=2, required=200),
            ojt(id=3, required=100, status="completed"),
            trainee(id=4),
        ]
        rows = [
            rec(MONDAY, "8.00", trainee_id=1),
            rec(MONDAY, "4.00", trainee_id=2),
            rec(MONDAY + timedelta(days=1), "6.00", trainee_id=2),
            rec(MONDAY, "8.00", trainee_id=3),
            rec(MONDAY, "8.00", trainee_id=4),
        ]
        out = compute_ojt_progress_batch(trainees, rows)
        self.assertEqual([p.trainee_id for p in out], [1, 2])
        self.assertEqual(out[0].hours_rendered, Decimal("8.00"))
        self.assertEqual(out[1].hours_rendered, Decimal("10.00"))
        self.assertEqual(out[1].completion_percentage, Decimal("5.00"))

    def test_batch_single_trainee(self):
        out = compute_ojt_progress_batch([ojt(id=1), ojt(id=2)], [], trainee_id=2)
        self.assertEqual([p.trainee_id for p in out], [2])
