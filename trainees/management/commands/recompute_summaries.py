# File: trainees/management/commands/recompute_summaries.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from trainees.aggregates import week_start_for
from trainees.exceptions import TimeComputationError
from trainees.models import Trainee
from trainees.services import generate_monthly_report, recompute_weekly_summary


def _parse_day(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise CommandError(f"Invalid date '{raw}', expected YYYY-MM-DD")


def _parse_month(raw: str) -> tuple[int, int]:
    try:
        year, month = (int(p) for p in raw.split("-"))
    except ValueError:
        raise CommandError(f"Invalid month '{raw}', expected YYYY-MM")
    if not 1 <= month <= 12:
        raise CommandError(f"Invalid month '{raw}', expected YYYY-MM")
    return year, month


class Command(BaseCommand):
    help = 'Recompute cached weekly summaries and/or monthly reports from time records'

    def add_arguments(self, parser):
        parser.add_argument(
            '--trainee',
            type=int,
            help='Only this trainee (id). Default: all active trainees',
        )
        parser.add_argument(
            '--week',
            help='Any date inside the week to recompute (YYYY-MM-DD). Default: current week',
        )
        parser.add_argument(
            '--month',
            help='Generate the monthly report for YYYY-MM instead of a weekly summary',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show computed figures without saving',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        trainees = Trainee.objects.filter(status=Trainee.Status.ACTIVE)
        if options['trainee'] is not None:
            trainees = Trainee.objects.filter(pk=options['trainee'])
            if not trainees.exists():
                raise CommandError(f"Trainee #{options['trainee']} not found")

        month = _parse_month(options['month']) if options['month'] else None
        week_start = week_start_for(_parse_day(options['week']) if options['week'] else timezone.localdate())

        count = 0
        failed = 0

        for t in trainees:
            try:
                if month:
                    result = generate_monthly_report(t, *month, commit=not dry_run)
                    line = (
                        f"{t}: {month[0]}-{month[1]:02d} worked={result.total_hours_worked} "
                        f"billable={result.total_billable_hours} pay={result.total_gross_pay} "
                        f"present={result.days_present} absent={result.days_absent}"
                    )
                else:
                    result = recompute_weekly_summary(t, week_start, commit=not dry_run)
                    line = (
                        f"{t}: week {week_start.isoformat()} worked={result.total_hours_worked} "
                        f"billable={result.billable_hours} pay={result.gross_pay} "
                        f"present={result.days_present}"
                    )
            except TimeComputationError as e:
                failed += 1
                self.stderr.write(self.style.ERROR(f"{t}: {e}"))
                continue

            if dry_run:
                self.stdout.write(self.style.WARNING(f"[DRY RUN] {line}"))
            else:
                self.stdout.write(f"Updated {line}")
            count += 1

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f'\n[DRY RUN] Would update {count} records, {failed} failed')
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(f'\nSuccessfully updated {count} records, {failed} failed')
            )

        if failed:
            raise CommandError(f"{failed} trainee(s) have an invalid configuration")
