# File: trainees/management/commands/ojt_progress.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

from django.core.management.base import BaseCommand, CommandError

from trainees.models import Company
from trainees.services import ojt_progress


class Command(BaseCommand):
    help = 'Print rendered/remaining hours of active OJT trainees'

    def add_arguments(self, parser):
        parser.add_argument('--trainee', type=int, help='Only this trainee (id)')
        parser.add_argument('--company', type=int, help='Only trainees of this company (id)')

    def handle(self, *args, **options):
        company = None
        if options['company'] is not None:
            company = Company.objects.filter(pk=options['company']).first()
            if company is None:
                raise CommandError(f"Company #{options['company']} not found")

        rows = ojt_progress(options['trainee'], company=company)
        if not rows:
            self.stdout.write(self.style.WARNING("No active OJT trainees found."))
            return

        for p in rows:
            self.stdout.write(
                f"#{p.trainee_id} {p.last_name}, {p.first_name}: "
                f"{p.hours_rendered}/{p.total_required_hours}h "
                f"({p.completion_percentage}%), remaining {p.remaining_hours}h"
            )
