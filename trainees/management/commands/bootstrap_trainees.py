"""Bootstrap companies and trainees from YAML (idempotent)."""
# File: trainees/management/commands/bootstrap_trainees.py
# Version: 1.0.0
# Author: vas
# Modified: 2026-10-19

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path

import yaml
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from trainees.models import Company, Trainee

logger = logging.getLogger("logcha.bootstrap")

TRAINEE_FIELDS = (
    "first_name", "last_name", "email", "trainee_type",
    "hourly_rate", "max_weekly_hours", "total_required_hours",
    "start_date", "end_date", "status",
    "school_name", "course", "year_level",
)


def get_fixture_path(filename, *, sensitive=False):
    """
    Resolve fixture file location.

    - Non-sensitive: always from repo fixtures/
    - Sensitive: from mount in prod, repo in DEBUG
    """
    if sensitive and not settings.DEBUG:
        return settings.BOOTSTRAP_DATA_DIR / filename
    return Path(__file__).parent.parent.parent / "fixtures" / filename


def _coerce(field, value):
    if value is None or value == "":
        return None if field not in ("email", "school_name", "course", "year_level") else ""
    if field in ("start_date", "end_date") and not isinstance(value, date):
        return date.fromisoformat(str(value))
    if field == "hourly_rate":
        return Decimal(str(value))
    return value


class Command(BaseCommand):
    help = "Create/refresh companies and trainees from YAML (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", "-f",
            default=None,
            help="Path to YAML file (default: auto-resolved from fixtures)"
        )
        parser.add_argument("--dry-run", action="store_true")

    def handle(self, *args, **opts):
        file_path = opts["file"]
        if not file_path:
            file_path = get_fixture_path("trainees.yaml", sensitive=True)
        else:
            file_path = Path(file_path)

        dry = opts["dry_run"]

        if not file_path.exists():
            raise CommandError(f"YAML file not found: {file_path}")

        data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        companies_cfg = data.get("companies", []) or []
        if not companies_cfg:
            self.stdout.write(self.style.WARNING("No companies defined."))
            return

        created_count = updated_count = unchanged_count = 0

        for comp_def in companies_cfg:
            name = comp_def.get("name")
            if not name:
                raise CommandError(f"Missing 'name' in: {comp_def}")

            company = Company.objects.filter(name=name).first()
            if company is None:
                if dry:
                    self.stdout.write(self.style.NOTICE(f"[DRY] Create company: {name}"))
                else:
                    company = Company.objects.create(
                        name=name,
                        address=comp_def.get("address", "") or "",
                        contact_person=comp_def.get("contact_person", "") or "",
                        contact_email=comp_def.get("contact_email", "") or "",
                        contact_phone=comp_def.get("contact_phone", "") or "",
                    )
                    self.stdout.write(self.style.SUCCESS(f"Created company: {name}"))
                created_count += 1

            for t_def in comp_def.get("trainees", []) or []:
                emp_id = str(t_def.get("employee_id") or "").strip()
                if not emp_id:
                    raise CommandError(f"Missing 'employee_id' in trainee of {name}: {t_def}")
                label = f"{name} / {emp_id}"

                try:
                    values = {f: _coerce(f, t_def[f]) for f in TRAINEE_FIELDS if f in t_def}
                except ValueError as e:
                    raise CommandError(f"Error processing {label}: {e}")

                existing = None
                if company is not None and company.pk:
                    existing = Trainee.objects.filter(company=company, employee_id=emp_id).first()

                try:
                    if existing:
                        updates = {f: v for f, v in values.items() if getattr(existing, f) != v}
                        if not updates:
                            unchanged_count += 1
                            continue
                        if dry:
                            self.stdout.write(self.style.NOTICE(f"[DRY] Update: {label} ({', '.join(sorted(updates))})"))
                        else:
                            with transaction.atomic():
                                for field, value in updates.items():
                                    setattr(existing, field, value)
                                existing.full_clean()
                                existing.save()
                            self.stdout.write(self.style.SUCCESS(f"Updated: {label}"))
                        updated_count += 1
                    else:
                        if dry:
                            self.stdout.write(self.style.NOTICE(f"[DRY] Create: {label}"))
                        else:
                            with transaction.atomic():
                                trainee = Trainee(company=company, employee_id=emp_id, **values)
                                trainee.full_clean()
                                trainee.save()
                            self.stdout.write(self.style.SUCCESS(f"Created: {label}"))
                        created_count += 1
                except ValidationError as e:
                    raise CommandError(f"Error processing {label}: {e}")

        summary = []
        if created_count:
            summary.append(f"{created_count} created")
        if updated_count:
            summary.append(f"{updated_count} updated")
        if unchanged_count:
            summary.append(f"{unchanged_count} unchanged")

        logger.info(f"Trainee bootstrap from {file_path}: {', '.join(summary) or 'nothing to do'} (dry={dry})")

        if dry:
            self.stdout.write(self.style.WARNING(f"\nDry run. {', '.join(summary)}. No changes applied."))
        else:
            self.stdout.write(self.style.SUCCESS(f"\nBootstrap complete! {', '.join(summary)}."))
