from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from core.models import NumberSeries, RecordStatus

RECORD_STATUSES = [
    (RecordStatus.ACTIVE, "Active"),
    (RecordStatus.VOIDED, "Voided"),
]


class Command(BaseCommand):
    help = "Seed record statuses and number series required by the sales/purchase engines"

    @transaction.atomic
    def handle(self, *args, **opts):
        created_statuses = 0
        for code, name in RECORD_STATUSES:
            _, created = RecordStatus.objects.update_or_create(code=code, defaults={"name": name})
            created_statuses += int(created)

        created_series = 0
        for code, definition in getattr(settings, "BACKOFFICE_NUMBER_SERIES", {}).items():
            # Existing series keep their next_number; only prefix/width follow settings.
            _, created = NumberSeries.objects.update_or_create(
                code=code,
                defaults={
                    "prefix": definition.get("prefix", ""),
                    "min_width": definition.get("min_width", 1),
                },
            )
            created_series += int(created)

        self.stdout.write(self.style.SUCCESS(
            f"Record statuses: {created_statuses} created. Number series: {created_series} created."
        ))
