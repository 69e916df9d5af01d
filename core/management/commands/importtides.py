"""Import tide events inline."""

from django.core.management.base import BaseCommand

from core.jobs.tide_jobs import import_tide_events_job


class Command(BaseCommand):
    """Run the tide import job without the RQ queue."""

    help = "Import the coming days of tide extremes as events"

    def handle(self, *args, **options):
        """Run the import and print what it did."""
        details = import_tide_events_job()
        self.stdout.write(
            self.style.SUCCESS(
                f"Imported {details['imported']} tide events "
                f"for {details['locations']} locations"
            )
        )
        for error in details.get("errors", []):
            self.stdout.write(self.style.WARNING(error))
