"""Run a single notification scheduler tick."""

from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.services.clock import FixedClock, system_clock
from core.services.scheduler import NotificationScheduler


class Command(BaseCommand):
    """Run one digest pass and one immediate alert pass now."""

    help = "Run one notification scheduler tick"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--at",
            default=None,
            help="ISO datetime to run the tick as (local time if no offset)",
        )

    def handle(self, *args, **options):
        """Run the tick and print the pass counters."""
        clock = system_clock
        if options["at"]:
            try:
                instant = datetime.fromisoformat(options["at"])
            except ValueError as e:
                raise CommandError(f"Invalid --at value: {options['at']}") from e
            if timezone.is_naive(instant):
                instant = timezone.make_aware(instant)
            clock = FixedClock(instant)

        results = NotificationScheduler(clock=clock).tick()
        for job_name, summary in results.items():
            if summary is None:
                self.stdout.write(self.style.ERROR(f"{job_name}: failed"))
            else:
                self.stdout.write(f"{job_name}: {summary.as_details()}")
