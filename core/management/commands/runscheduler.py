"""Run the notification scheduler in the foreground."""

import signal
import threading

from django.core.management.base import BaseCommand, CommandError

from core.services.scheduler import NotificationScheduler


class Command(BaseCommand):
    """Start the notification scheduler and block until interrupted."""

    help = "Run the notification scheduler until interrupted"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between ticks (defaults to NOTIFICATION_TICK_INTERVAL_SECONDS)",
        )

    def handle(self, *args, **options):
        """Start the scheduler and wait for SIGINT/SIGTERM."""
        scheduler = NotificationScheduler(interval_seconds=options["interval"])
        if not scheduler.start():
            raise CommandError("Push notifications are not configured (VAPID keys)")

        stopped = threading.Event()

        def _shutdown(signum, _frame):
            self.stdout.write(f"Received signal {signum}, stopping scheduler")
            stopped.set()

        signal.signal(signal.SIGINT, _shutdown)
        signal.signal(signal.SIGTERM, _shutdown)

        self.stdout.write(
            self.style.SUCCESS(
                f"Scheduler running every {scheduler.interval_seconds}s"
            )
        )
        stopped.wait()
        scheduler.stop()
