"""Development server command that skips migration checks.

The calendar tables are owned by the web application's migrations, so the
service can start (in degraded mode) without a reachable database.
"""

from django.core.management.commands.runserver import Command as RunServer


class Command(RunServer):
    """Runserver variant for local development without migration checks."""

    help = "Start development server without migration checks"

    def check_migrations(self, *_args, **_kwargs):
        """Skip migration checks; the schema is managed elsewhere."""
        self.stdout.write(
            self.style.WARNING("Skipping migration checks (schema owned by web app)")
        )
