"""Production entry point running the calendar service under Gunicorn.

The notification scheduler is not started inside web workers; run
``python manage.py runscheduler`` as a single separate process.
"""

import os
import sys

from gunicorn.app.wsgiapp import run


def build_argv() -> list[str]:
    """Return the Gunicorn command line, tunable through the environment.

    Environment variables:
        PORT: Listen port (default 8000)
        WEB_CONCURRENCY: Worker processes (default 4)
        GUNICORN_THREADS: Threads per worker (default 2)
        GUNICORN_TIMEOUT: Worker timeout in seconds (default 60)
    """
    return [
        "gunicorn",
        "almanaque_service.wsgi:application",
        "--bind",
        f"0.0.0.0:{os.getenv('PORT', '8000')}",
        "--workers",
        os.getenv("WEB_CONCURRENCY", "4"),
        "--threads",
        os.getenv("GUNICORN_THREADS", "2"),
        "--timeout",
        os.getenv("GUNICORN_TIMEOUT", "60"),
        "--access-logfile",
        "-",
        "--error-logfile",
        "-",
    ]


def main():
    """Start Gunicorn."""
    os.environ.setdefault("NOTIFICATION_SCHEDULER_AUTOSTART", "false")
    sys.argv = build_argv()
    run()


if __name__ == "__main__":
    main()
