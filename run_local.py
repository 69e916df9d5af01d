#!/usr/bin/env python
"""Run the calendar service with Django's development server."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start the development server without migration checks.

    Extra command line arguments (e.g. ``0.0.0.0:8000``) are passed on to
    the ``runlocal`` command.
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "almanaque_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
