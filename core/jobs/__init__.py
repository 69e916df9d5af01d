"""Background jobs for the core app."""
