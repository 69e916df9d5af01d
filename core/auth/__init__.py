"""Authentication for the core app."""
