"""Django project package for the AlmanaqueLuso calendar service."""
