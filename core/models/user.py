"""User model."""

from typing import ClassVar

from django.db import models


class User(models.Model):
    """User account matching the web application's users table.

    This model is unmanaged as the database schema is owned by the web
    application's migrations. The calendar service only needs the identity
    and timezone of a user to own preferences and push registrations.
    """

    id = models.AutoField(primary_key=True)
    email = models.EmailField(max_length=255, unique=True)
    password_hash = models.CharField(max_length=255)
    timezone = models.CharField(max_length=64, default="Europe/Lisbon")
    role = models.CharField(max_length=20, default="USER")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of user."""
        return self.email

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(id={self.id}, email='{self.email}')>"
