"""Factories for test data.

Plain functions creating model rows with Faker-generated defaults; keyword
arguments override any field.
"""

import itertools
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

import jwt
from faker import Faker

from core.enums import EventType
from core.models import Event, NotificationPreferences, PushSubscription, User

fake = Faker("pt_PT")

_endpoint_ids = itertools.count(1)


def create_user(**overrides) -> User:
    """Create a calendar user."""
    fields = {
        "email": fake.unique.email(),
        "password_hash": fake.sha256(),
    }
    fields.update(overrides)
    return User.objects.create(**fields)


def create_preferences(user: User, **overrides) -> NotificationPreferences:
    """Create notification preferences with the column defaults."""
    return NotificationPreferences.objects.create(user=user, **overrides)


def create_subscription(user: User, **overrides) -> PushSubscription:
    """Register a push device for a user."""
    fields = {
        "endpoint": f"https://fcm.googleapis.com/fcm/send/device-{next(_endpoint_ids)}",
        "keys": {"p256dh": fake.sha256(), "auth": fake.md5()},
        "user_agent": fake.user_agent(),
    }
    fields.update(overrides)
    return PushSubscription.objects.create(user=user, **fields)


def create_event(**overrides) -> Event:
    """Create an event starting in three hours."""
    fields = {
        "type": EventType.MATCH_LIGA.value,
        "title": f"{fake.city()} vs {fake.city()}",
        "start_at": timezone.now() + timedelta(hours=3),
        "location": fake.city(),
    }
    fields.update(overrides)
    return Event.objects.create(**fields)


def make_token(user_id: int, **claims) -> str:
    """Sign an access token the way the web application does."""
    payload = {"userId": user_id, "exp": timezone.now() + timedelta(hours=1)}
    payload.update(claims)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")
