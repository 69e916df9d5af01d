"""Repositories for the core app."""

from core.repositories.digest_repository import DigestRepository
from core.repositories.event_repository import EventRepository
from core.repositories.preference_repository import PreferenceRepository
from core.repositories.subscription_repository import SubscriptionRepository

__all__ = [
    "DigestRepository",
    "EventRepository",
    "PreferenceRepository",
    "SubscriptionRepository",
]
