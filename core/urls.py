"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    LivenessCheckView,
    NextTidesView,
    NotificationPreferencesView,
    PushSubscribeView,
    PushSubscriptionStatusView,
    PushTestView,
    PushUnsubscribeView,
    ReadinessCheckView,
    TideLocationsView,
    TidePredictionsView,
    VapidPublicKeyView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Push subscription endpoints
    path(
        "push/vapid-public-key",
        VapidPublicKeyView.as_view(),
        name="push-vapid-public-key",
    ),
    path("push/subscribe", PushSubscribeView.as_view(), name="push-subscribe"),
    path(
        "push/subscription-status",
        PushSubscriptionStatusView.as_view(),
        name="push-subscription-status",
    ),
    path("push/unsubscribe", PushUnsubscribeView.as_view(), name="push-unsubscribe"),
    path("push/test", PushTestView.as_view(), name="push-test"),
    # Preference endpoints
    path(
        "notifications/preferences",
        NotificationPreferencesView.as_view(),
        name="notification-preferences",
    ),
    # Tide endpoints
    path("tides/locations", TideLocationsView.as_view(), name="tide-locations"),
    path(
        "tides/predictions", TidePredictionsView.as_view(), name="tide-predictions"
    ),
    path("tides/next", NextTidesView.as_view(), name="tide-next"),
]
