"""Root URL configuration for the AlmanaqueLuso calendar service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/almanaque/", include("core.urls")),
]
