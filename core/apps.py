"""Django application configuration for core."""

from django.apps import AppConfig
from django.conf import settings

import structlog

from core.services import database_monitor, health_service

logger = structlog.get_logger(__name__)


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    default_auto_field = "django.db.models.AutoField"
    name = "core"

    def ready(self) -> None:
        """Wire services once the app registry is ready."""
        from core.services.push_notification_service import (  # noqa: PLC0415
            push_notification_service,
        )

        health_service.set_database_monitor(database_monitor)
        health_service.set_push_check(lambda: push_notification_service.enabled)

        if not push_notification_service.enabled:
            logger.error(
                "push_notifications_not_configured",
                detail="VAPID keys missing; notification delivery is disabled",
            )

        if settings.NOTIFICATION_SCHEDULER_AUTOSTART and not getattr(
            settings, "TEST_MODE", False
        ):
            from core.services.scheduler import notification_scheduler  # noqa: PLC0415

            notification_scheduler.start()
