"""Health checks for the database, Redis and the push channel."""

import logging
import time
from collections.abc import Callable

from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError

from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.services.database_monitor import DatabaseMonitor

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing dependency health checks with short-lived caching."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cached: dict[str, tuple[DependencyHealth, float]] = {}
        self._database_monitor: DatabaseMonitor | None = None
        self._push_enabled: Callable[[], bool] | None = None

    def set_database_monitor(self, monitor: DatabaseMonitor) -> None:
        """Set the database monitor started while the database is down."""
        self._database_monitor = monitor

    def set_push_check(self, is_enabled: Callable[[], bool]) -> None:
        """Set the callable reporting whether the push channel is configured."""
        self._push_enabled = is_enabled

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always alive)."""
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with dependency health checks.

        The service stays ready when a dependency is down and reports
        itself degraded instead, so the rest of the API keeps serving.
        A missing push configuration only disables notifications.

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        dependencies = {
            "database": self.check_database_health(),
            "redis": self.check_redis_health(),
            "push": self.check_push_health(),
        }
        degraded = not all(health.healthy for health in dependencies.values())

        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def _from_cache(self, name: str) -> DependencyHealth | None:
        entry = self._cached.get(name)
        if entry is not None and (time.time() - entry[1]) < self.cache_ttl_seconds:
            return entry[0]
        return None

    def _store(self, name: str, health: DependencyHealth) -> DependencyHealth:
        self._cached[name] = (health, time.time())
        return health

    def check_database_health(self) -> DependencyHealth:
        """Check database connectivity with caching.

        Uses ``ensure_connection()`` so no query is executed. Starts the
        database monitor when the database goes down and stops it once it
        comes back.

        Returns:
            DependencyHealth with database status
        """
        cached = self._from_cache("database")
        if cached is not None:
            return cached

        previous = self._cached.get("database")
        was_healthy = previous is None or previous[0].healthy

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except OperationalError as e:
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except Exception as e:
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Unexpected error checking database: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        if self._database_monitor is not None:
            if health.healthy and not was_healthy:
                logger.info("Database connection recovered")
                self._database_monitor.stop_monitoring()
            elif not health.healthy and was_healthy:
                logger.warning("Database connection lost, starting background monitor")
                self._database_monitor.start_monitoring()

        return self._store("database", health)

    def check_redis_health(self) -> DependencyHealth:
        """Check Redis connectivity with a set/get round trip.

        Returns:
            DependencyHealth with Redis status
        """
        cached = self._from_cache("redis")
        if cached is not None:
            return cached

        start_time = time.perf_counter()
        try:
            cache.set("__health_check__", "ok", timeout=1)
            ok = cache.get("__health_check__") == "ok"
            health = DependencyHealth(
                healthy=ok,
                status=HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY,
                message=(
                    "Redis connection successful"
                    if ok
                    else "Redis health check failed: unexpected result"
                ),
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Redis connection failed: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        return self._store("redis", health)

    def check_push_health(self) -> DependencyHealth:
        """Report whether the push channel has its VAPID keys."""
        if self._push_enabled is not None and self._push_enabled():
            return DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Push notifications configured",
            )
        return DependencyHealth(
            healthy=False,
            status=HealthStatus.DEGRADED,
            message="Push notifications not configured (missing VAPID keys)",
        )


# Global health service instance
health_service = HealthService()
