"""Services for the core app.

Only dependency-free services are re-exported here. Import the delivery
services from their modules directly: they depend on the schemas package,
which itself imports ``core.services.time_windows``.
"""

from core.services.database_monitor import DatabaseMonitor, database_monitor
from core.services.health_service import HealthService, health_service

__all__ = [
    "DatabaseMonitor",
    "HealthService",
    "database_monitor",
    "health_service",
]
