"""Notification scheduling constants and the category to event-type map."""

from core.enums import EventType, NotificationCategory

# Every category must appear here; the resolver relies on this being total
CATEGORY_EVENT_TYPES: dict[NotificationCategory, tuple[EventType, ...]] = {
    NotificationCategory.TIDES: (EventType.TIDE,),
    NotificationCategory.SPORTS: (
        EventType.MATCH_LIGA,
        EventType.UEFA,
        EventType.FIFA,
    ),
    NotificationCategory.ASTRONOMY: (EventType.ASTRONOMY, EventType.MOON),
    NotificationCategory.AGRICULTURE: (EventType.AGRICULTURE,),
    NotificationCategory.CULTURAL: (EventType.EVENT_PT, EventType.CULTURAL),
    NotificationCategory.HOLIDAYS: (EventType.HOLIDAY,),
}

# Category eligible for single-event alerts ahead of the event
IMMEDIATE_ALERT_CATEGORY = NotificationCategory.TIDES

DEFAULT_SEND_WINDOW_MINUTES = 15
DEFAULT_DIGEST_EVENT_LIMIT = 10
DEFAULT_IMMEDIATE_EVENT_LIMIT = 5
DIGEST_HORIZON_HOURS = 24
IMMEDIATE_HORIZON_HOURS = 1
DIGEST_BODY_EVENT_COUNT = 3

DEFAULT_PREFERRED_NOTIFICATION_TIME = "09:00"
DEFAULT_QUIET_HOURS_START = "22:00"
DEFAULT_QUIET_HOURS_END = "08:00"

DIGEST_TAG = "daily-digest"
TIDE_ALERT_TAG_PREFIX = "tide-"
TEST_NOTIFICATION_TAG = "test-notification"
NOTIFICATION_URL = "/dashboard"

APP_TITLE = "AlmanaqueLuso"
DIGEST_TITLE_TEMPLATE = APP_TITLE + " - {count} eventos hoje"
TIDE_ALERT_TITLE = APP_TITLE + " - Maré Próxima"
TEST_NOTIFICATION_TITLE = "Teste " + APP_TITLE
TEST_NOTIFICATION_BODY = "Esta é uma notificação de teste!"

DAILY_DIGEST_JOB_NAME = "daily_digest"
IMMEDIATE_ALERTS_JOB_NAME = "immediate_alerts"
TIDE_IMPORT_JOB_NAME = "tide-import"
