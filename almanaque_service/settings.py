"""Django settings for the AlmanaqueLuso calendar service.

All deployment-specific values are read from environment variables so the
same settings module is used locally, in containers and in production.
"""

import os
from pathlib import Path

from core.logging import setup_logging

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_alias(*names: str, default: str = "") -> str:
    """Return the first non-empty environment variable among aliases.

    Some hosting providers mangle underscores in secret names, so secrets
    are looked up under both spellings (e.g. VAPIDPUBLICKEY, VAPID_PUBLIC_KEY).
    """
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-almanaque-dev-key")

DEBUG = _env_bool("DEBUG", False)

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "django_rq",
    "core",
]

MIDDLEWARE = [
    "core.middleware.RequestIDMiddleware",
    "core.middleware.ProcessTimeMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "core.middleware.SecurityHeadersMiddleware",
    "core.middleware.RateLimitMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "almanaque_service.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "almanaque_service.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "almanaque"),
        "USER": os.getenv("DB_USER", "almanaque"),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", "localhost"),
        "PORT": os.getenv("DB_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
        "OPTIONS": {"connect_timeout": 10},
    }
}

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

RQ_QUEUES = {
    "default": {
        "URL": REDIS_URL,
        "DEFAULT_TIMEOUT": 600,
    }
}

LANGUAGE_CODE = "pt-pt"

# Preferred notification times and quiet hours are local wall-clock times
TIME_ZONE = os.getenv("TIME_ZONE", "Europe/Lisbon")

USE_I18N = True

USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.auth.jwt_auth.JWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# Authentication
JWT_SECRET = _env_alias("JWTSECRET", "JWT_SECRET")

# Web push (VAPID)
VAPID_PUBLIC_KEY = _env_alias("VAPIDPUBLICKEY", "VAPID_PUBLIC_KEY")
VAPID_PRIVATE_KEY = _env_alias("VAPIDPRIVATEKEY", "VAPID_PRIVATE_KEY")
VAPID_SUBJECT = os.getenv("VAPID_SUBJECT", "mailto:notifications@almanaqueluso.pt")

# Third-party data providers
WORLDTIDES_API_KEY = _env_alias("WORLDTIDESAPIKEY", "WORLDTIDES_API_KEY")
WORLDTIDES_API_BASE_URL = os.getenv(
    "WORLDTIDES_API_BASE_URL", "https://www.worldtides.info/api/v3"
)
TIDE_CACHE_TTL_SECONDS = int(os.getenv("TIDE_CACHE_TTL_SECONDS", str(6 * 60 * 60)))
TIDE_IMPORT_HOUR_UTC = int(os.getenv("TIDE_IMPORT_HOUR_UTC", "2"))
TIDE_IMPORT_DAYS = int(os.getenv("TIDE_IMPORT_DAYS", "7"))

# Notification scheduling
NOTIFICATION_TICK_INTERVAL_SECONDS = int(
    os.getenv("NOTIFICATION_TICK_INTERVAL_SECONDS", "900")
)
NOTIFICATION_SEND_WINDOW_MINUTES = int(
    os.getenv("NOTIFICATION_SEND_WINDOW_MINUTES", "15")
)
NOTIFICATION_DIGEST_EVENT_LIMIT = int(
    os.getenv("NOTIFICATION_DIGEST_EVENT_LIMIT", "10")
)
NOTIFICATION_IMMEDIATE_EVENT_LIMIT = int(
    os.getenv("NOTIFICATION_IMMEDIATE_EVENT_LIMIT", "5")
)
NOTIFICATION_EXTERNAL_CALL_TIMEOUT_SECONDS = int(
    os.getenv("NOTIFICATION_EXTERNAL_CALL_TIMEOUT_SECONDS", "10")
)
NOTIFICATION_TICK_TIMEOUT_SECONDS = int(
    os.getenv("NOTIFICATION_TICK_TIMEOUT_SECONDS", "600")
)
NOTIFICATION_DIGEST_SENT_MARKER_ENABLED = _env_bool(
    "NOTIFICATION_DIGEST_SENT_MARKER_ENABLED", True
)
NOTIFICATION_SCHEDULER_AUTOSTART = _env_bool("NOTIFICATION_SCHEDULER_AUTOSTART", False)

# Rate limiting
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", "60"))
RATE_LIMIT_STRICT_REQUESTS = int(os.getenv("RATE_LIMIT_STRICT_REQUESTS", "5"))

# Logging is configured by structlog; Django's own dictConfig is disabled
LOGGING_CONFIG = None

if not os.getenv("DISABLE_STRUCTLOG_SETUP"):
    setup_logging()
