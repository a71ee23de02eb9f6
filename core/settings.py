"""
Django settings for the transaction service.
Every deployment-specific value is read from the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-dev-key-change-me")
DEBUG = env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "drf_spectacular",
    "apps.transactions",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "core.urls"
WSGI_APPLICATION = "core.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    },
]

# Database: PostgreSQL when configured, SQLite for local development
if os.getenv("POSTGRES_DB"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("POSTGRES_DB"),
            "USER": os.getenv("POSTGRES_USER", "postgres"),
            "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
            "HOST": os.getenv("POSTGRES_HOST", "localhost"),
            "PORT": os.getenv("POSTGRES_PORT", "5432"),
            "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_TZ = True

# Cache: Redis when configured, process-local memory otherwise
EXCHANGE_RATE_CACHE = "exchange_rates"
EXCHANGE_RATE_CACHE_TIMEOUT = int(os.getenv("EXCHANGE_RATE_CACHE_TIMEOUT", str(60 * 60 * 24)))
# Lookups that found no rate are remembered for this many seconds
EXCHANGE_RATE_UNAVAILABLE_TIMEOUT = int(os.getenv("EXCHANGE_RATE_UNAVAILABLE_TIMEOUT", "60"))

REDIS_URL = os.getenv("REDIS_URL")
if REDIS_URL:
    _cache_backend = {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
else:
    _cache_backend = {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }

CACHES = {
    "default": {**_cache_backend, "KEY_PREFIX": "default"},
    EXCHANGE_RATE_CACHE: {
        **_cache_backend,
        "KEY_PREFIX": EXCHANGE_RATE_CACHE,
        "TIMEOUT": EXCHANGE_RATE_CACHE_TIMEOUT,
    },
}

# Exchange rate providers
EXCHANGE_RATE_PROVIDER = os.getenv("EXCHANGE_RATE_PROVIDER", "treasury")
EXCHANGE_RATE_LOOKBACK_MONTHS = int(os.getenv("EXCHANGE_RATE_LOOKBACK_MONTHS", "6"))
TREASURY_API_URL = os.getenv(
    "TREASURY_API_URL",
    "https://api.fiscaldata.treasury.gov/services/api/fiscal_service",
)
TREASURY_API_TIMEOUT = float(os.getenv("TREASURY_API_TIMEOUT", "5"))
HEALTH_CHECK_CURRENCY = os.getenv("HEALTH_CHECK_CURRENCY", "Euro Zone-Euro")

# Transactions older than this many days are rejected; unset means no limit
_retention_days = os.getenv("TRANSACTION_RETENTION_DAYS")
TRANSACTION_RETENTION_DAYS = int(_retention_days) if _retention_days else None

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "apps.transactions.api.v1.exception_handler.transaction_exception_handler",
    "COERCE_DECIMAL_TO_STRING": False,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Transaction Service API",
    "DESCRIPTION": "Store purchase transactions and retrieve them converted to other currencies.",
    "VERSION": "1.0.0",
}

# Celery
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL or "memory://")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND")
CELERY_TASK_ALWAYS_EAGER = env_bool("CELERY_TASK_ALWAYS_EAGER", CELERY_BROKER_URL == "memory://")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}
