"""
Django settings for the pollutiondb project.

Only the ORM is used: there are no URLs, templates or middleware.
Every value can be overridden through the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "pollutiondb-insecure-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"

INSTALLED_APPS = [
    "pollution",
]

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("POLLUTIONDB_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("POLLUTIONDB_DB_NAME", str(BASE_DIR / "pollutiondb.sqlite3")),
        "USER": os.environ.get("POLLUTIONDB_DB_USER", ""),
        "PASSWORD": os.environ.get("POLLUTIONDB_DB_PASSWORD", ""),
        "HOST": os.environ.get("POLLUTIONDB_DB_HOST", ""),
        "PORT": os.environ.get("POLLUTIONDB_DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "UTC"

LOG_LEVEL = os.environ.get("POLLUTIONDB_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "pollution": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
