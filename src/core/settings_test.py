"""Test settings: in-memory SQLite so the suite runs without Postgres."""

from .settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["articles"]["level"] = "WARNING"  # noqa: F405
