"""Django settings for the Zephyr launcher service.

Every ZEPHYR_* setting can be overridden with an environment variable of
the same name.
"""

import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured
from django.core.management.utils import get_random_secret_key

from launcher.paths import cache_dir
from launcher.paths import config_dir


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        msg = f"{name} must be an integer, got {value!r}"
        raise ImproperlyConfigured(msg) from exc


BASE_DIR = Path(__file__).resolve().parent.parent

# No sessions or signed cookies are used, so a per-process key is enough.
SECRET_KEY = os.environ.get("SECRET_KEY") or get_random_secret_key()

DEBUG = _env_bool("DEBUG", False)

# The command server only ever listens on loopback.
ALLOWED_HOSTS = ["127.0.0.1", "localhost", "[::1]"]

INSTALLED_APPS = [
    "launcher.apps.LauncherConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
]

ROOT_URLCONF = "zephyr.urls"
WSGI_APPLICATION = "zephyr.wsgi.application"

# Bangs live in JSON files, not in a database.
DATABASES: dict[str, dict[str, str]] = {}

APPEND_SLASH = False
USE_TZ = True
TIME_ZONE = "UTC"

# Launcher

ZEPHYR_BIND = os.environ.get("ZEPHYR_BIND", "127.0.0.1:7878")
ZEPHYR_CACHE_DIR = Path(os.environ.get("ZEPHYR_CACHE_DIR") or cache_dir())
ZEPHYR_CONFIG_DIR = Path(os.environ.get("ZEPHYR_CONFIG_DIR") or config_dir())
ZEPHYR_LOG_DIR = Path(os.environ.get("ZEPHYR_LOG_DIR") or ZEPHYR_CACHE_DIR / "logs")
# Switched on by the server entry point; imports and tests log to the console.
ZEPHYR_LOG_TO_FILE = _env_bool("ZEPHYR_LOG_TO_FILE", False)

ZEPHYR_FEED_URL = os.environ.get("ZEPHYR_FEED_URL", "https://duckduckgo.com/bang.js")
ZEPHYR_FEED_TIMEOUT = _env_int("ZEPHYR_FEED_TIMEOUT", 30)
ZEPHYR_USER_AGENT = "Zephyr/1.0"
ZEPHYR_STALE_AFTER_DAYS = _env_int("ZEPHYR_STALE_AFTER_DAYS", 7)
ZEPHYR_MIN_REFRESH_ENTRIES = _env_int("ZEPHYR_MIN_REFRESH_ENTRIES", 100)
ZEPHYR_DEFAULT_SEARCH_URL = os.environ.get(
    "ZEPHYR_DEFAULT_SEARCH_URL",
    "https://www.google.com/search?q={{{s}}}",
)
ZEPHYR_SUGGEST_URL = os.environ.get(
    "ZEPHYR_SUGGEST_URL",
    "https://suggestqueries.google.com/complete/search",
)
ZEPHYR_SUGGEST_TIMEOUT = 5

# Logging

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

LOG_HANDLERS: dict[str, dict[str, object]] = {
    "console": {
        "class": "logging.StreamHandler",
        "formatter": "standard",
    },
}
if ZEPHYR_LOG_TO_FILE:
    LOG_HANDLERS["file"] = {
        "class": "zephyr.log.AppLogFileHandler",
        "formatter": "standard",
        "filename": str(ZEPHYR_LOG_DIR / "zephyr.log"),
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 3,
        "encoding": "utf-8",
    }

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": LOG_HANDLERS,
    "root": {
        "handlers": list(LOG_HANDLERS),
        "level": LOG_LEVEL,
    },
    "loggers": {
        "urllib3": {"level": "WARNING"},
    },
}
