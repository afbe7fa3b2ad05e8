"""Typed view of the ZEPHYR_* Django settings."""

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from django.conf import settings

from launcher.feed import DEFAULT_FEED_URL
from launcher.feed import DEFAULT_USER_AGENT
from launcher.manager import DEFAULT_MIN_REFRESH_ENTRIES
from launcher.manager import DEFAULT_STALE_AFTER
from launcher.paths import cache_dir
from launcher.paths import config_dir
from launcher.resolver import DEFAULT_SEARCH_URL
from launcher.suggestions import DEFAULT_SUGGEST_URL


@dataclass(frozen=True)
class LauncherSettings:
    cache_dir: Path
    config_dir: Path
    feed_url: str = DEFAULT_FEED_URL
    feed_timeout: float = 30
    user_agent: str = DEFAULT_USER_AGENT
    stale_after: timedelta = DEFAULT_STALE_AFTER
    min_refresh_entries: int = DEFAULT_MIN_REFRESH_ENTRIES
    default_search_url: str = DEFAULT_SEARCH_URL
    suggest_url: str = DEFAULT_SUGGEST_URL
    suggest_timeout: float = 5

    @classmethod
    def from_django(cls) -> "LauncherSettings":
        """Read the launcher configuration from django.conf.settings."""
        return cls(
            cache_dir=Path(getattr(settings, "ZEPHYR_CACHE_DIR", None) or cache_dir()),
            config_dir=Path(
                getattr(settings, "ZEPHYR_CONFIG_DIR", None) or config_dir(),
            ),
            feed_url=getattr(settings, "ZEPHYR_FEED_URL", DEFAULT_FEED_URL),
            feed_timeout=getattr(settings, "ZEPHYR_FEED_TIMEOUT", 30),
            user_agent=getattr(settings, "ZEPHYR_USER_AGENT", DEFAULT_USER_AGENT),
            stale_after=timedelta(
                days=getattr(
                    settings,
                    "ZEPHYR_STALE_AFTER_DAYS",
                    DEFAULT_STALE_AFTER.days,
                ),
            ),
            min_refresh_entries=getattr(
                settings,
                "ZEPHYR_MIN_REFRESH_ENTRIES",
                DEFAULT_MIN_REFRESH_ENTRIES,
            ),
            default_search_url=getattr(
                settings,
                "ZEPHYR_DEFAULT_SEARCH_URL",
                DEFAULT_SEARCH_URL,
            ),
            suggest_url=getattr(settings, "ZEPHYR_SUGGEST_URL", DEFAULT_SUGGEST_URL),
            suggest_timeout=getattr(settings, "ZEPHYR_SUGGEST_TIMEOUT", 5),
        )
