"""Operations the desktop shell calls into."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any

import requests

from launcher.browser import UrlOpener
from launcher.browser import open_in_browser
from launcher.errors import InvalidBangError
from launcher.feed import FeedFetcher
from launcher.feed import FeedSource
from launcher.manager import BangManager
from launcher.models import BangDirectory
from launcher.models import BangEntry
from launcher.resolver import DEFAULT_SEARCH_URL
from launcher.resolver import resolve
from launcher.storage import BangStorage
from launcher.suggestions import DEFAULT_LIMIT
from launcher.suggestions import DEFAULT_SUGGEST_URL
from launcher.suggestions import bang_suggestions
from launcher.suggestions import fetch_suggestions

if TYPE_CHECKING:
    from launcher.conf import LauncherSettings

logger = logging.getLogger(__name__)

REQUIRED_BANG_FIELDS = ("id", "name", "search_url")
OPTIONAL_BANG_FIELDS = ("home_url", "category")


def bang_from_fields(fields: Mapping[str, Any]) -> BangEntry:
    """Validate user-submitted bang fields and build a user-defined entry."""
    for key in REQUIRED_BANG_FIELDS:
        value = fields.get(key)
        if not isinstance(value, str) or not value.strip():
            msg = f"Field {key!r} is required and must be a non-empty string."
            raise InvalidBangError(msg)
    for key in OPTIONAL_BANG_FIELDS:
        if not isinstance(fields.get(key, ""), str):
            msg = f"Field {key!r} must be a string."
            raise InvalidBangError(msg)

    trigger = fields["id"].strip()
    if any(ch.isspace() or ch == "!" for ch in trigger):
        msg = "Bang trigger must not contain whitespace or '!'."
        raise InvalidBangError(msg)

    return BangEntry(
        trigger=trigger,
        display_name=fields["name"].strip(),
        search_url_template=fields["search_url"].strip(),
        home_url=fields.get("home_url", "").strip(),
        category=fields.get("category", "").strip(),
        is_user_defined=True,
    )


class LauncherCommands:
    """Command surface shared by the HTTP views and any in-process shell."""

    def __init__(
        self,
        manager: BangManager,
        *,
        session: requests.Session | None = None,
        opener: UrlOpener = open_in_browser,
        default_search_url: str = DEFAULT_SEARCH_URL,
        suggest_url: str = DEFAULT_SUGGEST_URL,
        suggest_timeout: float = 5,
    ) -> None:
        self.manager = manager
        self.session = session or requests.Session()
        self.opener = opener
        self.default_search_url = default_search_url
        self.suggest_url = suggest_url
        self.suggest_timeout = suggest_timeout

    @classmethod
    def from_settings(
        cls,
        conf: "LauncherSettings",
        *,
        session: requests.Session | None = None,
        opener: UrlOpener = open_in_browser,
    ) -> "LauncherCommands":
        session = session or requests.Session()
        fetcher = FeedFetcher(
            FeedSource(
                url=conf.feed_url,
                timeout=conf.feed_timeout,
                headers={"User-Agent": conf.user_agent},
            ),
            session=session,
        )
        manager = BangManager(
            BangDirectory(),
            BangStorage(conf.cache_dir, conf.config_dir),
            fetcher,
            stale_after=conf.stale_after,
            min_refresh_entries=conf.min_refresh_entries,
        )
        return cls(
            manager,
            session=session,
            opener=opener,
            default_search_url=conf.default_search_url,
            suggest_url=conf.suggest_url,
            suggest_timeout=conf.suggest_timeout,
        )

    @property
    def directory(self) -> BangDirectory:
        return self.manager.directory

    def resolve(self, query: str) -> str:
        return resolve(self.directory, query, self.default_search_url)

    def search(self, query: str) -> str:
        url = self.resolve(query)
        self.open_url(url)
        return url

    def open_url(self, url: str) -> None:
        logger.info("Opening URL: %s", url)
        self.opener(url)

    def get_search_suggestions(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
    ) -> list[str]:
        if not query:
            return []
        if query.startswith("!"):
            return bang_suggestions(
                self.directory.snapshot().values(),
                query[1:],
                limit,
            )
        if "!" in query:
            # The user is typing a trailing bang; completions would not help.
            return []
        suggestions = fetch_suggestions(
            self.session,
            query,
            url=self.suggest_url,
            timeout=self.suggest_timeout,
        )
        return suggestions[:limit]

    def get_available_bangs(self) -> list[tuple[str, str]]:
        bangs = self.directory.snapshot()
        return sorted((trigger, bang.display_name) for trigger, bang in bangs.items())

    def refresh_bangs(self) -> int:
        return len(self.manager.refresh())

    def clear_bangs_cache(self) -> int:
        return len(self.manager.clear_cache())

    def add_custom_bang(self, fields: Mapping[str, Any]) -> BangEntry:
        return self.manager.add_custom_bang(bang_from_fields(fields))

    def delete_custom_bang(self, trigger: str) -> None:
        self.manager.delete_custom_bang(trigger)

    def start(self) -> None:
        """Kick off the startup load without blocking the caller."""
        self.manager.start_background_load()

    def shutdown(self) -> None:
        self.manager.shutdown()
