"""Load, refresh and edit the live bang directory."""

import concurrent.futures
import logging
import threading
from collections.abc import Callable
from collections.abc import Mapping
from datetime import UTC
from datetime import datetime
from datetime import timedelta

from launcher.errors import BangNotFoundError
from launcher.errors import CannotDeleteBuiltinError
from launcher.errors import FetchError
from launcher.errors import ParseError
from launcher.errors import StorageError
from launcher.fallback import FALLBACK_BANGS
from launcher.feed import FeedFetcher
from launcher.feed_parser import parse_feed
from launcher.models import BangDirectory
from launcher.models import BangEntry
from launcher.models import merge_entries
from launcher.storage import BangStorage

logger = logging.getLogger(__name__)

DEFAULT_STALE_AFTER = timedelta(days=7)
DEFAULT_MIN_REFRESH_ENTRIES = 100


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class BangManager:
    """Own the live directory and every operation that writes to it.

    Network and disk work never happens while the directory lock is held;
    results are swapped in with a single write once they are ready.
    """

    def __init__(
        self,
        directory: BangDirectory,
        storage: BangStorage,
        fetcher: FeedFetcher,
        *,
        stale_after: timedelta = DEFAULT_STALE_AFTER,
        min_refresh_entries: int = DEFAULT_MIN_REFRESH_ENTRIES,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.directory = directory
        self.storage = storage
        self.fetcher = fetcher
        self.stale_after = stale_after
        self.min_refresh_entries = min_refresh_entries
        self._clock = clock
        self._executor: concurrent.futures.ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    # Background tasks

    def _submit(self, fn: Callable[[], object]) -> concurrent.futures.Future:
        # Created on first use so a forked server worker gets its own threads.
        with self._executor_lock:
            if self._executor is None:
                self._executor = concurrent.futures.ThreadPoolExecutor(
                    max_workers=2,
                    thread_name_prefix="zephyr-bangs",
                )
            return self._executor.submit(fn)

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop the background pool, waiting for pending saves by default."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def _schedule_cache_save(
        self,
        entries: Mapping[str, BangEntry],
    ) -> concurrent.futures.Future:
        snapshot = dict(entries)

        def on_done(fut: concurrent.futures.Future) -> None:
            exc = fut.exception()
            if exc is not None:
                logger.error("Failed to save bang cache: %s", exc)
            else:
                logger.info("Successfully saved %d bangs to cache", len(snapshot))

        future = self._submit(lambda: self.storage.save_cache(snapshot))
        future.add_done_callback(on_done)
        return future

    def start_background_load(self) -> concurrent.futures.Future:
        """Run load_all off the caller's thread and swap the result in."""

        def on_done(fut: concurrent.futures.Future) -> None:
            exc = fut.exception()
            if exc is not None:
                logger.error("Loading bangs failed: %s", exc)
                return
            self.directory.replace_all(fut.result())

        future = self._submit(self.load_all)
        future.add_done_callback(on_done)
        return future

    # Loading

    def fetch_feed(self) -> dict[str, BangEntry]:
        """Fetch and parse the remote feed.

        Raises FetchError or ParseError. Unparsable payloads are written
        next to the cache for inspection.
        """
        raw_feed_text = self.fetcher.fetch_text()
        try:
            entries, _ = parse_feed(raw_feed_text)
        except ParseError as exc:
            logger.error("Error parsing bangs: %s", exc)
            self.storage.save_debug_feed(raw_feed_text)
            raise
        logger.info("Successfully parsed %d bangs from DuckDuckGo", len(entries))
        return entries

    def _merge_user_overrides(
        self,
        entries: Mapping[str, BangEntry],
    ) -> dict[str, BangEntry]:
        user_bangs = self.storage.load_user_overrides()
        logger.info("Loaded %d custom user bangs", len(user_bangs))
        return merge_entries(entries, user_bangs.values())

    def load_all(self) -> dict[str, BangEntry]:
        """Build the startup directory from cache, feed, fallback and user bangs."""
        should_update = False
        cache = self.storage.load_cache()
        if cache is None:
            should_update = True
            logger.info("No bang cache found, will fetch from DuckDuckGo")
            bangs: dict[str, BangEntry] = {}
        else:
            bangs = dict(cache.entries)
            if self._clock() - cache.last_updated > self.stale_after:
                should_update = True
                logger.info(
                    "Bang cache is older than %s, will attempt to update",
                    self.stale_after,
                )
            else:
                logger.info(
                    "Using bang cache with %d entries (last updated: %s)",
                    len(bangs),
                    cache.last_updated,
                )

        if should_update:
            try:
                fetched = self.fetch_feed()
            except (FetchError, ParseError) as exc:
                logger.error("Error fetching bangs: %s", exc)
                if not bangs:
                    logger.warning(
                        "Using fallback bangs since cache is empty and fetch failed",
                    )
                    bangs = dict(FALLBACK_BANGS)
                else:
                    logger.info(
                        "Continuing to use %d bangs from cache despite fetch error",
                        len(bangs),
                    )
            else:
                # A truncated feed must not wipe out a good cache.
                if len(fetched) > self.min_refresh_entries or not bangs:
                    bangs = fetched
                    self._schedule_cache_save(bangs)
                else:
                    logger.warning(
                        "Fetched only %d bangs, which seems suspiciously low. "
                        "Keeping existing %d bangs from cache.",
                        len(fetched),
                        len(bangs),
                    )

        bangs = self._merge_user_overrides(bangs)
        logger.info("Total bangs available: %d", len(bangs))
        return bangs

    def refresh(self) -> dict[str, BangEntry]:
        """Refetch the feed unconditionally and swap it into the live directory.

        Failures propagate and leave the directory as it was.
        """
        try:
            self.storage.delete_cache()
        except OSError as exc:
            msg = f"Failed to delete bang cache: {exc}"
            raise StorageError(msg) from exc

        fetched = self.fetch_feed()
        self._schedule_cache_save(fetched)
        bangs = self._merge_user_overrides(fetched)
        self.directory.replace_all(bangs)
        logger.info("Refreshed bangs, %d available", len(bangs))
        return bangs

    def clear_cache(self) -> dict[str, BangEntry]:
        """Drop the cached feed and rebuild it from the network."""
        return self.refresh()

    # User bangs

    def add_custom_bang(self, entry: BangEntry) -> BangEntry:
        custom = entry.as_user_defined()
        user_bangs = self.storage.load_user_overrides()
        user_bangs[custom.trigger] = custom
        try:
            self.storage.save_user_overrides(user_bangs)
        except OSError as exc:
            msg = f"Failed to save custom bang {custom.trigger!r}: {exc}"
            raise StorageError(msg) from exc
        self.directory.insert(custom)
        logger.info("Saved custom bang %s", custom)
        return custom

    def delete_custom_bang(self, trigger: str) -> None:
        bang = self.directory.get(trigger)
        if bang is None:
            raise BangNotFoundError(trigger)
        if not bang.is_user_defined:
            raise CannotDeleteBuiltinError(trigger)

        user_bangs = self.storage.load_user_overrides()
        user_bangs.pop(trigger, None)
        try:
            self.storage.save_user_overrides(user_bangs)
        except OSError as exc:
            msg = f"Failed to delete custom bang {trigger!r}: {exc}"
            raise StorageError(msg) from exc
        self.directory.remove(trigger)
        logger.info("Deleted custom bang !%s", trigger)
