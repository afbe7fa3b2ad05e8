"""Parse the DuckDuckGo bang.js feed into bang directory entries."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import TypeAdapter
from pydantic import ValidationError

from launcher.errors import EmptyFeedError
from launcher.errors import InvalidFormatError
from launcher.models import BangEntry

logger = logging.getLogger(__name__)

# c: category, d: domain, s: display name, sc: subcategory, t: trigger, u: url
REQUIRED_FIELDS = ("c", "d", "s", "sc", "t", "u")
# Per-kind cap on skip messages so a broken feed does not flood the log.
MAX_SKIP_LOGS = 5


class FeedItem(BaseModel):
    """One element of bang.js, typed field by field."""

    model_config = ConfigDict(strict=True, extra="ignore")

    category: str | None = Field(default=None, alias="c")
    domain: str | None = Field(default=None, alias="d")
    name: str | None = Field(default=None, alias="s")
    subcategory: str | None = Field(default=None, alias="sc")
    trigger: str | None = Field(default=None, alias="t")
    url: str | None = Field(default=None, alias="u")
    rank: int | None = Field(default=None, alias="r")


_FEED_ADAPTER = TypeAdapter(list[FeedItem])


@dataclass
class FeedStats:
    total: int = 0
    valid: int = 0
    duplicates: int = 0
    invalid: int = 0

    def __str__(self) -> str:
        return (
            f"{self.total} total, {self.valid} valid, "
            f"{self.duplicates} duplicates skipped, {self.invalid} invalid entries"
        )


class _DirectoryBuilder:
    """Apply the required-field and first-wins duplicate rules to feed items."""

    def __init__(self, total: int) -> None:
        self.entries: dict[str, BangEntry] = {}
        self.stats = FeedStats(total=total)

    def add(self, fields: Mapping[str, Any]) -> None:
        values = [fields.get(key) for key in REQUIRED_FIELDS]
        if not all(isinstance(value, str) for value in values):
            self.stats.invalid += 1
            if self.stats.invalid <= MAX_SKIP_LOGS:
                logger.warning("Skipping invalid bang entry: missing required fields")
            return

        category, domain, name, subcategory, trigger, url = values
        if trigger in self.entries:
            self.stats.duplicates += 1
            if self.stats.duplicates <= MAX_SKIP_LOGS:
                logger.info("Skipping duplicate trigger: %s", trigger)
            return

        self.entries[trigger] = BangEntry(
            trigger=trigger,
            display_name=name,
            search_url_template=url,
            home_url=f"https://{domain}",
            category=f"{category} - {subcategory}",
            is_user_defined=False,
        )
        self.stats.valid += 1

    def build(self) -> tuple[dict[str, BangEntry], FeedStats]:
        return self.entries, self.stats


def parse_strict(raw_feed_text: str) -> tuple[dict[str, BangEntry], FeedStats]:
    """Decode the whole feed against the typed item schema.

    Raises pydantic.ValidationError if the payload is not a JSON array or
    any element deviates from the schema.
    """
    items = _FEED_ADAPTER.validate_json(raw_feed_text)
    builder = _DirectoryBuilder(total=len(items))
    for item in items:
        builder.add(item.model_dump(by_alias=True))
    return builder.build()


def parse_lenient(raw_feed_text: str) -> tuple[dict[str, BangEntry], FeedStats]:
    """Decode each element as a plain mapping and keep whatever is usable.

    Raises InvalidFormatError if the payload is not a JSON array.
    """
    try:
        data = json.loads(raw_feed_text)
    except json.JSONDecodeError as exc:
        msg = (
            f"All parsing methods failed. JSON error: {exc}. "
            "Please check if DuckDuckGo has changed their bang.js format."
        )
        raise InvalidFormatError(msg) from exc
    if not isinstance(data, list):
        msg = "Invalid bang.js format: not a JSON array"
        raise InvalidFormatError(msg)

    builder = _DirectoryBuilder(total=len(data))
    for element in data:
        builder.add(element if isinstance(element, dict) else {})
    return builder.build()


def parse_feed(raw_feed_text: str) -> tuple[dict[str, BangEntry], FeedStats]:
    """Parse bang.js, falling back to the lenient pass if the strict one fails."""
    text = raw_feed_text.strip()
    if not (text.startswith("[") and text.endswith("]")):
        msg = "Invalid bang.js format: not a JSON array"
        raise InvalidFormatError(msg)

    try:
        entries, stats = parse_strict(text)
        logger.info("Bang parsing summary: %s", stats)
    except ValidationError as exc:
        logger.error(
            "Failed to parse bang.js with structured approach: %s",
            exc.errors(include_url=False)[:MAX_SKIP_LOGS],
        )
        logger.warning("Attempting fallback parsing with generic JSON values...")
        entries, stats = parse_lenient(text)
        logger.info("Bang fallback parsing summary: %s", stats)

    if not entries:
        msg = "No valid bangs found in the response"
        raise EmptyFeedError(msg)
    return entries, stats
