"""Data model for the bang directory."""

import threading
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class BangEntry:
    """A bang shortcut mapping a trigger to a search URL template."""

    trigger: str
    display_name: str
    # e.g. 'https://www.youtube.com/results?search_query={{{s}}}'
    search_url_template: str
    home_url: str = ""
    category: str = ""
    is_user_defined: bool = False

    def __str__(self) -> str:
        """Return string representation of the entry."""
        return f"!{self.trigger} -> {self.search_url_template}"

    def as_user_defined(self) -> "BangEntry":
        if self.is_user_defined:
            return self
        return replace(self, is_user_defined=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.trigger,
            "name": self.display_name,
            "search_url": self.search_url_template,
            "home_url": self.home_url,
            "category": self.category,
            "is_custom": self.is_user_defined,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BangEntry":
        """Build an entry from its persisted form.

        Raises KeyError for missing fields and TypeError for fields of the
        wrong type, so callers can treat either as a corrupt record.
        """
        values = {
            "trigger": data["id"],
            "display_name": data["name"],
            "search_url_template": data["search_url"],
            "home_url": data["home_url"],
            "category": data["category"],
        }
        for key, value in values.items():
            if not isinstance(value, str):
                msg = f"field {key!r} must be a string, got {type(value).__name__}"
                raise TypeError(msg)
        is_custom = data["is_custom"]
        if not isinstance(is_custom, bool):
            msg = f"field 'is_custom' must be a boolean, got {type(is_custom).__name__}"
            raise TypeError(msg)
        return cls(is_user_defined=is_custom, **values)


@dataclass(frozen=True)
class CacheSnapshot:
    entries: dict[str, BangEntry]
    last_updated: datetime


class BangDirectory:
    """Process-wide mapping of trigger to BangEntry.

    Every method holds the lock for exactly one read or write. Callers
    must not perform I/O while holding it, so there is no public way to
    keep the lock across calls.
    """

    def __init__(self, entries: Mapping[str, BangEntry] | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, BangEntry] = dict(entries or {})

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, trigger: object) -> bool:
        with self._lock:
            return trigger in self._entries

    def get(self, trigger: str) -> BangEntry | None:
        with self._lock:
            return self._entries.get(trigger)

    def snapshot(self) -> dict[str, BangEntry]:
        with self._lock:
            return dict(self._entries)

    def replace_all(self, entries: Mapping[str, BangEntry]) -> None:
        new_entries = dict(entries)
        with self._lock:
            self._entries = new_entries

    def insert(self, entry: BangEntry) -> None:
        with self._lock:
            self._entries[entry.trigger] = entry

    def remove(self, trigger: str) -> BangEntry | None:
        with self._lock:
            return self._entries.pop(trigger, None)


def merge_entries(
    base: Mapping[str, BangEntry],
    overrides: Iterable[BangEntry],
) -> dict[str, BangEntry]:
    """Return base with overrides inserted on top, later entries winning."""
    merged = dict(base)
    for entry in overrides:
        merged[entry.trigger] = entry
    return merged
