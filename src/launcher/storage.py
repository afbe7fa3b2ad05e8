"""Disk persistence for the bang cache and the user's custom bangs."""

import json
import logging
import tempfile
from collections.abc import Mapping
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import Any

from launcher.models import BangEntry
from launcher.models import CacheSnapshot
from launcher.paths import CACHE_FILE_NAME
from launcher.paths import DEBUG_FEED_FILE_NAME
from launcher.paths import USER_BANGS_FILE_NAME

logger = logging.getLogger(__name__)


def _entries_from_json(data: Any) -> dict[str, BangEntry]:
    if not isinstance(data, dict):
        msg = f"expected a JSON object of bangs, got {type(data).__name__}"
        raise TypeError(msg)
    entries = (BangEntry.from_dict(value) for value in data.values())
    return {entry.trigger: entry for entry in entries}


def _entries_to_json(entries: Mapping[str, BangEntry]) -> dict[str, Any]:
    return {key: entry.to_dict() for key, entry in entries.items()}


def _write_json(path: Path, payload: Any) -> None:
    """Write JSON to a unique sibling temp file and rename it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            json.dump(payload, tmp, indent=2, ensure_ascii=False)
        except Exception:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def _read_json(path: Path, what: str) -> Any | None:
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        logger.error("Failed to read %s: %s", what, exc)
    except ValueError as exc:
        logger.error("Failed to parse %s: %s", what, exc)
    return None


class BangStorage:
    """Cache file for the fetched directory plus the user override file."""

    def __init__(self, cache_dir: Path, config_dir: Path) -> None:
        self.cache_path = Path(cache_dir) / CACHE_FILE_NAME
        self.user_bangs_path = Path(config_dir) / USER_BANGS_FILE_NAME
        self.debug_feed_path = Path(cache_dir) / DEBUG_FEED_FILE_NAME

    def load_cache(self) -> CacheSnapshot | None:
        data = _read_json(self.cache_path, "bang cache")
        if data is None:
            return None
        try:
            entries = _entries_from_json(data["bangs"])
            timestamp = data["last_updated"]
            if not isinstance(timestamp, int) or isinstance(timestamp, bool):
                msg = "last_updated must be an integer timestamp"
                raise TypeError(msg)
            last_updated = datetime.fromtimestamp(timestamp, tz=UTC)
        except (KeyError, TypeError, ValueError, OverflowError, OSError) as exc:
            logger.error("Failed to parse bang cache: %s", exc)
            return None
        return CacheSnapshot(entries=entries, last_updated=last_updated)

    def save_cache(self, entries: Mapping[str, BangEntry]) -> None:
        payload = {
            "bangs": _entries_to_json(entries),
            "last_updated": int(datetime.now(tz=UTC).timestamp()),
        }
        _write_json(self.cache_path, payload)

    def delete_cache(self) -> None:
        self.cache_path.unlink(missing_ok=True)

    def load_user_overrides(self) -> dict[str, BangEntry]:
        data = _read_json(self.user_bangs_path, "user bangs")
        if data is None:
            return {}
        try:
            entries = _entries_from_json(data)
        except (KeyError, TypeError) as exc:
            logger.error("Failed to parse user bangs: %s", exc)
            return {}
        return {key: entry.as_user_defined() for key, entry in entries.items()}

    def save_user_overrides(self, entries: Mapping[str, BangEntry]) -> None:
        _write_json(self.user_bangs_path, _entries_to_json(entries))

    def save_debug_feed(self, raw_feed_text: str) -> None:
        """Keep an unparsable feed payload around for troubleshooting."""
        if not raw_feed_text:
            return
        try:
            self.debug_feed_path.parent.mkdir(parents=True, exist_ok=True)
            self.debug_feed_path.write_text(raw_feed_text, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to save debug bang.js: %s", exc)
            return
        logger.info("Saved debug bang.js to %s for troubleshooting", self.debug_feed_path)
