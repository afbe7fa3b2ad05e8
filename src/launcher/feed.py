"""HTTP access to the remote bang feed and the suggestion endpoint."""

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any

import requests

from launcher.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://duckduckgo.com/bang.js"
DEFAULT_USER_AGENT = "Zephyr/1.0"


@dataclass
class FeedSource:
    url: str = DEFAULT_FEED_URL
    timeout: float = 30
    headers: dict[str, str] = field(
        default_factory=lambda: {"User-Agent": DEFAULT_USER_AGENT},
    )


def http_get(
    session: requests.Session,
    url: str,
    *,
    timeout: float,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> requests.Response:
    """GET a URL, turning transport errors and non-2xx replies into FetchError."""
    try:
        resp = session.get(url, params=params, headers=headers or {}, timeout=timeout)
    except requests.Timeout as exc:
        msg = f"Request to {url} timed out after {timeout}s"
        raise FetchError(msg) from exc
    except requests.RequestException as exc:
        msg = f"Failed to fetch {url}: {exc}"
        raise FetchError(msg) from exc
    if not resp.ok:
        msg = f"Failed to fetch {url}: HTTP {resp.status_code}"
        raise FetchError(msg, status_code=resp.status_code)
    return resp


class FeedFetcher:
    """Download the raw bang.js payload."""

    def __init__(
        self,
        source: FeedSource | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source or FeedSource()
        self.session = session or requests.Session()

    def fetch_text(self) -> str:
        logger.info("Fetching DuckDuckGo bangs from %s", self.source.url)
        resp = http_get(
            self.session,
            self.source.url,
            timeout=self.source.timeout,
            headers=self.source.headers,
        )
        logger.info("Successfully fetched bang.js (%d bytes)", len(resp.content))
        return resp.text
