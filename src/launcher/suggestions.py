"""Search-as-you-type suggestions from a remote endpoint and from bangs."""

import logging
from collections.abc import Iterable

import requests

from launcher.errors import FetchError
from launcher.feed import DEFAULT_USER_AGENT
from launcher.feed import http_get
from launcher.models import BangEntry

logger = logging.getLogger(__name__)

DEFAULT_SUGGEST_URL = "https://suggestqueries.google.com/complete/search"
DEFAULT_LIMIT = 8


def fetch_suggestions(
    session: requests.Session,
    query: str,
    *,
    url: str = DEFAULT_SUGGEST_URL,
    timeout: float = 5,
) -> list[str]:
    """Ask the suggestion endpoint for completions of query.

    The endpoint answers with ["<query>", ["suggestion", ...], ...].
    """
    if not query.strip():
        return []

    logger.info("Getting suggestions: %r", query)
    resp = http_get(
        session,
        url,
        timeout=timeout,
        headers={"User-Agent": DEFAULT_USER_AGENT},
        params={"client": "firefox", "q": query},
    )
    try:
        data = resp.json()
    except ValueError as exc:
        msg = f"Failed to parse suggestion response: {exc}"
        raise FetchError(msg) from exc

    if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
        return []
    results = [s for s in data[1] if isinstance(s, str)]
    logger.info("Found %d suggestions", len(results))
    return results


def bang_suggestions(
    bangs: Iterable[BangEntry],
    prefix: str,
    limit: int = DEFAULT_LIMIT,
) -> list[str]:
    """List bangs whose trigger starts with prefix, shortest trigger first."""
    matches = sorted(
        (bang for bang in bangs if bang.trigger.startswith(prefix)),
        key=lambda bang: (len(bang.trigger), bang.trigger),
    )
    return [f"!{prefix} ({bang.display_name})" for bang in matches[:limit]]
