"""Turn a raw launcher query into the URL to open."""

import re
import urllib.parse
from collections.abc import Mapping
from typing import Protocol

from launcher.models import BangEntry

DEFAULT_SEARCH_URL = "https://www.google.com/search?q={{{s}}}"

# Checked in order; the first spelling found in a template is substituted.
ENCODED_PLACEHOLDERS = ("{{{s}}}", "{{{qe}}}", "{{qe}}")
RAW_PLACEHOLDER = "{{q}}"

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})
_FORBIDDEN_HOST_CHARS = frozenset("#%/:<>?@[\\]^|\"'`{}")
_AUTHORITY_END_RE = re.compile(r"[/?#]")


class BangLookup(Protocol):
    def get(self, trigger: str) -> BangEntry | None: ...


def encode_query(text: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return urllib.parse.quote(text, safe="")


def _has_space(text: str) -> bool:
    return any(ch.isspace() for ch in text)


def _authority(text: str) -> str | None:
    """Return the part between "scheme://" and the first "/", "?" or "#"."""
    _, sep, rest = text.partition("://")
    if not sep:
        return None
    return _AUTHORITY_END_RE.split(rest, maxsplit=1)[0]


def is_absolute_url(text: str) -> bool:
    """Return True if text is an absolute URL that can be opened as-is.

    Whitespace is allowed in the path, query and fragment of a
    "scheme://host" URL, never in its scheme or authority. URLs without
    an authority ("mailto:...") must not contain whitespace at all.
    """
    if not text:
        return False
    authority = _authority(text)
    if authority is None:
        if _has_space(text):
            return False
    elif _has_space(text.partition("://")[0]) or _has_space(authority):
        return False
    try:
        parts = urllib.parse.urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    if parts.scheme.lower() not in _HOST_SCHEMES:
        return True
    try:
        host = parts.hostname
        _ = parts.port
    except ValueError:
        return False
    if not host:
        return False
    if host.startswith("[") or ":" in host:
        # IPv6 literal; urlsplit has already validated the brackets.
        return True
    return not any(ch in _FORBIDDEN_HOST_CHARS for ch in host)


def substitute(template: str, term: str) -> str:
    """Fill the template's placeholder with the search term."""
    for placeholder in ENCODED_PLACEHOLDERS:
        if placeholder in template:
            return template.replace(placeholder, encode_query(term))
    if RAW_PLACEHOLDER in template:
        return template.replace(RAW_PLACEHOLDER, term)
    return template


def split_bang(query: str) -> tuple[str, str | None]:
    """Split "cats !yt" into ("cats", "yt").

    The rightmost "!" is used so free text may contain earlier ones.
    Returns (query, None) when there is no "!" at all.
    """
    search_term, sep, trigger = query.rpartition("!")
    if not sep:
        return query, None
    return search_term.strip(), trigger


def resolve(
    directory: Mapping[str, BangEntry] | BangLookup,
    raw_query: str,
    default_search_url: str = DEFAULT_SEARCH_URL,
) -> str:
    """Resolve a query to a URL; every input produces one."""
    query = raw_query.strip()
    if is_absolute_url(query):
        return query

    with_scheme = f"https://{query}"
    if "." in query and is_absolute_url(with_scheme):
        return with_scheme

    search_term, trigger = split_bang(query)
    if trigger is not None:
        bang = directory.get(trigger)
        if bang is not None:
            return substitute(bang.search_url_template, search_term)

    return substitute(default_search_url, query)
