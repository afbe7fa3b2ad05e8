"""Hand URLs to the user's browser."""

import webbrowser
from collections.abc import Callable

from launcher.errors import BrowserError

UrlOpener = Callable[[str], None]


def open_in_browser(url: str) -> None:
    """Open url in the default browser; raise BrowserError if none accepts it."""
    try:
        opened = webbrowser.open(url, new=2)
    except webbrowser.Error as exc:
        msg = f"Failed to open URL: {exc}"
        raise BrowserError(msg) from exc
    if not opened:
        msg = f"Failed to open URL: no browser accepted {url}"
        raise BrowserError(msg)
