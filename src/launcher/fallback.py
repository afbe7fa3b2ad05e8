"""Built-in bangs used when neither the cache nor the feed is available."""

from launcher.models import BangEntry

FALLBACK_BANGS: dict[str, BangEntry] = {
    bang.trigger: bang
    for bang in (
        BangEntry(
            trigger="g",
            display_name="Google",
            search_url_template="https://www.google.com/search?q={{{s}}}",
            home_url="https://www.google.com",
            category="Web - Search",
        ),
        BangEntry(
            trigger="w",
            display_name="Wikipedia",
            search_url_template=(
                "https://en.wikipedia.org/wiki/Special:Search?search={{{s}}}"
            ),
            home_url="https://en.wikipedia.org",
            category="Reference - Encyclopedia",
        ),
        BangEntry(
            trigger="yt",
            display_name="YouTube",
            search_url_template="https://www.youtube.com/results?search_query={{{s}}}",
            home_url="https://www.youtube.com",
            category="Entertainment - Video",
        ),
        BangEntry(
            trigger="gh",
            display_name="GitHub",
            search_url_template="https://github.com/search?q={{{s}}}",
            home_url="https://github.com",
            category="Tech - Programming",
        ),
        BangEntry(
            trigger="a",
            display_name="Amazon",
            search_url_template="https://www.amazon.com/s?k={{{s}}}",
            home_url="https://www.amazon.com",
            category="Shopping - General",
        ),
    )
}
