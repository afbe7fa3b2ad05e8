"""Test cases for query resolution."""

import pytest

from launcher.models import BangDirectory
from launcher.models import BangEntry
from launcher.resolver import encode_query
from launcher.resolver import is_absolute_url
from launcher.resolver import resolve
from launcher.resolver import split_bang
from launcher.resolver import substitute

from .fakes import YT_TEMPLATE

GOOGLE = "https://www.google.com/search?q="


@pytest.fixture
def bangs(youtube: BangEntry) -> dict[str, BangEntry]:
    return {
        "yt": youtube,
        "g": BangEntry("g", "Google", "https://www.google.com/search?q={{{s}}}"),
    }


def test_resolve_bang_with_query(bangs: dict[str, BangEntry]) -> None:
    """Test bang resolution with a search query."""
    assert resolve(bangs, "cats !yt") == (
        "https://youtube.com/results?search_query=cats"
    )


def test_resolve_bare_domain() -> None:
    assert resolve({}, "example.com") == "https://example.com"


def test_resolve_plain_query_uses_default_engine() -> None:
    assert resolve({}, "hello world") == GOOGLE + "hello%20world"


def test_resolve_unknown_bang_encodes_full_query(bangs: dict[str, BangEntry]) -> None:
    """Test that an unknown bang falls back with the whole query, not just 'foo'."""
    assert resolve(bangs, "foo !unknownbang") == GOOGLE + "foo%20%21unknownbang"


def test_resolve_uses_rightmost_bang(bangs: dict[str, BangEntry]) -> None:
    url = resolve(bangs, "wow! great video !yt")
    assert url == "https://youtube.com/results?search_query=wow%21%20great%20video"


def test_resolve_bang_is_case_sensitive(bangs: dict[str, BangEntry]) -> None:
    assert resolve(bangs, "cats !YT") == GOOGLE + "cats%20%21YT"


def test_resolve_bang_with_empty_query(bangs: dict[str, BangEntry]) -> None:
    """Test that a lone bang resolves with an empty search term."""
    assert resolve(bangs, "!yt") == "https://youtube.com/results?search_query="


def test_resolve_strips_whitespace(bangs: dict[str, BangEntry]) -> None:
    url = resolve(bangs, "   test query   !yt  ")
    assert url == "https://youtube.com/results?search_query=test%20query"


def test_resolve_url_encoding(bangs: dict[str, BangEntry]) -> None:
    """Test URL encoding of special characters in query."""
    url = resolve(bangs, "spaces & symbols/?# !g")
    assert url == GOOGLE + "spaces%20%26%20symbols%2F%3F%23"


def test_resolve_absolute_url_unchanged(bangs: dict[str, BangEntry]) -> None:
    url = "https://example.com/path?q=a!yt"
    assert resolve(bangs, f"  {url} ") == url


def test_resolve_url_with_space_in_path() -> None:
    assert resolve({}, "https://example.com/my page") == "https://example.com/my page"


def test_resolve_bare_domain_with_space_in_path() -> None:
    assert resolve({}, "example.com/my page") == "https://example.com/my page"


def test_resolve_space_before_path_is_a_search() -> None:
    assert resolve({}, "go to example.com/docs") == (
        GOOGLE + "go%20to%20example.com%2Fdocs"
    )


def test_resolve_with_directory_object(youtube: BangEntry) -> None:
    directory = BangDirectory({"yt": youtube})
    assert resolve(directory, "cats !yt").endswith("search_query=cats")


def test_resolve_custom_default_engine() -> None:
    url = resolve({}, "hello world", "https://duckduckgo.com/?q={{{s}}}")
    assert url == "https://duckduckgo.com/?q=hello%20world"


def test_resolve_empty_query() -> None:
    assert resolve({}, "   ") == GOOGLE


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("https://a.example/?q={{{s}}}", "https://a.example/?q=a%20b%2Bc"),
        ("https://a.example/?q={{{qe}}}", "https://a.example/?q=a%20b%2Bc"),
        ("https://a.example/?q={{qe}}", "https://a.example/?q=a%20b%2Bc"),
        ("https://a.example/?q={{q}}", "https://a.example/?q=a b+c"),
        ("https://a.example/", "https://a.example/"),
    ],
)
def test_substitute_placeholders(template: str, expected: str) -> None:
    assert substitute(template, "a b+c") == expected


def test_substitute_checks_triple_braces_first() -> None:
    """Test that '{{{s}}}' is not mistaken for the raw '{{q}}' spelling."""
    assert substitute(YT_TEMPLATE, "x y") == (
        "https://youtube.com/results?search_query=x%20y"
    )


def test_encode_query_keeps_unreserved() -> None:
    assert encode_query("a-b_c.d~e f") == "a-b_c.d~e%20f"


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("cats !yt", ("cats", "yt")),
        ("a!b!c", ("a!b", "c")),
        ("!g", ("", "g")),
        ("cats!", ("cats", "")),
        ("no bang", ("no bang", None)),
    ],
)
def test_split_bang(query: str, expected: tuple[str, str | None]) -> None:
    assert split_bang(query) == expected


@pytest.mark.parametrize(
    "text",
    [
        "https://example.com",
        "http://localhost:8000/admin",
        "https://[::1]:8080/",
        "mailto:someone@example.com",
        "file:///tmp/report.html",
        "https://example.com/a b?q=c d#e f",
    ],
)
def test_is_absolute_url(text: str) -> None:
    assert is_absolute_url(text)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "example.com",
        "hello world",
        "https://two words.com",
        "ht tps://example.com",
        "mailto:some one@example.com",
        "https://",
        "https://example.com:notaport",
        "1cats:dogs",
        "https://exa<mple.com",
    ],
)
def test_is_not_absolute_url(text: str) -> None:
    assert not is_absolute_url(text)
