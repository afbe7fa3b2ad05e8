"""Test cases for the JSON command endpoints."""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import django
import requests
from django.conf import settings

if not settings.configured:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zephyr.settings")
    django.setup()

from django.test import SimpleTestCase

from launcher.commands import LauncherCommands
from launcher.feed import FeedFetcher
from launcher.manager import BangManager
from launcher.models import BangDirectory
from launcher.models import BangEntry
from launcher.storage import BangStorage

from . import constants
from .fakes import YT_TEMPLATE
from .fakes import FakeResponse
from .fakes import FakeSession
from .fakes import make_feed


class CommandViewTestCase(SimpleTestCase):
    """Route every view to a LauncherCommands backed by a temp directory."""

    feed_response: FakeResponse | Exception = FakeResponse(make_feed(3))

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        self.storage = BangStorage(root / "cache", root / "config")
        self.manager = BangManager(
            BangDirectory(
                {"yt": BangEntry("yt", "YouTube", YT_TEMPLATE)},
            ),
            self.storage,
            FeedFetcher(session=FakeSession(self.feed_response)),  # type: ignore[arg-type]
        )
        self.addCleanup(self.manager.shutdown)
        self.opened: list[str] = []
        self.commands = LauncherCommands(
            self.manager,
            session=FakeSession(  # type: ignore[arg-type]
                FakeResponse(json.dumps(["cat", ["cats", "cat facts"]])),
            ),
            opener=self.opened.append,
        )
        patcher = patch("launcher.views.get_commands", return_value=self.commands)
        patcher.start()
        self.addCleanup(patcher.stop)

    def post_json(self, path: str, data: object):
        return self.client.post(path, json.dumps(data), content_type="application/json")


class SearchViewTest(CommandViewTestCase):
    def test_resolve_returns_url_without_opening(self) -> None:
        response = self.client.get("/api/resolve", {"q": "cats !yt"})
        assert response.status_code == constants.HTTP_OK
        assert response.json() == {
            "url": "https://youtube.com/results?search_query=cats",
        }
        assert self.opened == []

    def test_search_opens_url(self) -> None:
        response = self.client.get("/api/search", {"q": "hello world"})
        assert response.status_code == constants.HTTP_OK
        assert response.json()["url"] == (
            "https://www.google.com/search?q=hello%20world"
        )
        assert self.opened == ["https://www.google.com/search?q=hello%20world"]

    def test_search_requires_query(self) -> None:
        response = self.client.get("/api/search", {"q": "  "})
        assert response.status_code == constants.HTTP_BAD_REQUEST
        assert self.opened == []

    def test_search_rejects_post(self) -> None:
        response = self.client.post("/api/search", {"q": "x"})
        assert response.status_code == constants.HTTP_METHOD_NOT_ALLOWED

    def test_suggestions(self) -> None:
        response = self.client.get("/api/suggestions", {"q": "cat"})
        assert response.json() == ["cats", "cat facts"]

    def test_bang_suggestions(self) -> None:
        response = self.client.get("/api/suggestions", {"q": "!y"})
        assert response.json() == ["!y (YouTube)"]

    def test_open_url(self) -> None:
        response = self.post_json("/api/open", {"url": "https://example.com"})
        assert response.status_code == constants.HTTP_OK
        assert self.opened == ["https://example.com"]

    def test_open_url_requires_url(self) -> None:
        response = self.post_json("/api/open", {})
        assert response.status_code == constants.HTTP_BAD_REQUEST


class BangViewTest(CommandViewTestCase):
    def test_list_bangs(self) -> None:
        response = self.client.get("/api/bangs")
        assert response.status_code == constants.HTTP_OK
        assert response.json() == [{"id": "yt", "name": "YouTube"}]

    def test_add_custom_bang(self) -> None:
        response = self.post_json(
            "/api/bangs",
            {"id": "mine", "name": "Mine", "search_url": "https://mine.example/{{{s}}}"},
        )
        assert response.status_code == constants.HTTP_CREATED
        assert response.json()["is_custom"] is True
        assert "mine" in self.storage.load_user_overrides()

    def test_add_invalid_bang(self) -> None:
        response = self.post_json("/api/bangs", {"id": "mine"})
        assert response.status_code == constants.HTTP_BAD_REQUEST
        assert "error" in response.json()

    def test_add_bang_requires_json(self) -> None:
        response = self.client.post(
            "/api/bangs",
            {"id": "mine", "name": "Mine", "search_url": "https://mine.example/"},
        )
        assert response.status_code == constants.HTTP_UNSUPPORTED_MEDIA_TYPE

    def test_add_bang_rejects_malformed_json(self) -> None:
        response = self.client.post(
            "/api/bangs",
            "{not json",
            content_type="application/json",
        )
        assert response.status_code == constants.HTTP_BAD_REQUEST

    def test_delete_custom_bang(self) -> None:
        self.commands.add_custom_bang(
            {"id": "mine", "name": "Mine", "search_url": "https://mine.example/{{{s}}}"},
        )
        response = self.client.delete("/api/bangs/mine")
        assert response.status_code == constants.HTTP_NO_CONTENT
        assert "mine" not in self.manager.directory

    def test_delete_builtin_bang(self) -> None:
        response = self.client.delete("/api/bangs/yt")
        assert response.status_code == constants.HTTP_BAD_REQUEST
        assert "built-in" in response.json()["error"]

    def test_delete_missing_bang(self) -> None:
        response = self.client.delete("/api/bangs/nope")
        assert response.status_code == constants.HTTP_NOT_FOUND

    def test_refresh_bangs(self) -> None:
        response = self.client.post("/api/refresh-bangs")
        assert response.status_code == constants.HTTP_OK
        assert response.json() == {"count": 3}

    def test_clear_cache(self) -> None:
        response = self.client.post("/api/clear-cache")
        assert response.json() == {"count": 3}


class RefreshFailureViewTest(CommandViewTestCase):
    feed_response = requests.ConnectionError("offline")

    def test_refresh_failure_is_bad_gateway(self) -> None:
        response = self.client.post("/api/refresh-bangs")
        assert response.status_code == constants.HTTP_BAD_GATEWAY
        assert "error" in response.json()
        assert "yt" in self.manager.directory
