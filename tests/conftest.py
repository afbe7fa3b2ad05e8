"""Global pytest configuration for tests."""

import os

import django
import pytest
from django.conf import settings

if not settings.configured:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zephyr.settings")
    django.setup()

from launcher.feed import FeedFetcher
from launcher.manager import BangManager
from launcher.models import BangDirectory
from launcher.models import BangEntry
from launcher.storage import BangStorage

from .fakes import YT_TEMPLATE
from .fakes import FakeSession


@pytest.fixture
def storage(tmp_path) -> BangStorage:
    """Storage rooted in a temporary cache and config directory."""
    return BangStorage(tmp_path / "cache", tmp_path / "config")


@pytest.fixture
def make_manager(storage: BangStorage):
    """Build a BangManager whose feed requests are answered by a FakeSession."""
    managers: list[BangManager] = []

    def factory(*responses, **kwargs) -> BangManager:
        session = FakeSession(*responses)
        manager = BangManager(
            BangDirectory(),
            storage,
            FeedFetcher(session=session),  # type: ignore[arg-type]
            **kwargs,
        )
        managers.append(manager)
        return manager

    yield factory
    for manager in managers:
        manager.shutdown()


@pytest.fixture
def youtube() -> BangEntry:
    return BangEntry(
        trigger="yt",
        display_name="YouTube",
        search_url_template=YT_TEMPLATE,
        home_url="https://www.youtube.com",
        category="Entertainment - Video",
    )
