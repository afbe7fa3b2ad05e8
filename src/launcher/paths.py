"""Platform locations for the bang cache and user configuration."""

import os
import platform
from pathlib import Path

APP_DIR_NAME = "zephyr"
CACHE_FILE_NAME = "bangs_cache.json"
USER_BANGS_FILE_NAME = "user_bangs.json"
DEBUG_FEED_FILE_NAME = "debug_bang.js"


def _home() -> Path:
    return Path(os.path.expanduser("~"))


def cache_dir() -> Path:
    """Platform-appropriate cache directory for the application."""
    system = platform.system()
    if system == "Darwin":
        base = _home() / "Library" / "Caches"
    elif system == "Windows":
        base = Path(os.environ.get("LOCALAPPDATA", _home()))
    else:  # Linux / other
        base = Path(os.environ.get("XDG_CACHE_HOME", _home() / ".cache"))
    return base / APP_DIR_NAME


def config_dir() -> Path:
    """Platform-appropriate config directory for the application."""
    system = platform.system()
    if system == "Darwin":
        base = _home() / "Library" / "Application Support"
    elif system == "Windows":
        base = Path(os.environ.get("APPDATA", _home()))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", _home() / ".config"))
    return base / APP_DIR_NAME
