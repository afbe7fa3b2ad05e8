"""Test cases for the gunicorn entry point."""

from unittest.mock import MagicMock
from unittest.mock import patch

from zephyr.server import server_options
from zephyr.server import start_bang_loading
from zephyr.server import stop_bang_tasks


def test_server_runs_a_single_worker_process() -> None:
    """Test that the process-local bang directory is never split across workers."""
    options = server_options()
    assert options["workers"] == 1
    assert options["threads"] > 1
    assert options["bind"].startswith("127.0.0.1:")


def test_worker_hooks_start_and_stop_bang_tasks() -> None:
    commands = MagicMock()
    with patch("launcher.apps.get_commands", return_value=commands):
        start_bang_loading(worker=None)
        stop_bang_tasks(server=None, worker=None)
    commands.start.assert_called_once_with()
    commands.shutdown.assert_called_once_with()
