"""Start the local command server the desktop shell talks to."""

import logging
import os
from typing import Any

import django
import gunicorn.app.base
from django.conf import settings
from django.core.handlers.wsgi import WSGIHandler
from django.core.wsgi import get_wsgi_application

logger = logging.getLogger(__name__)

THREADS = 4


class GunicornApplication(gunicorn.app.base.BaseApplication):
    """Custom Gunicorn application to run Django with specific config."""

    def __init__(self, app: WSGIHandler, options: dict[str, Any]) -> None:
        """Initialize the Gunicorn application with Django WSGI app and options.

        Args:
            app: The Django WSGI application handler.
            options: Configuration options for Gunicorn.

        """
        self.options = options or {}
        self.application = app
        super().__init__()

    def load_config(self) -> None:
        """Load configuration settings from options into Gunicorn config."""
        for key, value in self.options.items():
            if key in self.cfg.settings and value is not None:
                self.cfg.set(key.lower(), value)

    def load(self) -> WSGIHandler:
        """Load and return the WSGI application."""
        return self.application


def start_bang_loading(worker: Any) -> None:  # noqa: ARG001
    """Gunicorn post_worker_init hook: load bangs inside the worker process."""
    from launcher.apps import get_commands

    get_commands().start()


def stop_bang_tasks(server: Any, worker: Any) -> None:  # noqa: ARG001
    """Gunicorn worker_exit hook: let pending cache saves finish."""
    from launcher.apps import get_commands

    get_commands().shutdown()


def server_options() -> dict[str, Any]:
    # One process only: the bang directory is process-local state.
    return {
        "bind": settings.ZEPHYR_BIND,
        "workers": 1,
        "threads": THREADS,
        "worker_class": "gthread",
        "post_worker_init": start_bang_loading,
        "worker_exit": stop_bang_tasks,
    }


def start_gunicorn() -> Any:
    """Start the Gunicorn server with Django application."""
    app = get_wsgi_application()
    options = server_options()
    logger.info("Starting Zephyr command server on %s", options["bind"])
    return GunicornApplication(app=app, options=options).run()


def main() -> None:
    """Configure Django and serve the launcher commands."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zephyr.settings")
    os.environ.setdefault("ZEPHYR_LOG_TO_FILE", "1")
    django.setup()
    start_gunicorn()


if __name__ == "__main__":
    main()
