"""WSGI config for the Zephyr launcher service."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "zephyr.settings")

application = get_wsgi_application()
