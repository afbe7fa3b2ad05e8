from typing import cast

from django.apps import AppConfig
from django.apps import apps

from launcher.commands import LauncherCommands
from launcher.conf import LauncherSettings


class LauncherConfig(AppConfig):
    """Owns the process's bang directory through its LauncherCommands."""

    name = "launcher"
    verbose_name = "Zephyr launcher"
    commands: LauncherCommands

    def ready(self) -> None:
        # No I/O here: the startup load is started by the server once the
        # worker process exists.
        self.commands = LauncherCommands.from_settings(LauncherSettings.from_django())


def get_commands() -> LauncherCommands:
    return cast("LauncherConfig", apps.get_app_config("launcher")).commands
