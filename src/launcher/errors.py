"""Exceptions raised by the bang subsystem and the command surface."""


class ZephyrError(Exception):
    """Base class for all launcher errors surfaced to the shell."""


class ParseError(ZephyrError):
    """The bang feed could not be turned into a directory."""


class InvalidFormatError(ParseError):
    """The feed payload is not a JSON array."""


class EmptyFeedError(ParseError):
    """The feed parsed but contained no valid entries."""


class FetchError(ZephyrError):
    """A network request failed, timed out or returned a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BangNotFoundError(ZephyrError):
    def __init__(self, trigger: str) -> None:
        super().__init__(f"Bang not found: {trigger}")
        self.trigger = trigger


class CannotDeleteBuiltinError(ZephyrError):
    def __init__(self, trigger: str) -> None:
        super().__init__(f"Cannot delete built-in bang: {trigger}")
        self.trigger = trigger


class InvalidBangError(ZephyrError):
    """User-supplied bang fields are incomplete or malformed."""


class BrowserError(ZephyrError):
    """The browser collaborator refused to open a URL."""


class StorageError(ZephyrError):
    """A user change could not be written to disk."""
