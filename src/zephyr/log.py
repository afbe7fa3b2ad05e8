from logging.handlers import RotatingFileHandler
from pathlib import Path


class AppLogFileHandler(RotatingFileHandler):
    """Rotating log file whose directory is created on first use."""

    def __init__(self, filename: str, *args: object, **kwargs: object) -> None:
        Path(filename).parent.mkdir(parents=True, exist_ok=True)
        super().__init__(filename, *args, **kwargs)  # type: ignore[arg-type]
