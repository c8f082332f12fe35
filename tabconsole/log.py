"""Package logger for Tab Console.

Textual owns the terminal while the console runs, so nothing is logged to
stdout/stderr.  ``configure_logging`` attaches a file handler when asked.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("tabconsole")
logger.addHandler(logging.NullHandler())

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING", path: Path | str | None = None) -> None:
    """Set the package log level and optionally log to *path*."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if not path:
        return
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
