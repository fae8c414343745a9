"""Loguru sinks for the command line and the API server."""

import sys
from pathlib import Path

from loguru import logger

_FORMAT = (
    "<dim>{time:YYYY-MM-DD HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | <level>{message}</level>"
)


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Replace the default sink with stderr plus an optional rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level=level.upper(),
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            encoding="utf-8",
            backtrace=False,
            diagnose=False,
        )
