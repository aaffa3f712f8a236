"""
Logging configuration for fwutil.

All fwutil modules log through children of the "fwutil" logger. The CLI
attaches a stderr handler to it and, when asked, a rotating log file that
records every level with the calling location.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "fwutil"
DEFAULT_LOG_FILE = Path.home() / ".fwutil" / "logs" / "fwutil.log"

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(module)s.%(funcName)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 3


def _level(name: str | int) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str | int = "INFO",
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """
    Attach fresh handlers to the fwutil logger.

    Args:
        level: Console threshold, by name ("warning") or number
        log_file: Write a rotating debug log here; "" uses DEFAULT_LOG_FILE
        console: Log to stderr, keeping stdout for command output

    Returns:
        The configured "fwutil" logger

    Raises:
        ValueError: If level is not a logging level name
    """
    threshold = _level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    if console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(threshold)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(handler)

    if log_file is not None:
        logger.addHandler(_file_handler(Path(log_file) if log_file else DEFAULT_LOG_FILE))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(threshold)

    logger.propagate = False
    return logger


def configure_logging(
    debug: bool = False,
    log_file: str | Path | None = None,
    level: str | int = "WARNING",
) -> logging.Logger:
    """CLI entry point: --debug wins over the configured level."""
    return setup_logging(level=logging.DEBUG if debug else level, log_file=log_file)
