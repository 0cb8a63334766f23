"""Run logging: console on stderr plus one dated log file per logger.

Module loggers (`logging.getLogger(__name__)`) stay unconfigured and
propagate to the `boxdstats` logger set up by the CLI.
"""

import logging
import sys
from datetime import date
from pathlib import Path

from boxdstats.settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_HTTP_LOGGERS = ("httpx", "httpcore")
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the configured logger for a name, creating it once.

    Args:
        name: Logger name (e.g., 'boxdstats').
        level: Level name or number (default: LOG_LEVEL).
        log_dir: Log file directory (default: LOG_DIR).

    Returns:
        Logger writing to stderr and, when possible, to a dated file.
    """
    cached = _LOGGERS_CACHE.get(name)
    if cached is not None:
        return cached

    level = level if level is not None else settings.logging.level
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    for handler in _build_handlers(name, log_dir):
        handler.setLevel(level)
        logger.addHandler(handler)

    silence_http_loggers()
    _LOGGERS_CACHE[name] = logger
    return logger


def silence_http_loggers(level: int = logging.WARNING) -> None:
    """Raise httpx/httpcore loggers above their per-request INFO lines."""
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(level)


def log_file_path(name: str, log_dir: Path | None = None, day: date | None = None) -> Path:
    """Build `<log_dir>/<name>_<YYYYMMDD>.log`, creating the directory.

    Args:
        name: Logger name; dots and slashes become underscores.
        log_dir: Base directory (default: LOG_DIR).
        day: Date of the file (default: today).

    Returns:
        Log file path.
    """
    directory = log_dir if log_dir is not None else settings.logging.log_path
    directory.mkdir(parents=True, exist_ok=True)

    stem = name.replace(".", "_").replace("/", "_")
    return directory / f"{stem}_{(day or date.today()):%Y%m%d}.log"


def _build_handlers(name: str, log_dir: Path | None) -> list[logging.Handler]:
    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)

    # stdout carries the JSON report
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    try:
        handlers.append(logging.FileHandler(log_file_path(name, log_dir), encoding="utf-8"))
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers
