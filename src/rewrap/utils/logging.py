"""Log file setup for the rewrap command.

Handlers are attached to the ``rewrap`` package logger rather than the root
logger, so a host application keeps control of its own logging. Records
still propagate to the root logger.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["LOG_FILE_NAME", "get_log_path", "setup_logging", "shutdown_logging"]

LOG_FILE_NAME = "rewrap.log"
_PACKAGE_LOGGER = "rewrap"
_DEFAULT_LOG_DIR = Path.home() / ".rewrap" / "logs"
_LOG_DIR_ENV = "REWRAP_LOG_DIR"
_HANDLERS: list[logging.Handler] = []
_LOG_PATH: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = False,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Attach a rotating log file (and optionally stderr) to the rewrap logger.

    Repeated calls return the configured path unless ``force`` is set, in
    which case the previous handlers are closed and replaced.
    """

    global _LOG_PATH
    if _LOG_PATH is not None and not force:
        return _LOG_PATH

    target_dir = _resolve_log_dir(log_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILE_NAME

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    _remove_handlers()
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _HANDLERS.append(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)

    _LOG_PATH = log_path
    return log_path


def get_log_path() -> Path | None:
    """Return the configured log file, or ``None`` before :func:`setup_logging`."""

    return _LOG_PATH


def shutdown_logging() -> None:
    """Detach and close the handlers added by :func:`setup_logging`."""

    global _LOG_PATH
    _remove_handlers()
    _LOG_PATH = None


def _remove_handlers() -> None:
    logger = logging.getLogger(_PACKAGE_LOGGER)
    while _HANDLERS:
        handler = _HANDLERS.pop()
        logger.removeHandler(handler)
        handler.close()


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    env_override = os.environ.get(_LOG_DIR_ENV)
    return Path(log_dir or env_override or _DEFAULT_LOG_DIR).expanduser()
