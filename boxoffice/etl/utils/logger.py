"""Loggers for the ingestion run, the metrics API and the CLI.

Each component ('etl.pipeline', 'etl.loader.movies', 'api', ...) gets
its own logger writing to stdout and to LOG_DIR/<name>_<YYYYMMDD>.log,
so a scheduled ingestion leaves one file per component and day.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from boxoffice.settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%H:%M:%S"
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the logger of one component, creating it on first use.

    Later calls with the same name return the cached logger unchanged,
    whatever level or directory they pass.

    Args:
        name: Dotted component name, also used for the log file name.
        level: Level for the logger and both handlers (LOG_LEVEL if None).
        log_dir: Log file directory (LOG_DIR if None).

    Returns:
        Logger that does not propagate to the root logger.
    """
    if name in _LOGGERS_CACHE:
        return _LOGGERS_CACHE[name]

    if level is None:
        level = logging.getLevelName(settings.logging.level)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    logger.addHandler(_console_handler(formatter, level))

    file_handler = _file_handler(name, formatter, level, log_dir)
    if file_handler:
        logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def _console_handler(formatter: logging.Formatter, level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    name: str,
    formatter: logging.Formatter,
    level: int,
    log_dir: Path | None,
) -> logging.FileHandler | None:
    """Open today's log file of a component.

    A read-only or missing log directory only costs the file output;
    the component still logs to stdout.
    """
    try:
        handler = logging.FileHandler(_log_file_path(name, log_dir), encoding="utf-8")
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _log_file_path(name: str, log_dir: Path | None) -> Path:
    directory = log_dir if log_dir is not None else Path(settings.logging.log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    stem = name.replace(".", "_").replace("/", "_")
    return directory / f"{stem}_{datetime.now():%Y%m%d}.log"
