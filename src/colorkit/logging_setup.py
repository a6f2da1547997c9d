"""
Logging configuration for applications embedding colorkit.

Attaches a colored console handler to the ``colorkit`` logger and, when a log
directory is configured, a plain-text log and a JSON-lines log. Resolver
records carry the algorithm, quality level, filter name and device as extra
fields, which the JSON-lines output keeps as separate keys.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

TEXT_LOG_NAME = "colorkit.log"
JSON_LOG_NAME = "colorkit.jsonl"

# Extra record attributes set by the resolvers and the filter engine.
CONTEXT_FIELDS = ("algorithm", "quality", "filter_name", "device")


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with ANSI color codes for log levels."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy; file handlers on the same logger get the plain level name.
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname:8s}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any extraction context attached."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update({key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)})

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _file_handler(path: Path, formatter: logging.Formatter) -> logging.FileHandler:
    handler = logging.FileHandler(path)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_dir: str | Path | None = None,
    level: int | str = logging.INFO,
    name: str = "colorkit",
    console: bool = True,
    file: bool = True,
    json_file: bool = True,
) -> logging.Logger:
    """Replace the handlers on the ``colorkit`` logger.

    Console output follows ``level``. The file handlers record everything
    from DEBUG up, so a failed extraction can be traced after the fact.

    Args:
        log_dir: Directory for ``colorkit.log`` and ``colorkit.jsonl``.
            If None, only the console handler is attached.
        level: Logging level, as a number or a name such as ``"DEBUG"``.
        name: Logger name.
        console: Enable the console handler.
        file: Enable the plain-text log.
        json_file: Enable the JSON-lines log.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredConsoleFormatter(
            fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        ))
        logger.addHandler(console_handler)

    if log_dir is None or not (file or json_file):
        return logger

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if file:
        logger.addHandler(_file_handler(log_dir / TEXT_LOG_NAME, logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )))
    if json_file:
        logger.addHandler(_file_handler(log_dir / JSON_LOG_NAME, JSONFormatter()))

    return logger
