"""
Logging configuration for applications embedding the FII store.

The store modules only call ``logging.getLogger(__name__)`` and attach the
fund identity (``cnpj`` or ``code``) as ``extra`` fields.  Handlers are the
embedding application's business: it calls ``setup_logging()`` once at
startup, next to building the engine in ``fii_details.db.session``.

Installed handlers:

- console, coloured, with the fund identity appended to the logger name
- ``fii-details.log``, rotating, one JSON object per line
- ``fii-details-error.log``, rotating, ERROR and above only

``DEBUG=true`` lowers every handler to DEBUG and lets ``sqlalchemy.engine``
statements through.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from fii_details.core.config import Settings, settings

LOG_FILE_NAME = "fii-details.log"
ERROR_LOG_FILE_NAME = "fii-details-error.log"

# ``extra`` keys set by the store.
CONTEXT_FIELDS = ("cnpj", "code")


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Output example::

        {"timestamp": "2025-02-17T10:30:00.123000+00:00", "level": "INFO",
         "logger": "fii_details.services.fund_detail_store",
         "message": "Stored FII details for CNPJ ...", "module": "fund_detail_store",
         "function": "store_fund_details", "line": 42,
         "cnpj": "12.345.678/0001-90"}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(_context(record))
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured single-line output for terminals."""

    COLOURS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.COLOURS.get(record.levelname, self.RESET)
        when = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S"
        )
        context = " ".join(f"{key}={value}" for key, value in _context(record).items())
        source = f"{record.name} [{context}]" if context else record.name
        line = (
            f"{when} | {colour}{record.levelname:<8}{self.RESET} | "
            f"{source} | {record.getMessage()}"
        )
        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _rotating_handler(
    path: str, level: int, config: Settings
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=config.LOG_FILE_MAX_BYTES,
        backupCount=config.LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(log_dir: str = "", config: Optional[Settings] = None) -> None:
    """
    Install the console and rotating file handlers on the root logger.

    Does nothing if the root logger already has handlers, so an application
    that configures logging itself keeps its own setup.  ``log_dir`` overrides
    ``LOG_DIR``; ``config`` defaults to the module-level ``settings``.
    """
    config = config or settings
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level = (
        logging.DEBUG
        if config.DEBUG
        else getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    )
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    directory = log_dir or config.LOG_DIR
    os.makedirs(directory, exist_ok=True)
    log_path = os.path.join(directory, LOG_FILE_NAME)
    root_logger.addHandler(_rotating_handler(log_path, level, config))
    root_logger.addHandler(
        _rotating_handler(os.path.join(directory, ERROR_LOG_FILE_NAME), logging.ERROR, config)
    )

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if config.DEBUG else logging.WARNING
    )

    root_logger.info(
        "Logging initialized: level=%s, file=%s, backups=%d",
        logging.getLevelName(level),
        log_path,
        config.LOG_FILE_BACKUP_COUNT,
    )
