"""
Logging configuration for Nepal Guide Connect.

Provides structured logging with JSON format for production and
human-readable, colored format for development.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

RESERVED_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects with consistent fields:
    - timestamp: ISO format timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - module, function, line: Call site
    - any extra fields passed with ``extra=``
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in RESERVED_FIELDS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output in development."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        formatted = super().format(record)

        # Restore so other handlers see the plain level name
        record.levelname = levelname

        return formatted


def get_logging_config(
    level: str = "INFO",
    json_console: bool = False,
    log_dir: str | None = "logs",
    sql_echo: bool = False,
) -> Dict[str, Any]:
    """
    Build a ``logging.config.dictConfig`` dictionary.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_console: Emit JSON on the console (production) instead of colored text
        log_dir: Directory for rotating log files. ``None`` disables file logging.
        sql_echo: Log SQL statements from the SQLAlchemy engine

    Examples:
        >>> config = get_logging_config(level="DEBUG", log_dir=None)
        >>> logging.config.dictConfig(config)
    """
    level = level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"

    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if json_console else "colored",
            "stream": "ext://sys.stdout",
        },
    }

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "json",
            "filename": str(Path(log_dir) / "app.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": str(Path(log_dir) / "error.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8",
        }

    app_handlers = list(handlers)
    shared_handlers = [name for name in handlers if name != "error_file"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JSONFormatter},
            "colored": {
                "()": ColoredFormatter,
                "fmt": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "guideconnect": {
                "level": level,
                "handlers": app_handlers,
                "propagate": False,
            },
            "uvicorn": {"level": "INFO", "handlers": shared_handlers, "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": shared_handlers, "propagate": False},
            "sqlalchemy.engine": {
                "level": "INFO" if sql_echo else "WARNING",
                "handlers": shared_handlers,
                "propagate": False,
            },
        },
        "root": {"level": level, "handlers": shared_handlers},
    }
