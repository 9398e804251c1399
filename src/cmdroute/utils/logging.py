"""Structured logging setup for cmdroute."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Package logger; module loggers are children of it
logger = logging.getLogger("cmdroute")

# Attribute on LogRecord that carries structured context
CONTEXT_ATTR = "cmdroute_context"


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, CONTEXT_ATTR, None)
        if isinstance(context, dict):
            log_data.update(context)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["module"] = record.module
        log_data["function"] = record.funcName
        log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


class PlainFormatter(logging.Formatter):
    """Human-readable formatter without colors.

    Context fields are appended as ``key=value`` pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:8} {record.name}: {record.getMessage()}"
        context = getattr(record, CONTEXT_ATTR, None)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} [{pairs}]"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure logging for cmdroute.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for logging.
        json_format: Use JSON format for console logs.
        use_color: Render console logs through Rich.

    Returns:
        Configured package logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler: logging.Handler
    if json_format:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(JSONFormatter())
    elif use_color:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(PlainFormatter())
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    # File handler (always JSON for parsing)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module.

    Args:
        name: Module name (e.g., 'cmdroute.commands.registry').

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def log_with_context(
    log: logging.Logger,
    level: int,
    message: str,
    *,
    exc_info: bool = False,
    **context: Any,
) -> None:
    """Log a message with additional structured context.

    Args:
        log: Logger instance.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        exc_info: Attach the active exception's traceback.
        **context: Additional key-value pairs to include.
    """
    log.log(level, message, exc_info=exc_info, extra={CONTEXT_ATTR: context})
