"""
Logging configuration and utilities for CT Intelligence.

Provides:
- Colored console output
- Rotating plain-text and JSON-lines file logs
- Timing of brief generation and other operations
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from time import perf_counter
from typing import Optional

from .config import LoggingConfig

ROOT_LOGGER_NAME = "ct_intel"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BG_RED = "\033[41m"


LEVEL_COLORS = {
    "DEBUG": Colors.DIM + Colors.CYAN,
    "INFO": Colors.GREEN,
    "WARNING": Colors.YELLOW,
    "ERROR": Colors.RED,
    "CRITICAL": Colors.BOLD + Colors.BG_RED + Colors.WHITE,
}


class ColoredFormatter(logging.Formatter):
    """Log formatter that colors the level and logger name on a TTY."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        use_colors: bool = True,
    ):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        original_levelname = record.levelname
        original_name = record.name

        color = LEVEL_COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.name = f"{Colors.CYAN}{record.name}{Colors.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
            record.name = original_name


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs one JSON object per line; fields passed via ``extra`` are kept
    under the ``extra`` key.
    """

    _RESERVED = {
        "name", "msg", "args", "created", "filename",
        "funcName", "levelname", "levelno", "lineno",
        "module", "msecs", "pathname", "process",
        "processName", "relativeCreated", "stack_info",
        "thread", "threadName", "exc_info", "exc_text",
        "message", "asctime", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = {}
        for key, value in record.__dict__.items():
            if key in self._RESERVED:
                continue
            try:
                json.dumps(value)
                extra_fields[key] = value
            except (TypeError, ValueError):
                extra_fields[key] = str(value)

        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


def _rotating_handler(path: str) -> logging.handlers.RotatingFileHandler:
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        file_path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
    )


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the ``ct_intel`` logger hierarchy.

    Args:
        config: LoggingConfig instance or None for defaults

    Returns:
        Configured root ``ct_intel`` logger
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(config.format))
    logger.addHandler(console_handler)

    if config.file:
        file_handler = _rotating_handler(config.file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(file_handler)

    if config.json_file:
        json_handler = _rotating_handler(config.json_file)
        json_handler.setLevel(level)
        json_handler.setFormatter(JSONFormatter())
        logger.addHandler(json_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a CT Intelligence component.

    Args:
        name: Logger name (prefixed with 'ct_intel.' when needed)
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


@contextmanager
def log_execution_time(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
):
    """
    Context manager to log execution time of an operation.

    Example:
        with log_execution_time(logger, "brief generation"):
            generate_brief(loader, 24)
    """
    start_time = perf_counter()
    logger.log(level, f"Starting: {operation}")

    try:
        yield
    except Exception as e:
        elapsed = perf_counter() - start_time
        logger.error(f"Failed: {operation} after {elapsed:.3f}s - {e}")
        raise
    else:
        elapsed = perf_counter() - start_time
        logger.log(level, f"Completed: {operation} in {elapsed:.3f}s")
