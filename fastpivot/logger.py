# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

import json
import logging
import os
import sys

from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogOutput(str, Enum):
    CONSOLE = "console"
    FILE = "file"
    BOTH = "both"


class LogFormat(str, Enum):
    TEXT = "text"
    TEXT_LIGHT = "text_light"
    JSON = "json"


LOG_FORMATS = {
    LogFormat.TEXT: "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    LogFormat.TEXT_LIGHT: "%(levelname)s: %(message)s",
}


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload)


def _build_formatter(format: LogFormat | str) -> logging.Formatter:
    if format == LogFormat.JSON:
        return JsonFormatter()

    if isinstance(format, LogFormat):
        return logging.Formatter(LOG_FORMATS[format])

    # Any other string is a custom logging format
    return logging.Formatter(format)


def setup_logging(
    level: LogLevel = LogLevel.INFO,
    output: LogOutput = LogOutput.CONSOLE,
    format: LogFormat | str = LogFormat.TEXT_LIGHT,
    log_file: str | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Minimum level of the emitted records
        output: Where records are written (console, file or both)
        format: One of the predefined formats or a custom logging format string
        log_file: Target file, required when output includes the file
    """
    handlers: list[logging.Handler] = []

    if output in (LogOutput.CONSOLE, LogOutput.BOTH):
        handlers.append(logging.StreamHandler(sys.stdout))

    if output in (LogOutput.FILE, LogOutput.BOTH):
        if not log_file:
            raise ValueError("A log file is required to log into a file")

        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = _build_formatter(format)

    for handler in handlers:
        handler.setFormatter(formatter)

    root = logging.getLogger()

    for handler in list(root.handlers):
        root.removeHandler(handler)

    for handler in handlers:
        root.addHandler(handler)

    root.setLevel(LogLevel(level).value)


__all__ = [
    "LogLevel",
    "LogOutput",
    "LogFormat",
    "JsonFormatter",
    "setup_logging",
]
