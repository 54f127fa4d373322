"""Levelled logging used by the API client."""

from __future__ import annotations

import sys
from datetime import datetime
from enum import IntEnum
from typing import Any, Protocol, TextIO


class LogLevel(IntEnum):
    """Severity of a log record; higher values are more severe."""

    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5

    def __str__(self) -> str:
        return self.name


class _Logger(Protocol):
    def log(self, level: LogLevel, message: str, *args: Any) -> None: ...


class StdLogger:
    """Writes timestamped records to a text stream, standard error by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def log(self, level: LogLevel, message: str, *args: Any) -> None:
        text = message % args if args else message
        stamp = datetime.now().strftime("%Y/%m/%d %H:%M:%S")
        out = self.stream if self.stream is not None else sys.stderr
        out.write(f"{stamp} [{level}] {text}\n")
        out.flush()


class LevelLogger:
    """Forwards records at or above a threshold level to another logger."""

    def __init__(self, logger: _Logger, level: LogLevel) -> None:
        self.logger = logger
        self.level = level

    def log(self, level: LogLevel, message: str, *args: Any) -> None:
        if level >= self.level:
            self.logger.log(level, message, *args)

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def debug(self, message: str, *args: Any) -> None:
        self.log(LogLevel.DEBUG, message, *args)

    def info(self, message: str, *args: Any) -> None:
        self.log(LogLevel.INFO, message, *args)

    def warn(self, message: str, *args: Any) -> None:
        self.log(LogLevel.WARN, message, *args)

    def error(self, message: str, *args: Any) -> None:
        self.log(LogLevel.ERROR, message, *args)


_default = LevelLogger(StdLogger(), LogLevel.INFO)


def set_logger(logger: _Logger) -> None:
    """Replace the logger that the package-wide logger forwards to."""
    _default.logger = logger


def set_level(level: LogLevel) -> None:
    """Set the threshold of the package-wide logger."""
    _default.level = level


def get_logger() -> LevelLogger:
    """Return the package-wide logger."""
    return _default