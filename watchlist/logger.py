"""Small console logger that prints level, UTC time, call site and message."""

from __future__ import annotations

import enum
import inspect
import os
import sys
from datetime import datetime, timezone
from types import FrameType


class LogLevel(str, enum.Enum):
    """Severity of a log record; the value is the letter printed in the record."""

    INFO = "I"
    WARNING = "W"
    ERROR = "E"
    FATAL = "F"
    DEBUG = "D"
    TRACE = "T"


def local_time(timestamp: datetime | None = None) -> datetime:
    """Return the timestamp (default: now) converted to the local time zone."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    return timestamp.astimezone()


def format_source(filename: str, line: int) -> str:
    """Return ``<base name>:<line>`` for a source location."""
    return f"{os.path.basename(filename)}:{line}"


def format_record(
    level: LogLevel,
    message: str,
    filename: str,
    line: int,
    timestamp: datetime | None = None,
) -> str:
    """Build one log line: ``[L] time | file:line | message``."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    level = LogLevel(level)
    return (
        f"[{level.value}] {timestamp:%Y-%m-%d %H:%M:%S.%f} | "
        f"{format_source(filename, line)} | {message}"
    )


def _call_site(frame: FrameType | None, stacklevel: int) -> tuple[str, int]:
    for _ in range(stacklevel):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "<unknown>", 0
    return frame.f_code.co_filename, frame.f_lineno


def _emit(level: LogLevel, message: str, stacklevel: int) -> None:
    filename, line = _call_site(inspect.currentframe(), stacklevel)
    try:
        record = format_record(level, message, filename, line)
    except Exception as exc:  # a broken record must never take the caller down
        print(f"Error: {exc}", file=sys.stdout)
        return
    print(record, file=sys.stdout)


def log(level: LogLevel, message: str) -> None:
    """Print a record at ``level`` attributed to the caller's file and line."""
    _emit(level, message, 2)


def info(message: str) -> None:
    """Log at INFO level."""
    _emit(LogLevel.INFO, message, 2)


def warning(message: str) -> None:
    """Log at WARNING level."""
    _emit(LogLevel.WARNING, message, 2)


def error(message: str) -> None:
    """Log at ERROR level."""
    _emit(LogLevel.ERROR, message, 2)


def fatal(message: str) -> None:
    """Log at FATAL level."""
    _emit(LogLevel.FATAL, message, 2)


def debug(message: str) -> None:
    """Log at DEBUG level."""
    _emit(LogLevel.DEBUG, message, 2)


def trace(message: str) -> None:
    """Log at TRACE level."""
    _emit(LogLevel.TRACE, message, 2)


def log_exception(exc: BaseException) -> None:
    """Log an exception's message at ERROR level."""
    _emit(LogLevel.ERROR, f"Exception error: {exc}", 2)


def main(argv: list[str] | None = None) -> int:
    """Print a few sample records."""
    log(LogLevel.INFO, "Logging from main thread")
    debug("Added one debug message")
    fatal("\033[1;31mbold red text\033[0m\n")
    return 0