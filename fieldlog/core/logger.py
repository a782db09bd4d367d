"""
Main Logger class - root of every logging chain

Holds the output sink, formatter, minimum level and call-site resolver.
Records are written synchronously; nothing raised while building,
formatting or writing a record ever reaches the caller.
"""

from __future__ import annotations

import sys
import threading
from typing import Any, Callable, Optional, Union

from fieldlog.core.call_site import (
    UNKNOWN_CALL_SITE,
    CallSite,
    CallSiteResolver,
    StackCallSiteResolver,
)
from fieldlog.core.log_entry import LogEntry
from fieldlog.core.log_level import LogLevel
from fieldlog.core.logger_config import LoggerConfig

FORMAT_FAILURE_NOTICE = "error marshalling logEntry"


class Logger:
    """Root logger: emits records directly and starts field chains."""

    __slots__ = ("_output", "_formatter", "_level", "_resolver", "_lock")

    def __init__(
        self,
        output: Any = None,
        formatter: Any = None,
        level: Union[LogLevel, str, int] = LogLevel.INFO,
        *,
        resolver: Optional[CallSiteResolver] = None,
        thread_safe: bool = False,
    ):
        """
        Initialize logger.

        Args:
            output: Sink with a write(str) method (default: DiscardWriter)
            formatter: Formatter instance or callable (default: JSONFormatter)
            level: Minimum level; unrecognized values fall back to INFO
            resolver: Call-site resolver (default: StackCallSiteResolver)
            thread_safe: Serialize writes to the sink with an internal lock
        """
        if output is None:
            from fieldlog.writers.discard_writer import DiscardWriter
            output = DiscardWriter()

        if formatter is None:
            from fieldlog.formatters.json_formatter import JSONFormatter
            formatter = JSONFormatter()

        self._output = output
        self._formatter = formatter
        self._level = LogLevel.parse(level)
        self._resolver = resolver or StackCallSiteResolver()
        self._lock = threading.RLock() if thread_safe else None

    @classmethod
    def from_config(
        cls,
        config: LoggerConfig,
        output: Any = None,
        formatter: Any = None,
        resolver: Optional[CallSiteResolver] = None,
    ) -> "Logger":
        """Create logger from a LoggerConfig."""
        if resolver is None:
            resolver = StackCallSiteResolver(skip=config.call_site_skip)
        return cls(
            output,
            formatter,
            config.min_level,
            resolver=resolver,
            thread_safe=config.thread_safe,
        )

    @property
    def output(self) -> Any:
        return self._output

    @property
    def formatter(self) -> Any:
        return self._formatter

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def resolver(self) -> CallSiteResolver:
        return self._resolver

    @property
    def thread_safe(self) -> bool:
        return self._lock is not None

    def is_enabled_for(self, level: LogLevel) -> bool:
        """A call at ``level`` is suppressed iff it is below the minimum level."""
        return level >= self._level

    def with_field(self, key: str, value: Any) -> LogEntry:
        """Start a chain carrying a single field."""
        return LogEntry(self).with_field(key, value)

    def with_error(self, err: Optional[BaseException]) -> LogEntry:
        """Start a chain carrying an error and the location it was attached at."""
        return LogEntry(self).with_error(err)

    def _log(self, level: LogLevel, message: str) -> None:
        if not self.is_enabled_for(level):
            return
        self.emit(LogEntry(self), level, message)

    def debug(self, message: str) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        """Log warning message."""
        self._log(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message)

    def resolve_call_site(self) -> CallSite:
        """Resolve the user call site, or UNKNOWN_CALL_SITE on failure."""
        try:
            return self._resolver.resolve()
        except Exception:
            return UNKNOWN_CALL_SITE

    def emit(self, entry: LogEntry, level: LogLevel, message: str) -> None:
        """
        Finalize, format and write a record.

        Level filtering is done by the caller. On formatter failure the
        fixed FORMAT_FAILURE_NOTICE is written instead of the record.
        """
        try:
            record = entry.finalize(level, message, self.resolve_call_site())
            text = self._format(record)
        except Exception:
            self._write(FORMAT_FAILURE_NOTICE)
            return

        self._write(text, "\n")

    def _format(self, record: LogEntry) -> str:
        formatter = self._formatter
        if hasattr(formatter, "format"):
            text = formatter.format(record)
        else:
            text = formatter(record)
        if not isinstance(text, str):
            raise TypeError(f"formatter returned {type(text).__name__}, expected str")
        return text

    def _write(self, *chunks: str) -> None:
        try:
            if self._lock is not None:
                with self._lock:
                    for chunk in chunks:
                        self._output.write(chunk)
            else:
                for chunk in chunks:
                    self._output.write(chunk)
        except Exception as e:
            print(f"Writer error: {e}", file=sys.stderr)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Logger(level={self._level}, formatter={self._formatter!r}, "
            f"thread_safe={self.thread_safe})"
        )


def new_logger(
    output: Any = None,
    formatter: Optional[Union[Callable[[LogEntry], str], Any]] = None,
    level: Union[LogLevel, str, int] = LogLevel.INFO,
) -> Logger:
    """
    Create a logger.

    Args:
        output: Sink with a write(str) method; None discards everything
        formatter: Formatter; None selects JSONFormatter
        level: Minimum level; unrecognized values fall back to INFO

    Example:
        logger = new_logger(sys.stdout, None, "WARN")
        logger.with_field("user", 42).warn("quota almost used")
    """
    return Logger(output, formatter, level)
