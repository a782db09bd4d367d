"""
Log entry data structure

A LogEntry is one node of a logging chain. with_field/with_error return
new entries; the terminal level methods stamp a finalized copy and hand
it to the owning Logger for formatting and output.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from fieldlog.core.call_site import CallSite
from fieldlog.core.log_level import LEVEL_FROM_NAME, LogLevel

if TYPE_CHECKING:
    from fieldlog.core.logger import Logger


@dataclass(frozen=True)
class LogEntry:
    """
    Log entry data structure.

    Entries are never mutated after creation. The field mapping is copied
    at every chain step, so sibling chains derived from the same parent
    cannot observe each other.
    """

    logger: Optional["Logger"] = field(default=None, repr=False, compare=False)
    fields: Mapping[str, Any] = field(default_factory=dict)
    error_message: str = ""
    error_data: Any = None
    error_location: Optional[CallSite] = None
    timestamp: Optional[datetime] = None
    level: Optional[LogLevel] = None
    package: str = ""
    function: str = ""
    file: str = ""
    line: int = 0
    message: str = ""

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def finalized(self) -> bool:
        """True once the entry has been stamped by a level call."""
        return self.timestamp is not None

    def with_field(self, key: str, value: Any) -> "LogEntry":
        """
        Derive an entry carrying an extra field.

        An existing key is overwritten in the new entry only. Keys that
        are not strings are stored under their str() form.
        """
        if not isinstance(key, str):
            key = _error_text(key)
        return replace(self, fields={**self.fields, key: value})

    def with_error(self, err: Optional[BaseException]) -> "LogEntry":
        """
        Derive an entry carrying an error.

        The error location is the caller of this method. Passing None
        clears any error inherited from the parent.
        """
        if err is None:
            return replace(self, error_message="", error_data=None, error_location=None)

        location = self.logger.resolve_call_site() if self.logger is not None else None
        return replace(
            self,
            error_message=_error_text(err),
            error_data=err,
            error_location=location,
        )

    def finalize(
        self,
        level: LogLevel,
        message: str,
        call_site: CallSite,
        timestamp: Optional[datetime] = None,
    ) -> "LogEntry":
        """
        Stamp level, message, call site and timestamp onto a copy.

        Args:
            level: Level of the terminal call
            message: Log message
            call_site: Location of the terminal call
            timestamp: Record time (default: now, UTC)

        Returns:
            Finalized entry ready for formatting
        """
        if not isinstance(message, str):
            message = _error_text(message)

        return replace(
            self,
            timestamp=timestamp or datetime.now(timezone.utc),
            level=level,
            package=call_site.package,
            function=call_site.function,
            file=call_site.file,
            line=call_site.line,
            message=message,
        )

    def _log(self, level: LogLevel, message: str) -> None:
        logger = self.logger
        if logger is None or not logger.is_enabled_for(level):
            return
        logger.emit(self, level, message)

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

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to the output record.

        Optional parts are left out rather than set to null: timestamp
        until the entry is finalized, fields when empty and the error
        keys when no error is attached. errorData holds the raw error
        value; formatters decide how to render it.

        Returns:
            Dictionary representation
        """
        data: Dict[str, Any] = {}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        data["level"] = self.level.name if self.level is not None else ""
        data["package"] = self.package
        data["function"] = self.function
        data["file"] = self.file
        data["line"] = self.line
        if self.fields:
            data["fields"] = dict(self.fields)
        if self.error_message:
            data["error"] = self.error_message
        if self.error_data is not None:
            data["errorData"] = self.error_data
        if self.error_location is not None:
            data["errorLocation"] = self.error_location.to_dict()
        data["message"] = self.message
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], logger: Optional["Logger"] = None) -> "LogEntry":
        """
        Create log entry from a decoded record.

        Args:
            data: Dictionary produced by to_dict() or decoded JSON output
            logger: Logger to attach for further chaining

        Returns:
            New LogEntry instance
        """
        timestamp = data.get("timestamp")
        location = data.get("errorLocation")
        return cls(
            logger=logger,
            fields=data.get("fields", {}),
            error_message=data.get("error", ""),
            error_data=data.get("errorData"),
            error_location=CallSite.from_dict(location) if location is not None else None,
            timestamp=datetime.fromisoformat(timestamp) if timestamp else None,
            level=LEVEL_FROM_NAME.get(data.get("level", "")),
            package=data.get("package", ""),
            function=data.get("function", ""),
            file=data.get("file", ""),
            line=data.get("line", 0),
            message=data.get("message", ""),
        )


def _error_text(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<unprintable {type(value).__name__}>"
