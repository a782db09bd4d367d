"""
JSON formatter for structured logging

Default formatter. Produces one JSON object per record.
"""

import json
from datetime import date, datetime
from typing import Any, Dict

from fieldlog.core.log_entry import LogEntry
from fieldlog.formatters.base_formatter import BaseFormatter, FormatterError


class JSONFormatter(BaseFormatter):
    """
    Format log entries as JSON objects.

    Produces structured log output suitable for log aggregation systems.
    Keys follow the record layout of LogEntry.to_dict(); optional keys are
    omitted, never written as null.
    """

    def __init__(
        self,
        indent: int = None,
        ensure_ascii: bool = False,
        sort_keys: bool = False,
        fallback_to_str: bool = False
    ):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation (None for compact, 2 for readable)
            ensure_ascii: Escape non-ASCII characters
            sort_keys: Sort keys instead of keeping record order
            fallback_to_str: Render values JSON cannot encode with str()
                             instead of failing the record

        Example:
            # Compact JSON (one line per entry)
            formatter = JSONFormatter()

            # Tolerate arbitrary objects in fields
            formatter = JSONFormatter(fallback_to_str=True)
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.sort_keys = sort_keys
        self.fallback_to_str = fallback_to_str

    def format(self, entry: LogEntry) -> str:
        """
        Format log entry as JSON.

        Args:
            entry: Log entry to format

        Returns:
            JSON string

        Raises:
            FormatterError: If a field value cannot be encoded
        """
        try:
            return json.dumps(
                entry.to_dict(),
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
                sort_keys=self.sort_keys,
                allow_nan=False,
                default=self._default
            )
        except (TypeError, ValueError) as e:
            raise FormatterError(f"cannot encode log entry: {e}") from e

    def _default(self, value: Any) -> Any:
        if isinstance(value, BaseException):
            return error_to_dict(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, (set, frozenset)):
            return list(value)
        if self.fallback_to_str:
            return str(value)
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    def __repr__(self) -> str:
        """String representation."""
        return f"JSONFormatter(indent={self.indent})"


def error_to_dict(err: BaseException) -> Dict[str, Any]:
    """
    Structural form of an exception used for errorData.

    Returns:
        {"type": <class name>, "message": str(err)}
    """
    return {
        "type": type(err).__name__,
        "message": str(err),
    }
