"""
Base formatter interface
"""

from abc import ABC, abstractmethod
from fieldlog.core.log_entry import LogEntry


class FormatterError(Exception):
    """Raised when an entry cannot be rendered."""


class BaseFormatter(ABC):
    """
    Abstract base class for log formatters.

    Formatters convert finalized LogEntry objects into strings. A failure
    is signalled by raising; the logger then writes a fixed notice in
    place of the record.
    """

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """
        Format a log entry into a string.

        Args:
            entry: The log entry to format

        Returns:
            Formatted string representation of the log entry

        Raises:
            FormatterError: If the entry cannot be rendered
        """
        pass

    def __call__(self, entry: LogEntry) -> str:
        """Allow formatters to be callable."""
        return self.format(entry)
