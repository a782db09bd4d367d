"""Logger builder pattern"""

from pathlib import Path
from typing import Any, Optional, Union

from fieldlog.core.call_site import CallSiteResolver
from fieldlog.core.log_level import LogLevel
from fieldlog.core.logger import Logger
from fieldlog.core.logger_config import LoggerConfig
from fieldlog.writers.console_writer import ConsoleWriter
from fieldlog.writers.file_writer import FileWriter


class LoggerBuilder:
    """Builder pattern for logger construction."""

    def __init__(self):
        self._config = LoggerConfig()
        self._output: Any = None
        self._formatter: Any = None
        self._resolver: Optional[CallSiteResolver] = None

    def with_level(self, level: Union[LogLevel, str, int]) -> "LoggerBuilder":
        """Set minimum log level."""
        self._config.min_level = LogLevel.parse(level)
        return self

    def with_output(self, output: Any) -> "LoggerBuilder":
        """Write records to any object with a write(str) method."""
        self._output = output
        return self

    def with_console(self, stream=None) -> "LoggerBuilder":
        """Write records to the console (default: sys.stderr)."""
        self._output = ConsoleWriter(stream=stream)
        return self

    def with_file(self, filepath: Union[str, Path]) -> "LoggerBuilder":
        """
        Append records to a file.

        The file is opened when build() is called.
        """
        self._output = Path(filepath)
        return self

    def with_formatter(self, formatter: Any) -> "LoggerBuilder":
        """
        Set the record formatter.

        Args:
            formatter: BaseFormatter instance or callable taking a LogEntry

        Returns:
            Self for method chaining

        Example:
            from fieldlog.formatters import TextFormatter

            logger = (LoggerBuilder()
                .with_console()
                .with_formatter(TextFormatter(colored=True))
                .build())
        """
        self._formatter = formatter
        return self

    def with_thread_safety(self, enabled: bool = True) -> "LoggerBuilder":
        """Serialize sink writes with an internal lock."""
        self._config.thread_safe = enabled
        return self

    def with_call_site_skip(self, skip: int) -> "LoggerBuilder":
        """
        Skip extra caller frames when attributing records.

        Use when every logging call goes through a helper of your own,
        so records point at the helper's caller.
        """
        if skip < 0:
            raise ValueError("call_site_skip cannot be negative")
        self._config.call_site_skip = skip
        return self

    def with_resolver(self, resolver: CallSiteResolver) -> "LoggerBuilder":
        """Replace stack inspection with a custom call-site resolver."""
        self._resolver = resolver
        return self

    def build(self) -> Logger:
        """Build and return configured logger."""
        output = self._output
        if isinstance(output, Path):
            output = FileWriter(str(output))

        return Logger.from_config(
            self._config,
            output=output,
            formatter=self._formatter,
            resolver=self._resolver,
        )
