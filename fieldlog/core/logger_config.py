"""
Logger configuration management
"""

from dataclasses import dataclass
from typing import Union

from fieldlog.core.log_level import LogLevel


@dataclass
class LoggerConfig:
    """
    Logger configuration.

    min_level accepts a LogLevel, its value or its name. Anything
    unrecognized is replaced with INFO rather than rejected.
    """

    min_level: Union[LogLevel, str, int] = LogLevel.INFO

    # Serialize sink writes across threads
    thread_safe: bool = False

    # Extra caller frames to skip when attributing records
    call_site_skip: int = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.min_level = LogLevel.parse(self.min_level)
        if self.call_site_skip < 0:
            raise ValueError("call_site_skip cannot be negative")

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls) -> "LoggerConfig":
        """Create configuration for debugging."""
        return cls(min_level=LogLevel.DEBUG)

    @classmethod
    def production_config(cls) -> "LoggerConfig":
        """Create configuration for production."""
        return cls(
            min_level=LogLevel.WARN,
            thread_safe=True,
        )
