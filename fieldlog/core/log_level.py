"""
Log level enumeration

Severity ordering used for level-based suppression: DEBUG < INFO < WARN < ERROR
"""

from enum import IntEnum
from typing import Any, Dict


class LogLevel(IntEnum):
    """
    Log level enumeration.

    Values are compatible with Python's logging module.
    """

    DEBUG = 10      # Debug information
    INFO = 20       # Informational messages
    WARN = 30       # Warning messages
    ERROR = 40      # Error messages

    def __str__(self) -> str:
        """String representation of log level."""
        return self.name

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        level_str = level_str.strip().upper()
        if level_str in cls.__members__:
            return cls[level_str]
        raise ValueError(f"Invalid log level: {level_str}")

    @classmethod
    def parse(cls, value: Any, default: "LogLevel" = None) -> "LogLevel":
        """
        Resolve a configured level, falling back silently on bad input.

        Args:
            value: LogLevel, level value or level name
            default: Level used when value is not recognized (default: INFO)

        Returns:
            LogLevel enum value
        """
        if default is None:
            default = cls.INFO

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls.from_string(value)
            except ValueError:
                return default
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return default
        return default

    @property
    def color_code(self) -> str:
        """
        Get ANSI color code for this level.

        Returns:
            ANSI escape sequence
        """
        colors = {
            LogLevel.DEBUG: "\033[36m",     # Cyan
            LogLevel.INFO: "\033[32m",      # Green
            LogLevel.WARN: "\033[33m",      # Yellow
            LogLevel.ERROR: "\033[31m",     # Red
        }
        return colors.get(self, "\033[0m")

    @property
    def reset_code(self) -> str:
        """ANSI reset code."""
        return "\033[0m"


# Mapping from log level to names
LEVEL_NAMES: Dict[LogLevel, str] = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARN",
    LogLevel.ERROR: "ERROR",
}

# Reverse mapping
LEVEL_FROM_NAME: Dict[str, LogLevel] = {v: k for k, v in LEVEL_NAMES.items()}
