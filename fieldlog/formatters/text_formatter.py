"""
Text formatter with customizable template

Human-readable alternative to JSON output
"""

from fieldlog.core.log_entry import LogEntry
from fieldlog.formatters.base_formatter import BaseFormatter, FormatterError


class TextFormatter(BaseFormatter):
    """
    Format log entries using a customizable template.

    Fields and error details are appended after the template as
    ``key=value`` pairs.
    """

    DEFAULT_TEMPLATE = "{timestamp} [{level:5}] {package}.{function} ({file}:{line}) {message}"

    def __init__(
        self,
        template: str = None,
        timestamp_format: str = "%Y-%m-%dT%H:%M:%S.%f",
        colored: bool = False
    ):
        """
        Initialize text formatter.

        Args:
            template: Format template with placeholders.
                     Available placeholders:
                     - {timestamp}: Timestamp
                     - {level}: Log level name
                     - {level:5}: Log level with padding
                     - {message}: Log message
                     - {package}: Package of the call site
                     - {function}: Function of the call site
                     - {file}: File name
                     - {line}: Line number
            timestamp_format: strftime format for timestamps
            colored: Wrap the line in the level's ANSI color

        Example:
            # Default format
            formatter = TextFormatter()

            # Custom format
            formatter = TextFormatter("{level} {file}:{line} - {message}")
        """
        self.template = template or self.DEFAULT_TEMPLATE
        self.timestamp_format = timestamp_format
        self.colored = colored

    def format(self, entry: LogEntry) -> str:
        """
        Format log entry using the template.

        Args:
            entry: Log entry to format

        Returns:
            Formatted string

        Raises:
            FormatterError: If the template uses an unknown placeholder
        """
        timestamp_str = ""
        if entry.timestamp is not None:
            timestamp_str = entry.timestamp.strftime(self.timestamp_format)
            if self.timestamp_format.endswith("%f"):
                timestamp_str = timestamp_str[:-3]  # Microseconds to milliseconds

        level_name = entry.level.name if entry.level is not None else ""

        format_dict = {
            "timestamp": timestamp_str,
            "level": level_name,
            "message": entry.message,
            "package": entry.package,
            "function": entry.function,
            "file": entry.file,
            "line": entry.line,
        }

        try:
            line = self.template.format(**format_dict)
        except (KeyError, IndexError, ValueError) as e:
            raise FormatterError(f"bad template placeholder: {e}") from e

        pairs = [f"{key}={value!r}" for key, value in sorted(entry.fields.items())]
        if entry.error_message:
            pairs.append(f"error={entry.error_message!r}")
        if entry.error_location is not None:
            loc = entry.error_location
            pairs.append(f"error_at={loc.file}:{loc.line}")
        if pairs:
            line = f"{line} {' '.join(pairs)}"

        if self.colored and entry.level is not None:
            line = f"{entry.level.color_code}{line}{entry.level.reset_code}"

        return line

    def __repr__(self) -> str:
        """String representation."""
        return f"TextFormatter(template='{self.template}')"
