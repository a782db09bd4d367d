"""
Log formatters module

Provides formatter implementations that turn finalized entries into text.
"""

from fieldlog.formatters.base_formatter import BaseFormatter, FormatterError
from fieldlog.formatters.json_formatter import JSONFormatter
from fieldlog.formatters.text_formatter import TextFormatter

__all__ = [
    "BaseFormatter",
    "FormatterError",
    "JSONFormatter",
    "TextFormatter",
]
