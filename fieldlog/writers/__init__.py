"""Writers module - output sinks for formatted records"""

from fieldlog.writers.console_writer import ConsoleWriter
from fieldlog.writers.discard_writer import DiscardWriter
from fieldlog.writers.file_writer import FileWriter

__all__ = ["ConsoleWriter", "DiscardWriter", "FileWriter"]
