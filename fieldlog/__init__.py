"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

fieldlog - Minimal structured logging with chained contextual fields
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from fieldlog.core.logger import Logger, new_logger
from fieldlog.core.logger_builder import LoggerBuilder
from fieldlog.core.log_entry import LogEntry
from fieldlog.core.log_level import LogLevel
from fieldlog.core.logger_config import LoggerConfig
from fieldlog.core.interface import FieldLogger
from fieldlog.core.call_site import CallSite, CallSiteResolver

# Import submodules (not all classes by default)
from fieldlog import formatters
from fieldlog import writers

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LogEntry",
    "LogLevel",
    "LoggerConfig",
    "FieldLogger",
    "CallSite",
    "CallSiteResolver",
    "new_logger",
    "formatters",
    "writers",
]
