"""
Core module for fieldlog

This module contains the fundamental classes:
- Logger: Chain root holding sink, formatter and minimum level
- LogEntry: Immutable chain node carrying fields and error context
- LogLevel: Log level enumeration
- CallSite / CallSiteResolver: Call-site attribution
- FieldLogger: Capability set shared by Logger and LogEntry
- LoggerConfig / LoggerBuilder: Configuration and construction
"""

from fieldlog.core.call_site import (
    UNKNOWN_CALL_SITE,
    CallSite,
    CallSiteResolver,
    StackCallSiteResolver,
    StaticCallSiteResolver,
)
from fieldlog.core.interface import FieldLogger
from fieldlog.core.log_entry import LogEntry
from fieldlog.core.log_level import LogLevel
from fieldlog.core.logger import FORMAT_FAILURE_NOTICE, Logger, new_logger
from fieldlog.core.logger_builder import LoggerBuilder
from fieldlog.core.logger_config import LoggerConfig

__all__ = [
    "CallSite",
    "CallSiteResolver",
    "FieldLogger",
    "FORMAT_FAILURE_NOTICE",
    "LogEntry",
    "LogLevel",
    "Logger",
    "LoggerBuilder",
    "LoggerConfig",
    "StackCallSiteResolver",
    "StaticCallSiteResolver",
    "UNKNOWN_CALL_SITE",
    "new_logger",
]
