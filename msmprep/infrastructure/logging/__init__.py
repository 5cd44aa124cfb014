"""Logging adapters implementing :class:`~msmprep.application.ports.LoggerPort`."""

from .console_logger import ConsoleLogger, LogContext, LogLevel, ProcessingStats
from .null_logger import NullLogger

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
    "NullLogger",
    "ProcessingStats",
]
