"""
Utilities Module
===============

Helpers shared by the Logger:
- Error taxonomy and error handling
- Timestamp acquisition and rendering

Classes:
    ErrorHandler: Standardized error handling and reporting

Functions:
    exit_on_error(): Terminate the process when a lawg error escapes
    current_timestamp(): Render the current time for a log line
"""

__module_name__ = "utils"

from .error_handler import (
    ErrorCategory,
    ErrorSeverity,
    ErrorContext,
    ErrorReport,
    ErrorHandler,
    LawgError,
    LogFileNotProvidedError,
    InvalidEncodingError,
    LogFileError,
    LogFileReadError,
    LogFileWriteError,
    exit_on_error,
)
from .time_utils import now, format_timestamp, current_timestamp

__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorContext",
    "ErrorReport",
    "ErrorHandler",
    "LawgError",
    "LogFileNotProvidedError",
    "InvalidEncodingError",
    "LogFileError",
    "LogFileReadError",
    "LogFileWriteError",
    "exit_on_error",
    "now",
    "format_timestamp",
    "current_timestamp",
]
