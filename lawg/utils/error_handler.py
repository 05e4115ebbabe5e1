"""
Error Handler Utility
====================

Provides the exception hierarchy and centralized error handling for lawg.
Every failure a Logger can hit is raised to the caller as a LawgError;
hosts that prefer to stop the process on such failures wrap their entry
point with exit_on_error.

Key Features:
- Error categorization (missing or invalid configuration, unreadable or unwritable file)
- Structured error reports with context information
- Recovery suggestions per category
- Error statistics

Classes:
    LawgError: Base class for every error raised by lawg
    LogFileNotProvidedError: File operation on a Logger without a file
    InvalidEncodingError: Logger configured with an unknown encoding
    LogFileReadError: Log file missing or unreadable
    LogFileWriteError: Log file cannot be created or written
    ErrorHandler: Turns exceptions into logged ErrorReports
    ErrorCategory: Enumeration of error categories
    ErrorContext: Context information for errors

Author: lawg developers
"""

import logging
import sys
import traceback
from typing import Any, Optional, Dict, Callable, List
from dataclasses import dataclass
from enum import Enum
from datetime import datetime
import functools


class ErrorCategory(Enum):
    """
    Error categories for classification
    """
    CONFIG_MISSING = "config_missing"
    CONFIG_INVALID = "config_invalid"
    FILE_READ = "file_read"
    FILE_WRITE = "file_write"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """
    Error severity levels
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LawgError(Exception):
    """Base class for every error raised by lawg"""
    category = ErrorCategory.UNKNOWN


class LogFileNotProvidedError(LawgError, ValueError):
    """A file operation was invoked on a Logger constructed without a file"""
    category = ErrorCategory.CONFIG_MISSING

    def __init__(self, message: str = "Log file not provided"):
        super().__init__(message)


class InvalidEncodingError(LawgError, LookupError):
    """The Logger was configured with an encoding unknown to codecs"""
    category = ErrorCategory.CONFIG_INVALID


class LogFileError(LawgError, OSError):
    """
    The log file could not be used

    Attributes:
        file_path (str): Path of the offending log file
    """

    def __init__(self, message: str, file_path: str = None):
        super().__init__(message)
        self.file_path = file_path


class LogFileReadError(LogFileError):
    category = ErrorCategory.FILE_READ


class LogFileWriteError(LogFileError):
    category = ErrorCategory.FILE_WRITE


@dataclass
class ErrorContext:
    """
    Context information for errors

    Attributes:
        module (str): Module where error occurred
        function (str): Function where error occurred
        file_path (str): Log file involved, if any
        timestamp (datetime): When error occurred
    """
    module: str
    function: str
    file_path: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()


@dataclass
class ErrorReport:
    """
    Structured error report

    Attributes:
        category (ErrorCategory): Error category
        severity (ErrorSeverity): Error severity
        message (str): Human-readable error message
        technical_details (str): Technical error details
        context (ErrorContext): Error context information
        stack_trace (str): Stack trace if available
        recovery_suggestions (List[str]): Suggested recovery actions
        occurred_at (datetime): When error occurred
    """
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    technical_details: str
    context: ErrorContext
    stack_trace: Optional[str] = None
    recovery_suggestions: Optional[List[str]] = None
    occurred_at: Optional[datetime] = None

    def __post_init__(self):
        if self.occurred_at is None:
            self.occurred_at = datetime.now()
        if self.recovery_suggestions is None:
            self.recovery_suggestions = []


class ErrorHandler:
    """
    Main error handling interface
    Provides centralized error management with logging and reporting
    """

    def __init__(self):
        """Initialize Error Handler"""
        self.logger = logging.getLogger(__name__)

        # Error statistics
        self._error_counts = {}
        self._total_errors = 0

    def handle_error(self, message: str, exception: Exception = None,
                     category: ErrorCategory = None,
                     severity: ErrorSeverity = ErrorSeverity.HIGH,
                     context: ErrorContext = None,
                     raise_exception: bool = False) -> ErrorReport:
        """
        Handle an error with logging and reporting

        Args:
            message (str): Human-readable error message
            exception (Exception): Original exception if available
            category (ErrorCategory): Error category, derived from the exception when omitted
            severity (ErrorSeverity): Error severity
            context (ErrorContext): Error context
            raise_exception (bool): Whether to re-raise the exception

        Returns:
            ErrorReport: Structured error report
        """
        if category is None:
            category = self._categorize_exception(exception)

        # Update statistics
        self._total_errors += 1
        self._error_counts[category] = self._error_counts.get(category, 0) + 1

        technical_details = str(exception) if exception else "No exception details"
        stack_trace = None
        if exception is not None and exception.__traceback__ is not None:
            stack_trace = "".join(traceback.format_exception(
                type(exception), exception, exception.__traceback__))

        if context is None:
            context = ErrorContext(
                module="unknown",
                function="unknown",
                file_path=getattr(exception, "file_path", None)
            )

        error_report = ErrorReport(
            category=category,
            severity=severity,
            message=message,
            technical_details=technical_details,
            context=context,
            stack_trace=stack_trace,
            recovery_suggestions=self._get_recovery_suggestions(category)
        )

        self._log_error(error_report)

        if raise_exception and exception:
            raise exception

        return error_report

    def _log_error(self, error_report: ErrorReport) -> None:
        """Log error report"""
        log_message = (
            f"[{error_report.category.value}] {error_report.message}\n"
            f"Severity: {error_report.severity.value}\n"
            f"Technical: {error_report.technical_details}\n"
            f"Module: {error_report.context.module}.{error_report.context.function}"
        )

        if error_report.context.file_path:
            log_message += f"\nFile: {error_report.context.file_path}"

        if error_report.recovery_suggestions:
            log_message += f"\nSuggestions: {', '.join(error_report.recovery_suggestions)}"

        if error_report.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
        elif error_report.severity == ErrorSeverity.HIGH:
            self.logger.error(log_message)
        elif error_report.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

        if (error_report.severity in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]
                and error_report.stack_trace):
            self.logger.debug(f"Stack trace:\n{error_report.stack_trace}")

    def _categorize_exception(self, exception: Exception) -> ErrorCategory:
        """Categorize exception into error category"""
        if isinstance(exception, LawgError):
            return exception.category
        elif isinstance(exception, (FileNotFoundError, PermissionError)):
            return ErrorCategory.FILE_READ
        elif isinstance(exception, OSError):
            return ErrorCategory.FILE_WRITE
        else:
            return ErrorCategory.UNKNOWN

    def _get_recovery_suggestions(self, category: ErrorCategory) -> List[str]:
        """Get recovery suggestions for error category"""
        suggestions = {
            ErrorCategory.CONFIG_MISSING: [
                "Pass a file path when constructing the Logger",
                "Use the console variants (log, error) instead"
            ],
            ErrorCategory.CONFIG_INVALID: [
                "Pass an encoding name known to the codecs module",
                "Check the LAWG_ENCODING setting"
            ],
            ErrorCategory.FILE_READ: [
                "Check the log file still exists",
                "Verify read permissions on the log file"
            ],
            ErrorCategory.FILE_WRITE: [
                "Check the parent directory exists",
                "Verify write permissions on the log file",
                "Check free disk space"
            ]
        }

        return suggestions.get(category, ["Review error details"])

    def get_error_statistics(self) -> Dict:
        """Get error statistics"""
        return {
            "total_errors": self._total_errors,
            "errors_by_category": dict(self._error_counts),
            "most_common_error": max(self._error_counts, key=self._error_counts.get) if self._error_counts else None
        }

    def reset_statistics(self) -> None:
        """Reset error statistics"""
        self._error_counts.clear()
        self._total_errors = 0
        self.logger.info("Error statistics reset")


def exit_on_error(func: Callable = None, *, exit_code: int = 1,
                  error_handler: ErrorHandler = None) -> Any:
    """
    Decorator that terminates the process when a LawgError escapes

    The error is reported through an ErrorHandler, a ``Fatal: <message>``
    line is printed to stderr, and the process exits with ``exit_code``.
    Other exceptions propagate unchanged.

    Args:
        func (Callable): Function to wrap
        exit_code (int): Exit status used on failure
        error_handler (ErrorHandler): Handler receiving the report

    Returns:
        Function decorator, or the wrapped function when used bare
    """
    def decorator(inner):
        @functools.wraps(inner)
        def wrapper(*args, **kwargs):
            try:
                return inner(*args, **kwargs)
            except LawgError as e:
                handler = error_handler or ErrorHandler()
                handler.handle_error(
                    message=f"Exception in {inner.__name__}",
                    exception=e,
                    severity=ErrorSeverity.CRITICAL,
                    context=ErrorContext(
                        module=inner.__module__,
                        function=inner.__name__,
                        file_path=getattr(e, "file_path", None)
                    )
                )
                print(f"Fatal: {e}", file=sys.stderr, flush=True)
                sys.exit(exit_code)
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
