"""
lawg
====

A minimal logging utility: formats a message with a logger name and
timestamp and writes it to standard output and/or an append-only
plain-text file.

Author: lawg developers
Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "lawg developers"

from .logger import Logger, ERROR_PREFIX
from .utils.error_handler import (
    LawgError,
    LogFileNotProvidedError,
    InvalidEncodingError,
    LogFileError,
    LogFileReadError,
    LogFileWriteError,
    ErrorHandler,
    exit_on_error,
)

__all__ = [
    "Logger",
    "ERROR_PREFIX",
    "LawgError",
    "LogFileNotProvidedError",
    "InvalidEncodingError",
    "LogFileError",
    "LogFileReadError",
    "LogFileWriteError",
    "ErrorHandler",
    "exit_on_error",
]


def get_version():
    """Return the current version of the library"""
    return __version__
