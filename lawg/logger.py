"""
Logger
======

Named logger that writes timestamped lines to standard output and/or an
append-only plain-text file.

Line format:
    <name> - [<timestamp>]: <message>
    ERROR: <name> - [<timestamp>]: <message>

File lines are separated by a single newline; no trailing newline is
written after the last line.

Usage:
    from lawg import Logger

    logger = Logger("General Logger", "logs/general.txt", use_utc=True)
    logger.log("Started")
    logger.log_to_file("Started again")
    logger.error_and_stop("1 + 1 is not two")

Author: lawg developers
"""

import codecs
import logging
import os
import sys
import threading
import weakref
from typing import Any, Optional, Tuple, Union

from .config import config
from .utils.error_handler import (
    InvalidEncodingError,
    LogFileNotProvidedError,
    LogFileReadError,
    LogFileWriteError,
)
from .utils.time_utils import current_timestamp

PathLike = Union[str, "os.PathLike[str]"]

ERROR_PREFIX = "ERROR: "

# One lock per resolved file path, shared by every Logger in the process;
# an entry lives only while some writer holds its lock
_file_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_file_locks_guard = threading.Lock()


def _lock_for(file_path: str) -> threading.Lock:
    key = os.path.realpath(file_path)
    with _file_locks_guard:
        lock = _file_locks.get(key)
        if lock is None:
            lock = _file_locks[key] = threading.Lock()
        return lock


class Logger:
    """
    Named logging destination

    Attributes:
        name (str): Display name prepended to every line
        file_path (str): Log file receiving appended lines, or None
        use_utc (bool): Render timestamps in UTC instead of local time
    """

    def __init__(self, name: str, file_path: Optional[PathLike] = None,
                 use_utc: Optional[bool] = None,
                 timestamp_format: Optional[str] = None,
                 encoding: Optional[str] = None):
        """
        Initialize Logger

        When ``file_path`` is given the file is created if absent; existing
        content is left untouched.

        Args:
            name (str): Display name
            file_path (str): Log file path (optional)
            use_utc (bool): UTC timestamps (default from config)
            timestamp_format (str): strftime format; RFC 3339 when unset (default from config)
            encoding (str): File encoding (default from config)

        Raises:
            InvalidEncodingError: If the encoding is not a known text encoding
            LogFileReadError: If an existing log file cannot be opened
            LogFileWriteError: If the log file cannot be created
        """
        self.logger = logging.getLogger(__name__)

        self._name = str(name)
        self._file_path = os.fspath(file_path) if file_path is not None else None
        self._use_utc = config.USE_UTC if use_utc is None else bool(use_utc)
        self.timestamp_format = timestamp_format or config.TIMESTAMP_FORMAT
        self.encoding = encoding or config.ENCODING

        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise InvalidEncodingError(f"Invalid log file encoding `{self.encoding}`: {e}") from e

        if self._file_path is not None:
            self._prepare_file()

        self.logger.debug(f"Logger {self._name!r} initialized (file={self._file_path}, utc={self._use_utc})")

    @property
    def name(self) -> str:
        return self._name

    @property
    def file_path(self) -> Optional[str]:
        return self._file_path

    @property
    def use_utc(self) -> bool:
        return self._use_utc

    def __repr__(self):
        return (f"{type(self).__name__}(name={self._name!r}, "
                f"file_path={self._file_path!r}, use_utc={self._use_utc!r})")

    # =============================================================================
    # FORMATTING
    # =============================================================================

    def format_line(self, message: Any, error: bool = False) -> str:
        """
        Build the line a write operation emits, stamped with the current time

        Args:
            message (Any): Message, rendered with str()
            error (bool): Prefix the line with ``ERROR: ``

        Returns:
            str: Formatted line without a line terminator
        """
        timestamp = current_timestamp(self._use_utc, self.timestamp_format)
        line = f"{self._name} - [{timestamp}]: {message}"
        if error:
            return ERROR_PREFIX + line
        return line

    # =============================================================================
    # CONSOLE
    # =============================================================================

    def log(self, message: Any) -> None:
        """Write a line to standard output"""
        print(self.format_line(message), flush=True)

    def error(self, message: Any) -> None:
        """Write an ``ERROR: `` line to standard output"""
        print(self.format_line(message, error=True), flush=True)

    def error_and_stop(self, message: Any) -> None:
        """Write an error line to standard output, then exit with status 1"""
        self.error(message)
        sys.exit(1)

    # =============================================================================
    # FILE
    # =============================================================================

    def log_to_file(self, message: Any) -> None:
        """
        Append a line to the log file (not shown on the console)

        Raises:
            LogFileNotProvidedError: If the Logger has no file
            LogFileReadError: If the file disappeared since construction
            LogFileWriteError: If the file cannot be written
        """
        self._append(self._require_file(), message, error=False)

    def error_to_file(self, message: Any) -> None:
        """Append an ``ERROR: `` line to the log file; raises like log_to_file"""
        self._append(self._require_file(), message, error=True)

    def error_and_stop_to_file(self, message: Any) -> None:
        """Append an error line to the log file, then exit with status 1"""
        self.error_to_file(message)
        sys.exit(1)

    # =============================================================================
    # COMBINED
    # =============================================================================

    def log_and_log_to_file(self, message: Any) -> None:
        """Write to the console, then append to the log file"""
        self.log(message)
        self.log_to_file(message)

    def error_and_error_to_file(self, message: Any) -> None:
        """Write an error to the console, then append it to the log file"""
        self.error(message)
        self.error_to_file(message)

    # =============================================================================
    # INTERNALS
    # =============================================================================

    def _require_file(self) -> str:
        if self._file_path is None:
            raise LogFileNotProvidedError()
        return self._file_path

    def _prepare_file(self) -> None:
        """Create the log file if absent and check it opens for read and append"""
        path = self._file_path
        existed = os.path.exists(path)
        try:
            with open(path, "a+b"):
                pass
        except OSError as e:
            if existed:
                raise LogFileReadError(f"Could not read log file `{path}`: {e}", file_path=path) from e
            raise LogFileWriteError(f"Could not create log file `{path}`: {e}", file_path=path) from e

        if not existed:
            self.logger.debug(f"Created log file {path}")

    def _encode_line(self, path: str, line: str) -> Tuple[bytes, bytes]:
        """
        Encode a line for an empty file and for appending after existing content

        The appended form starts with the encoded separator and carries no
        byte order mark, so BOM-writing codecs such as utf-16 stay decodable.
        """
        try:
            first = codecs.getincrementalencoder(self.encoding)().encode(line, final=True)
            encoder = codecs.getincrementalencoder(self.encoding)()
            encoder.encode("")  # consumes the BOM, if the codec writes one
            appended = encoder.encode("\n" + line, final=True)
        except UnicodeEncodeError as e:
            raise LogFileWriteError(
                f"Could not encode log line for `{path}` as {self.encoding}: {e}", file_path=path) from e
        return first, appended

    def _append(self, path: str, message: Any, error: bool) -> None:
        first, appended = self._encode_line(path, self.format_line(message, error=error))

        with _lock_for(path):
            # r+ never creates, so a file removed after construction is reported
            try:
                handle = open(path, "r+b")
            except FileNotFoundError as e:
                raise LogFileReadError(f"Could not read log file `{path}`: {e}", file_path=path) from e
            except OSError as e:
                raise LogFileWriteError(f"Could not open log file `{path}`: {e}", file_path=path) from e

            with handle:
                try:
                    handle.write(appended if handle.seek(0, os.SEEK_END) > 0 else first)
                    handle.flush()
                except OSError as e:
                    raise LogFileWriteError(f"Could not write log file `{path}`: {e}", file_path=path) from e


__all__ = ["Logger", "ERROR_PREFIX"]
