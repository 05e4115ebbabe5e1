#!/usr/bin/env python3
"""
Error Handling Testing Script
=============================

Verifies the lawg exception hierarchy, ErrorHandler reports and the
exit_on_error decorator.

Usage:
    python test_error_handler.py
    pytest test_error_handler.py

Author: lawg developers
"""

import io
import os
import sys
import tempfile
import traceback
from contextlib import redirect_stderr

from lawg import Logger
from lawg.utils.error_handler import (
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
    InvalidEncodingError,
    LawgError,
    LogFileNotProvidedError,
    LogFileReadError,
    LogFileWriteError,
    exit_on_error,
)


def print_test_header(test_name: str):
    """Print formatted test header"""
    print(f"\n{'='*60}")
    print(f"Testing: {test_name}")
    print(f"{'='*60}")


def print_test_result(test_name: str, success: bool, message: str = ""):
    """Print formatted test result"""
    status = "PASS" if success else "FAIL"
    print(f"{status} - {test_name}")
    if message:
        print(f"    {message}")


def test_exception_hierarchy():
    assert issubclass(LogFileNotProvidedError, LawgError)
    assert issubclass(LogFileNotProvidedError, ValueError)
    assert issubclass(LogFileReadError, OSError)
    assert issubclass(LogFileWriteError, OSError)
    assert LogFileNotProvidedError.category == ErrorCategory.CONFIG_MISSING
    assert LogFileReadError.category == ErrorCategory.FILE_READ
    assert LogFileWriteError.category == ErrorCategory.FILE_WRITE


def test_file_error_keeps_path():
    error = LogFileReadError("Could not read log file `a.txt`", file_path="a.txt")

    assert error.file_path == "a.txt"
    assert str(error) == "Could not read log file `a.txt`"


def test_handle_error_builds_report():
    handler = ErrorHandler()
    error = LogFileWriteError("Could not write log file `x.txt`", file_path="x.txt")

    report = handler.handle_error("write failed", exception=error)

    assert report.category == ErrorCategory.FILE_WRITE
    assert report.severity == ErrorSeverity.HIGH
    assert report.technical_details == "Could not write log file `x.txt`"
    assert report.context.file_path == "x.txt"
    assert report.recovery_suggestions
    assert report.occurred_at is not None


def test_handle_error_categorizes_plain_exceptions():
    handler = ErrorHandler()

    assert handler.handle_error("a", FileNotFoundError("gone")).category == ErrorCategory.FILE_READ
    assert handler.handle_error("b", IsADirectoryError("dir")).category == ErrorCategory.FILE_WRITE
    assert handler.handle_error("c", RuntimeError("?")).category == ErrorCategory.UNKNOWN


def test_handle_error_reraises_on_request():
    handler = ErrorHandler()
    error = LogFileNotProvidedError()
    try:
        handler.handle_error("missing", exception=error, raise_exception=True)
    except LogFileNotProvidedError as e:
        assert e is error
    else:
        raise AssertionError("expected LogFileNotProvidedError")


def test_error_statistics():
    handler = ErrorHandler()
    handler.handle_error("a", LogFileNotProvidedError())
    handler.handle_error("b", LogFileNotProvidedError())
    handler.handle_error("c", LogFileReadError("gone", file_path="x"),
                         context=ErrorContext(module="m", function="f"))

    stats = handler.get_error_statistics()
    assert stats["total_errors"] == 3
    assert stats["errors_by_category"][ErrorCategory.CONFIG_MISSING] == 2
    assert stats["most_common_error"] == ErrorCategory.CONFIG_MISSING

    handler.reset_statistics()
    assert handler.get_error_statistics()["total_errors"] == 0
    assert handler.get_error_statistics()["most_common_error"] is None


def test_exit_on_error_terminates_with_diagnostic():
    handler = ErrorHandler()

    @exit_on_error(error_handler=handler)
    def run():
        Logger("Svc", None, True).log_to_file("x")

    buffer = io.StringIO()
    with redirect_stderr(buffer):
        try:
            run()
        except SystemExit as e:
            assert e.code == 1
        else:
            raise AssertionError("expected SystemExit")

    assert buffer.getvalue() == "Fatal: Log file not provided\n"
    assert handler.get_error_statistics()["errors_by_category"] == {ErrorCategory.CONFIG_MISSING: 1}


def test_exit_on_error_names_the_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "out.txt")
        logger = Logger("Svc", path, True)
        os.remove(path)

        @exit_on_error
        def run():
            logger.error_to_file("x")

        buffer = io.StringIO()
        with redirect_stderr(buffer):
            try:
                run()
            except SystemExit as e:
                assert e.code == 1
            else:
                raise AssertionError("expected SystemExit")

        assert path in buffer.getvalue()


def test_exit_on_error_covers_invalid_encoding():
    handler = ErrorHandler()

    @exit_on_error(error_handler=handler)
    def run():
        Logger("Svc", None, True, encoding="no-such-codec")

    buffer = io.StringIO()
    with redirect_stderr(buffer):
        try:
            run()
        except SystemExit as e:
            assert e.code == 1
        else:
            raise AssertionError("expected SystemExit")

    assert buffer.getvalue().startswith("Fatal: Invalid log file encoding `no-such-codec`")
    assert handler.get_error_statistics()["errors_by_category"] == {ErrorCategory.CONFIG_INVALID: 1}
    assert InvalidEncodingError.category == ErrorCategory.CONFIG_INVALID


def test_exit_on_error_passes_results_and_other_errors():
    @exit_on_error
    def ok():
        return 7

    @exit_on_error
    def broken():
        raise KeyError("other")

    assert ok() == 7
    try:
        broken()
    except KeyError:
        pass
    else:
        raise AssertionError("expected KeyError")


def main():
    """Run all error handling tests"""
    print_test_header("lawg error handling")

    tests = [value for key, value in sorted(globals().items())
             if key.startswith("test_") and callable(value)]
    failures = 0

    for test in tests:
        try:
            test()
            print_test_result(test.__name__, True)
        except Exception as e:
            failures += 1
            print_test_result(test.__name__, False, str(e))
            traceback.print_exc()

    print(f"\n{len(tests) - failures}/{len(tests)} tests passed")
    return failures == 0


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
