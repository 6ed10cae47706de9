"""Structured error handling for hostsweep."""

import sys
from typing import Any, NoReturn

from hostsweep.models.error import ErrorCode, StructuredError


class SweepError(Exception):
    """Base exception for hostsweep errors.

    Wraps a StructuredError for consistent error handling.
    """

    def __init__(
        self,
        code: str,
        message: str,
        remediation: str,
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            retryable=retryable,
            context=context,
        )
        super().__init__(message)

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError."""
        return self.error


class ConfigError(SweepError):
    """Configuration file could not be loaded or validated."""

    def __init__(self, message: str, path: str | None = None, errors: list[str] | None = None):
        context: dict[str, Any] = {}
        if path:
            context["path"] = path
        if errors:
            context["errors"] = errors
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            remediation="Fix the configuration file or run without --config to use the defaults",
            retryable=False,
            context=context or None,
        )


class ReportError(SweepError):
    """Report destination could not be opened or written.

    This is the only fatal condition of a sweep.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            code=ErrorCode.REPORT_ERROR,
            message=message,
            remediation="Check that the report location exists and is writable, or pass --output",
            retryable=True,
            context={"path": path} if path else None,
        )


class UnsupportedPlatformError(SweepError):
    """A data source is not available on this operating system."""

    def __init__(self, source: str, platform: str):
        super().__init__(
            code=ErrorCode.UNSUPPORTED_PLATFORM,
            message=f"{source} is not available on {platform}",
            remediation="Run the sweep on a Windows host to inspect this source",
            retryable=False,
            context={"source": source, "platform": platform},
        )


def handle_error(error: SweepError | Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error by outputting it and exiting.

    Args:
        error: The error to handle
        exit_code: Exit code to use
    """
    from hostsweep.cli.output import output_error

    if isinstance(error, SweepError):
        output_error(error.to_structured())
    else:
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="This is an unexpected error. Please report it.",
            retryable=False,
            context={"type": type(error).__name__},
        )
        output_error(structured)

    sys.exit(exit_code)
