"""Logging and progress utilities for hostsweep.

All diagnostics go to stderr. The report file only ever receives
findings, and stdout only the final run summary.
"""

import json
import sys
import time
from datetime import UTC, datetime
from typing import Any, Literal

LogFormat = Literal["text", "json"]
LogLevel = Literal["debug", "info", "warning", "error"]

_verbose = False
_quiet = False
_log_format: LogFormat = "text"

# Refresh interval for the in-place progress line
PROGRESS_INTERVAL = 0.5


def set_verbose(verbose: bool) -> None:
    """Set verbose mode."""
    global _verbose
    _verbose = verbose


def configure_logging(
    log_format: LogFormat = "text",
    quiet: bool = False,
) -> None:
    """Configure logging settings.

    Args:
        log_format: Output format for log messages
        quiet: Suppress info messages and progress output
    """
    global _log_format, _quiet
    _log_format = log_format
    _quiet = quiet


def _enabled(level: LogLevel) -> bool:
    if level == "debug":
        return _verbose and not _quiet
    if level == "info":
        return not _quiet
    return True


def _emit(payload: dict[str, Any] | str, end: str = "\n") -> None:
    if isinstance(payload, dict):
        payload = json.dumps(payload, default=str, ensure_ascii=False)
    print(payload, end=end, file=sys.stderr, flush=True)


def log(message: str, level: LogLevel = "info", **context: Any) -> None:
    """Log a message to stderr.

    In text format, context is appended as key=value pairs to any
    non-info line; info lines are printed bare.

    Args:
        message: Log message
        level: Log level
        **context: Additional context, e.g. the path being scanned
    """
    if not _enabled(level):
        return

    if _log_format == "json":
        _emit(
            {
                "timestamp": datetime.now(UTC).isoformat(),
                "level": level,
                "message": message,
                **context,
            }
        )
        return

    if level == "info":
        _emit(message)
        return
    suffix = "".join(f" {key}={value}" for key, value in context.items())
    _emit(f"[{level.upper()}] {message}{suffix}")


def debug(message: str, **context: Any) -> None:
    log(message, level="debug", **context)


def info(message: str, **context: Any) -> None:
    log(message, level="info", **context)


def warning(message: str, **context: Any) -> None:
    log(message, level="warning", **context)


def error(message: str, **context: Any) -> None:
    log(message, level="error", **context)


class ProgressReporter:
    """Running file count for the directory pass.

    Walks have no known total, so the line shows the count so far, the
    rate, and the directory root currently being walked. Updates are
    throttled to one redraw per PROGRESS_INTERVAL.
    """

    def __init__(self, description: str = "Scanning", unit: str = "files"):
        self.description = description
        self.unit = unit
        self.current = 0
        self.root: str | None = None
        self.start_time = time.perf_counter()
        self._last_draw = float("-inf")

    def start_root(self, root: str) -> None:
        """Note the directory root the following updates belong to."""
        self.root = root
        self._last_draw = float("-inf")

    def update(self, amount: int = 1) -> None:
        """Count amount more files and redraw if the interval has passed."""
        self.current += amount
        if _quiet:
            return

        now = time.perf_counter()
        if now - self._last_draw < PROGRESS_INTERVAL:
            return
        self._last_draw = now

        rate = self.current / (now - self.start_time) if now > self.start_time else 0.0
        if _log_format == "json":
            _emit(
                {
                    "progress": {
                        "description": self.description,
                        "root": self.root,
                        "current": self.current,
                        "rate": round(rate, 1),
                        "unit": self.unit,
                    }
                }
            )
        else:
            where = f" in {self.root}" if self.root else ""
            _emit(
                f"\r{self.description}: {self.current} {self.unit}{where} "
                f"({rate:.1f} {self.unit}/s)",
                end="",
            )

    def finish(self) -> None:
        """Print the final count and elapsed time."""
        if _quiet:
            return

        elapsed = time.perf_counter() - self.start_time
        if _log_format == "json":
            _emit(
                {
                    "complete": {
                        "description": self.description,
                        "total": self.current,
                        "duration_seconds": round(elapsed, 2),
                        "unit": self.unit,
                    }
                }
            )
        else:
            _emit(
                f"\n{self.description}: {self.current} {self.unit} "
                f"in {format_duration(elapsed)}"
            )


def format_duration(seconds: float) -> str:
    """Render seconds as e.g. "4.2s", "3m 07s" or "1h 02m"."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs:02d}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m"
