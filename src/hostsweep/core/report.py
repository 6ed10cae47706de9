"""Report sink for hostsweep.

Findings are written one per line, in the order scanners produce
them. The text format is the tag-prefixed layout investigators read;
the jsonl format carries the same findings as one JSON object per line.
"""

import json
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Literal, TextIO

from hostsweep.core.errors import ReportError
from hostsweep.models.finding import Finding, Tag

ReportFormat = Literal["text", "jsonl"]

REPORT_TITLE = "Registry Scanner Results"


class ReportSink:
    """Append-only writer for one report stream."""

    def __init__(self, stream: TextIO, format: ReportFormat = "text", path: str | None = None):
        self.stream = stream
        self.format = format
        self.path = path
        self.counts: Counter[Tag] = Counter()

    def write(self, line: str) -> None:
        """Append one raw line.

        Raises:
            ReportError: If the underlying stream cannot be written
        """
        try:
            self.stream.write(line + "\n")
        except (OSError, ValueError) as e:
            raise ReportError(f"Failed to write report: {e}", path=self.path) from e

    def _write_json(self, payload: dict[str, Any]) -> None:
        self.write(json.dumps(payload, ensure_ascii=False))

    def heading(self, text: str) -> None:
        """Write a section heading such as "Scanning: <path>"."""
        if self.format == "jsonl":
            self._write_json({"heading": text})
        else:
            self.write(text)

    def blank(self) -> None:
        """Write a separator line (text format only)."""
        if self.format == "text":
            self.write("")

    def write_metadata(self, boot_time: str, reset_time: str) -> None:
        """Write the system metadata lines emitted once at report start."""
        if self.format == "jsonl":
            self._write_json(
                {"metadata": {"last_boot_time": boot_time, "last_reset_time": reset_time}}
            )
        else:
            self.write(f"Last Boot Time: {boot_time}")
            self.write(f"Last Reset Time: {reset_time}")

    def write_finding(self, finding: Finding) -> None:
        if self.format == "jsonl":
            self._write_json(finding.to_json_dict())
        else:
            self.write(finding.render())
        self.counts[finding.tag] += 1

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise ReportError(f"Failed to write report: {e}", path=self.path) from e

    @property
    def error_count(self) -> int:
        return self.counts[Tag.ERROR]


@contextmanager
def open_report(path: str, format: ReportFormat = "text") -> Iterator[ReportSink]:
    """Open the report file, truncating any previous run's report.

    Paths that are not valid UTF-8 (undecodable bytes surface as lone
    surrogates) are written backslash-escaped.

    Raises:
        ReportError: If the file cannot be opened
    """
    try:
        stream = open(path, "w", encoding="utf-8", errors="backslashreplace")
    except OSError as e:
        raise ReportError(f"Cannot open report file: {e}", path=path) from e

    with stream:
        sink = ReportSink(stream, format=format, path=path)
        yield sink
        sink.flush()
