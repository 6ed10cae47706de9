"""Tests for the report sink."""

from __future__ import annotations

import io
import json
from datetime import datetime

import pytest

from hostsweep.core.errors import ReportError
from hostsweep.core.report import ReportSink, open_report
from hostsweep.models.finding import Finding, ScanFailure, Tag


def test_lines_keep_call_order(sink, report_stream):
    sink.heading("Scanning: HKEY_CURRENT_USER\\Software")
    sink.write_finding(Finding(tag=Tag.SUSPICIOUS, subject="a", detail="hack"))
    sink.heading("Scanning directory: D:\\x")
    sink.write_finding(ScanFailure(subject="D:\\x\\y", message="Access is denied").to_finding())
    sink.write_finding(Finding(tag=Tag.RENAME, subject="b", detail="Renamed or suspiciously modified"))

    assert report_stream.getvalue().splitlines() == [
        "Scanning: HKEY_CURRENT_USER\\Software",
        "[SUSPICIOUS] a : hack",
        "Scanning directory: D:\\x",
        "[ERROR] D:\\x\\y : Access is denied",
        "[RENAME] b : Renamed or suspiciously modified",
    ]
    assert sink.counts[Tag.SUSPICIOUS] == 1
    assert sink.error_count == 1


def test_metadata_lines(sink, report_stream):
    sink.write_metadata("2024-06-01 07:00:00", "Unknown")

    assert report_stream.getvalue().splitlines() == [
        "Last Boot Time: 2024-06-01 07:00:00",
        "Last Reset Time: Unknown",
    ]


def test_jsonl_format(report_stream):
    sink = ReportSink(report_stream, format="jsonl")
    sink.heading("Scanning: x")
    sink.blank()
    sink.write_metadata("Error: boom", "Error: boom")
    sink.write_finding(
        Finding(tag=Tag.EXECUTED, subject="C:\\a.exe", last_accessed=datetime(2024, 1, 2, 3, 4, 5))
    )

    records = [json.loads(line) for line in report_stream.getvalue().splitlines()]

    assert records == [
        {"heading": "Scanning: x"},
        {"metadata": {"last_boot_time": "Error: boom", "last_reset_time": "Error: boom"}},
        {
            "tag": "EXECUTED",
            "subject": "C:\\a.exe",
            "detail": None,
            "last_accessed": "2024-01-02T03:04:05",
            "created": None,
        },
    ]


def test_write_failure_is_fatal():
    stream = io.StringIO()
    stream.close()
    sink = ReportSink(stream, path="closed.txt")

    with pytest.raises(ReportError) as exc_info:
        sink.write("x")

    assert exc_info.value.error.context == {"path": "closed.txt"}


def test_open_report_truncates_previous_run(tmp_path):
    path = tmp_path / "report.txt"
    path.write_text("old report\n", encoding="utf-8")

    with open_report(str(path)) as sink:
        sink.write("[HIDDEN] C:\\naïve.txt")

    assert path.read_text(encoding="utf-8") == "[HIDDEN] C:\\naïve.txt\n"


def test_open_report_failure(tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "report.txt"

    with pytest.raises(ReportError):
        with open_report(str(missing)):
            pass


def test_undecodable_names_are_escaped(tmp_path):
    path = tmp_path / "report.txt"
    name = "C:\\Users\\me\\hack\udcff.txt"

    with open_report(str(path)) as sink:
        sink.write_finding(Finding(tag=Tag.SUSPICIOUS, subject=name, detail="x"))

    assert path.read_text(encoding="utf-8") == "[SUSPICIOUS] C:\\Users\\me\\hack\\udcff.txt : x\n"


def test_undecodable_names_stay_valid_jsonl(tmp_path):
    path = tmp_path / "report.jsonl"
    name = "C:\\hack\udcff.txt"

    with open_report(str(path), format="jsonl") as sink:
        sink.write_finding(Finding(tag=Tag.HIDDEN, subject=name))

    (record,) = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert record["subject"] == name
