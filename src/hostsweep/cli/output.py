"""Stdout formatting for the hostsweep CLI.

stdout carries the run summary or a structured error, in JSON or a
human-readable layout. stderr carries progress and logs.
"""

import json
import sys
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel

OutputFormat = Literal["json", "human"]

_output_format: OutputFormat = "json"


def set_output_format(format: OutputFormat) -> None:
    """Set the global output format."""
    global _output_format
    _output_format = format


class JSONEncoder(json.JSONEncoder):
    """JSON encoder for hostsweep types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        return super().default(obj)


def output_json(data: Any, file: Any = None) -> None:
    """Output data as JSON.

    Args:
        data: Data to output (dict, list, or Pydantic model)
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    json.dump(data, file, cls=JSONEncoder, ensure_ascii=False)
    file.write("\n")
    file.flush()


def output_human(data: Any, title: str | None = None, file: Any = None) -> None:
    """Output data in human-readable form.

    Args:
        data: Data to output
        title: Optional title for the output
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if title:
        file.write(f"\n{title}\n")
        file.write("=" * len(title) + "\n\n")

    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    if isinstance(data, dict):
        for key, value in data.items():
            _write_field(key, value, file, indent=0)
    else:
        file.write(f"{_scalar(data)}\n")

    file.flush()


def _scalar(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, dict) and not value:
        return "(none)"
    if isinstance(value, list):
        return ", ".join(_scalar(v) for v in value) if value else "(none)"
    return str(value)


def _write_field(key: str, value: Any, file: Any, indent: int) -> None:
    """Write one key; nested mappings and lists of mappings are indented below it."""
    prefix = "  " * indent
    if isinstance(value, dict) and value:
        file.write(f"{prefix}{key}:\n")
        for sub_key, sub_value in value.items():
            _write_field(sub_key, sub_value, file, indent + 1)
    elif isinstance(value, list) and any(isinstance(v, dict) for v in value):
        file.write(f"{prefix}{key}:\n")
        for item in value:
            if not isinstance(item, dict):
                file.write(f"{prefix}  - {_scalar(item)}\n")
                continue
            file.write(f"{prefix}  -\n")
            for sub_key, sub_value in item.items():
                _write_field(sub_key, sub_value, file, indent + 2)
    else:
        # Scalar lists such as keywords stay on one line
        file.write(f"{prefix}{key}: {_scalar(value)}\n")


def output(data: Any, format: OutputFormat | None = None, **kwargs: Any) -> None:
    """Output data in the specified format (global format if None)."""
    if format is None:
        format = _output_format

    if format == "human":
        output_human(data, **kwargs)
    else:
        output_json(data, **kwargs)


def output_error(error: Any, file: Any = None) -> None:
    """Output an error to stdout in the current format.

    Errors are output to stdout (not stderr) for programmatic handling.
    """
    output(error, file=file)


class OutputFormatter:
    """Encapsulates output formatting for commands."""

    def __init__(self, format: OutputFormat = "json"):
        self.format = format

    def output(self, data: Any, title: str | None = None) -> None:
        if self.format == "human":
            output_human(data, title=title)
        else:
            output_json(data)
