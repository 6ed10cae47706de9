"""Finding and ScanFailure models for hostsweep."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Tag(str, Enum):
    """Category label carried by every report line."""

    SUSPICIOUS = "SUSPICIOUS"
    HIDDEN = "HIDDEN"
    DELETED = "DELETED"
    RENAME = "RENAME"
    EXECUTED = "EXECUTED"
    PREFETCH = "PREFETCH"
    ERROR = "ERROR"


def format_timestamp(ts: datetime | None) -> str:
    """Format a timestamp the way report lines show it."""
    if ts is None:
        return "Unknown"
    return ts.strftime(TIMESTAMP_FORMAT)


class Finding(BaseModel):
    """One classified observation produced by a scanner.

    Findings are immutable and are handed to the report sink as soon
    as they are created.
    """

    tag: Tag = Field(
        ...,
        description="Category of the observation",
    )

    subject: str = Field(
        ...,
        description="Registry value path or filesystem path",
    )

    detail: str | None = Field(
        default=None,
        description="Free-form detail (registry value, error message, note)",
    )

    last_accessed: datetime | None = Field(
        default=None,
        description="Last access time of the subject",
    )

    created: datetime | None = Field(
        default=None,
        description="Creation time of the subject",
    )

    model_config = {"extra": "forbid", "frozen": True}

    def timestamp_fields(self) -> list[tuple[str, datetime | None]]:
        """Labelled timestamps shown in the parenthesised suffix."""
        if self.tag == Tag.DELETED:
            return [("Deleted on", self.created)]
        if self.tag == Tag.EXECUTED:
            return [("Executed on", self.last_accessed)]
        fields = []
        if self.last_accessed is not None:
            fields.append(("Last Accessed", self.last_accessed))
        if self.created is not None:
            fields.append(("Created", self.created))
        return fields

    def render(self) -> str:
        """Render as a single tagged report line."""
        line = f"[{self.tag.value}] {self.subject}"
        if self.detail is not None:
            return f"{line} : {self.detail}"

        fields = self.timestamp_fields()
        if fields:
            parts = ", ".join(f"{label}: {format_timestamp(ts)}" for label, ts in fields)
            line = f"{line} ({parts})"
        return line

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ScanFailure(BaseModel):
    """Recoverable failure scoped to one root, file or scanner pass."""

    subject: str
    message: str

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_exception(cls, subject: str, exc: BaseException) -> "ScanFailure":
        message = getattr(exc, "strerror", None) or str(exc) or type(exc).__name__
        return cls(subject=subject, message=message)

    def to_finding(self) -> Finding:
        """Convert into the ERROR finding written to the report."""
        return Finding(tag=Tag.ERROR, subject=self.subject, detail=self.message)


ScanItem = Finding | ScanFailure
