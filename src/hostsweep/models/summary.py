"""Run summary model for hostsweep."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class SweepSummary(BaseModel):
    """Outcome of one sweep run.

    Printed to stdout by the CLI once the report has been written.
    """

    run_id: UUID = Field(
        ...,
        description="Correlation ID for this run",
    )

    report_path: str | None = Field(
        default=None,
        description="Path of the written report",
    )

    started_at: datetime = Field(
        ...,
        description="ISO-8601 start timestamp",
    )

    completed_at: datetime | None = Field(
        default=None,
        description="ISO-8601 completion timestamp",
    )

    duration_ms: int = Field(
        default=0,
        ge=0,
        description="Execution time in milliseconds",
    )

    files_examined: int = Field(
        default=0,
        ge=0,
        description="Files inspected by the directory scanner",
    )

    findings: dict[str, int] = Field(
        default_factory=dict,
        description="Finding count per tag",
    )

    errors: int = Field(
        default=0,
        ge=0,
        description="ERROR lines written",
    )

    model_config = {"extra": "forbid"}
