"""Structured error model for hostsweep."""

from typing import Any

from pydantic import BaseModel, Field


class StructuredError(BaseModel):
    """Structured error response format.

    Fatal errors reported by the CLI follow this schema so that a
    wrapper script can react to them without parsing prose.
    """

    code: str = Field(
        ...,
        pattern=r"^[A-Z][A-Z0-9_]*$",
        description="Error code (e.g., REPORT_ERROR)",
        examples=[
            "CONFIG_ERROR",
            "REPORT_ERROR",
            "UNSUPPORTED_PLATFORM",
            "INTERNAL_ERROR",
        ],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
    )

    remediation: str = Field(
        ...,
        description="Suggested fix or next step",
    )

    retryable: bool = Field(
        ...,
        description="Whether retry may succeed",
    )

    context: dict[str, Any] | None = Field(
        default=None,
        description="Additional context (path, field, etc.)",
    )

    model_config = {"extra": "forbid"}


class ErrorCode:
    """Standard error codes for hostsweep."""

    CONFIG_ERROR = "CONFIG_ERROR"
    REPORT_ERROR = "REPORT_ERROR"
    UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"
    INTERNAL_ERROR = "INTERNAL_ERROR"
