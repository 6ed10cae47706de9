"""Pydantic models for hostsweep."""

from hostsweep.models.config import SweepConfig
from hostsweep.models.error import StructuredError
from hostsweep.models.finding import Finding, ScanFailure, ScanItem, Tag
from hostsweep.models.summary import SweepSummary

__all__ = [
    "Finding",
    "ScanFailure",
    "ScanItem",
    "StructuredError",
    "SweepConfig",
    "SweepSummary",
    "Tag",
]
