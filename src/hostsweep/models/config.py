"""Sweep configuration model for hostsweep."""

from pydantic import BaseModel, Field, field_validator

from hostsweep.core import paths

DEFAULT_KEYWORDS = (
    "cheat",
    "hack",
    "inject",
    "bypass",
    "debugger",
    "fivem",
    "eulen",
    "red",
    "trainer",
    "exploit",
)

DEFAULT_TRUSTED_NAMES = (
    "explorer.exe",
    "svchost.exe",
    "lsass.exe",
    "taskmgr.exe",
    "msiexec.exe",
)

DEFAULT_REGISTRY_ROOTS = (
    "HKEY_LOCAL_MACHINE\\Software",
    "HKEY_CURRENT_USER\\Software",
    "HKEY_LOCAL_MACHINE\\System\\CurrentControlSet\\Services",
    "HKEY_LOCAL_MACHINE\\System\\CurrentControlSet\\Control\\Session Manager\\Memory Management",
)


class SweepConfig(BaseModel):
    """Fixed lists and locations used for one sweep.

    Loaded once at startup and never mutated afterwards.
    """

    keywords: tuple[str, ...] = Field(
        default=DEFAULT_KEYWORDS,
        description="Case-insensitive substrings that mark a name or value as suspicious",
    )

    trusted_directories: tuple[str, ...] = Field(
        default=(),
        description="Path prefixes whose files never produce findings",
    )

    trusted_names: tuple[str, ...] = Field(
        default=DEFAULT_TRUSTED_NAMES,
        description="File names that never produce findings",
    )

    registry_roots: tuple[str, ...] = Field(
        default=DEFAULT_REGISTRY_ROOTS,
        description="Configuration-tree keys whose values are inspected",
    )

    scan_directories: tuple[str, ...] = Field(
        default=(),
        description="Directories walked recursively",
    )

    trash_dirname: str = Field(
        default="$Recycle.Bin",
        description="Trash container name relative to each drive root",
    )

    prefetch_directory: str = Field(
        default="",
        description="Execution-cache directory",
    )

    prefetch_suffix: str = Field(
        default=".pf",
        description="Extension of execution-cache records",
    )

    deleted_age_hours: int = Field(
        default=24,
        ge=0,
        description="Minimum age of a vanished file before it is reported as deleted",
    )

    report_path: str = Field(
        default="",
        description="Report destination (empty selects the desktop default)",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject empty keywords, which would match everything."""
        if any(not k for k in v):
            raise ValueError("keywords must not contain empty strings")
        return v

    @classmethod
    def default(cls) -> "SweepConfig":
        """Build the stock configuration for the current machine."""
        return cls(
            trusted_directories=(
                paths.system_dir(),
                paths.windows_dir(),
                paths.program_files(),
                paths.program_files_x86(),
            ),
            scan_directories=(
                paths.application_data(),
                paths.program_files(),
                paths.program_files_x86(),
                paths.temp_dir(),
                paths.downloads_dir(),
            ),
            prefetch_directory=paths.prefetch_dir(),
            report_path=paths.default_report_path(),
        )
