"""Special-folder resolution for hostsweep.

Resolves the Windows special folders the sweep relies on from the
process environment. Folders that cannot be resolved come back as an
empty string, which the rest of the tool treats as "not configured".
"""

import os
import tempfile
from pathlib import Path

REPORT_FILENAME = "RegistryScannerResults.txt"


def _env(name: str) -> str:
    return os.environ.get(name, "")


def windows_dir() -> str:
    """Windows directory (e.g. C:\\Windows)."""
    return _env("SystemRoot") or _env("windir")


def system_dir() -> str:
    """System directory (e.g. C:\\Windows\\System32)."""
    root = windows_dir()
    return os.path.join(root, "System32") if root else ""


def program_files() -> str:
    return _env("ProgramFiles")


def program_files_x86() -> str:
    return _env("ProgramFiles(x86)")


def application_data() -> str:
    return _env("APPDATA")


def user_profile() -> str:
    return _env("USERPROFILE") or str(Path.home())


def temp_dir() -> str:
    return tempfile.gettempdir()


def downloads_dir() -> str:
    return os.path.join(user_profile(), "Downloads")


def desktop_dir() -> str:
    """Desktop folder, or the user profile when there is none."""
    desktop = os.path.join(user_profile(), "Desktop")
    if os.path.isdir(desktop):
        return desktop
    return user_profile()


def prefetch_dir() -> str:
    """Execution-cache directory (e.g. C:\\Windows\\Prefetch)."""
    root = windows_dir()
    return os.path.join(root, "Prefetch") if root else ""


def default_report_path() -> str:
    return os.path.join(desktop_dir(), REPORT_FILENAME)
