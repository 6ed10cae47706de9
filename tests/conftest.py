"""Shared test fixtures for hostsweep tests."""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from datetime import datetime, timedelta
from typing import Any

import pytest

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.core.report import ReportSink
from hostsweep.models.config import DEFAULT_KEYWORDS, DEFAULT_TRUSTED_NAMES
from hostsweep.models.finding import ScanFailure
from hostsweep.sources.configstore import ConfigStore, RegistryValue, RootStore
from hostsweep.sources.filesystem import FileDescriptor, FileItem, FileSystem

NOW = datetime(2024, 6, 1, 12, 0, 0)

TRUSTED_DIRECTORIES = (
    "C:\\Windows\\System32",
    "C:\\Windows",
    "C:\\Program Files",
    "C:\\Program Files (x86)",
)


class MemoryStore(ConfigStore):
    """In-memory configuration tree keyed by (store, subkey)."""

    def __init__(self) -> None:
        self.keys: dict[tuple[RootStore, str], dict[str, RegistryValue]] = {}
        self.denied: set[tuple[RootStore, str]] = set()
        self.opened: list[tuple[RootStore, str]] = []
        self.closed = 0

    def add_value(self, store: RootStore, subkey: str, name: str, data: Any, data_type: int = 1) -> None:
        values = self.keys.setdefault((store, subkey.lower()), {})
        values[name] = RegistryValue(name=name, data=data, data_type=data_type)

    def add_key(self, store: RootStore, subkey: str) -> None:
        self.keys.setdefault((store, subkey.lower()), {})

    def deny(self, store: RootStore, subkey: str) -> None:
        self.denied.add((store, subkey.lower()))

    def open_subkey(self, store: RootStore, path: str) -> Any | None:
        key = (store, path.lower())
        self.opened.append(key)
        if key in self.denied:
            raise PermissionError(13, "Access is denied")
        if key not in self.keys:
            return None
        return key

    def list_value_names(self, handle: Any) -> list[str]:
        return list(self.keys[handle])

    def get_value(self, handle: Any, name: str) -> RegistryValue:
        return self.keys[handle][name]

    def close(self, handle: Any) -> None:
        self.closed += 1


class MemoryFileSystem(FileSystem):
    """In-memory filesystem whose files can vanish after enumeration."""

    def __init__(self) -> None:
        self.files: dict[str, FileDescriptor] = {}
        self.dirs: set[str] = set()
        self.vanished: set[str] = set()
        self.failures: dict[str, str] = {}
        self.drive_roots: list[str] = []
        self.broken: set[str] = set()

    def add_file(
        self,
        path: str,
        hidden: bool = False,
        created: datetime | None = None,
        last_accessed: datetime | None = None,
    ) -> FileDescriptor:
        descriptor = FileDescriptor(
            name=os.path.basename(path),
            path=path,
            hidden=hidden,
            created=created or NOW - timedelta(hours=1),
            last_accessed=last_accessed or NOW - timedelta(minutes=5),
        )
        self.files[path] = descriptor
        parent = os.path.dirname(path)
        while parent and parent not in self.dirs:
            self.dirs.add(parent)
            next_parent = os.path.dirname(parent)
            if next_parent == parent:
                break
            parent = next_parent
        return descriptor

    def add_failure(self, path: str, message: str) -> None:
        """Make enumeration report path as unreadable."""
        self.failures[path] = message
        self.dirs.add(os.path.dirname(path))

    def exists(self, path: str) -> bool:
        return path in self.files and path not in self.vanished

    def is_dir(self, path: str) -> bool:
        return path in self.dirs

    def _below(self, root: str, path: str) -> bool:
        return path.startswith(root.rstrip(os.sep) + os.sep)

    def walk_files(self, root: str) -> Iterator[FileItem]:
        if root in self.broken:
            raise OSError(5, "I/O error")
        for path, message in self.failures.items():
            if self._below(root, path):
                yield ScanFailure(subject=path, message=message)
        for path, descriptor in self.files.items():
            if self._below(root, path):
                yield descriptor

    def list_files(self, directory: str, suffix: str = "") -> Iterator[FileItem]:
        if directory in self.broken:
            raise PermissionError(13, "Access is denied")
        for path, descriptor in self.files.items():
            if os.path.dirname(path) != directory:
                continue
            if descriptor.name.lower().endswith(suffix.lower()):
                yield descriptor

    def drives(self) -> list[str]:
        return list(self.drive_roots)


@pytest.fixture
def classifier() -> HeuristicClassifier:
    return HeuristicClassifier(
        keywords=DEFAULT_KEYWORDS,
        trusted_directories=TRUSTED_DIRECTORIES,
        trusted_names=DEFAULT_TRUSTED_NAMES,
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def filesystem() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def report_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def sink(report_stream: io.StringIO) -> ReportSink:
    return ReportSink(report_stream)


@pytest.fixture
def now() -> datetime:
    return NOW
