"""Read-only filesystem access for the sweep scanners."""

import ntpath
import os
import stat
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

import psutil

from hostsweep.core.logging import debug
from hostsweep.models.finding import ScanFailure


@dataclass(frozen=True)
class FileDescriptor:
    """Metadata of one file, captured when it was enumerated."""

    name: str
    path: str
    hidden: bool
    created: datetime
    last_accessed: datetime

    @property
    def extension(self) -> str:
        """Extension including the leading dot (e.g. ".exe")."""
        return ntpath.splitext(self.name)[1]

    @classmethod
    def from_stat(cls, path: str, st: os.stat_result) -> "FileDescriptor":
        name = ntpath.basename(path)
        attributes = getattr(st, "st_file_attributes", None)
        if attributes is not None:
            hidden = bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)
        else:
            hidden = name.startswith(".")

        # st_birthtime is the creation time where the platform records one
        created = getattr(st, "st_birthtime", None) or st.st_ctime
        return cls(
            name=name,
            path=path,
            hidden=hidden,
            created=datetime.fromtimestamp(created),
            last_accessed=datetime.fromtimestamp(st.st_atime),
        )


FileItem = FileDescriptor | ScanFailure

# datetime.fromtimestamp rejects out-of-range times with any of these
METADATA_ERRORS = (OSError, ValueError, OverflowError)


class FileSystem(ABC):
    """Abstract read-only filesystem used by the scanners."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        ...

    @abstractmethod
    def walk_files(self, root: str) -> Iterator[FileItem]:
        """Lazily yield every file below root, at any depth.

        Subdirectories that cannot be listed for lack of permission are
        skipped silently. Other per-entry problems are yielded as
        ScanFailure values so the caller can keep going.
        """
        ...

    @abstractmethod
    def list_files(self, directory: str, suffix: str = "") -> Iterator[FileItem]:
        """Yield files directly inside directory whose name ends with suffix."""
        ...

    @abstractmethod
    def drives(self) -> list[str]:
        """Root paths of all mounted drives."""
        ...


class LocalFileSystem(FileSystem):
    """The machine's own filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def walk_files(self, root: str) -> Iterator[FileItem]:
        pending = [root]
        while pending:
            current = pending.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except PermissionError:
                debug(f"Access denied, skipping {current}")
                continue
            except OSError as e:
                yield ScanFailure.from_exception(current, e)
                continue

            subdirs = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                        continue
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    st = entry.stat(follow_symlinks=False)
                    descriptor = FileDescriptor.from_stat(entry.path, st)
                except METADATA_ERRORS as e:
                    yield ScanFailure.from_exception(entry.path, e)
                    continue
                yield descriptor

            # Depth-first, keeping listing order among siblings
            pending.extend(reversed(subdirs))

    def list_files(self, directory: str, suffix: str = "") -> Iterator[FileItem]:
        suffix = suffix.lower()
        with os.scandir(directory) as it:
            entries = list(it)

        for entry in entries:
            if suffix and not entry.name.lower().endswith(suffix):
                continue
            try:
                if not entry.is_file():
                    continue
                descriptor = FileDescriptor.from_stat(entry.path, entry.stat())
            except METADATA_ERRORS as e:
                yield ScanFailure.from_exception(entry.path, e)
                continue
            yield descriptor

    def drives(self) -> list[str]:
        drives = []
        seen = set()
        for partition in psutil.disk_partitions(all=False):
            mountpoint = partition.mountpoint
            if not mountpoint or mountpoint in seen:
                continue
            seen.add(mountpoint)
            drives.append(mountpoint)
        return drives
