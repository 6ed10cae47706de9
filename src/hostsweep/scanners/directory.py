"""Recursive directory scanner.

Each file outside the trusted OS locations is checked for the hidden
attribute, a keyword match, and three derived inferences: the file
vanished (DELETED), its name suggests obfuscation (RENAME), or it is
an executable whose last access time is taken as its run time
(EXECUTED). The tags are independent, so one file can produce several
lines.
"""

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from typing import ClassVar

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.models.finding import Finding, ScanFailure, ScanItem, Tag
from hostsweep.scanners.base import BaseScanner
from hostsweep.sources.filesystem import FileDescriptor, FileSystem

EXECUTABLE_EXTENSION = ".exe"
RENAME_NOTE = "Renamed or suspiciously modified"


class DirectoryScanner(BaseScanner):
    """Scanner for files below a directory."""

    name: ClassVar[str] = "directory"
    description: ClassVar[str] = "Files below configured directories"

    def __init__(
        self,
        classifier: HeuristicClassifier,
        filesystem: FileSystem,
        clock: Callable[[], datetime] = datetime.now,
        deleted_age: timedelta = timedelta(hours=24),
        on_file: Callable[[FileDescriptor], None] | None = None,
    ) -> None:
        super().__init__(classifier)
        self.filesystem = filesystem
        self.clock = clock
        self.deleted_age = deleted_age
        self.on_file = on_file
        self.files_examined = 0

    def scan(self, directory: str) -> Iterator[ScanItem]:
        """Walk directory and yield findings file by file.

        Args:
            directory: Root directory; a missing one yields nothing

        Yields:
            Findings, and a ScanFailure for each file that could not be checked
        """
        if not self.filesystem.is_dir(directory):
            return

        for item in self.filesystem.walk_files(directory):
            if isinstance(item, ScanFailure):
                yield item
                continue

            if self.classifier.is_trusted_path(item.path):
                continue

            self.files_examined += 1
            if self.on_file is not None:
                self.on_file(item)
            try:
                yield from self.check_file(item)
            except OSError as e:
                yield ScanFailure.from_exception(item.path, e)

    def check_file(self, file: FileDescriptor) -> Iterator[Finding]:
        """Classify a single non-trusted file."""
        if file.hidden:
            yield self._timestamped(Tag.HIDDEN, file)

        if self.classifier.is_suspicious(file.name, file.path):
            yield self._timestamped(Tag.SUSPICIOUS, file)

        yield from self.infer_operations(file)

    def infer_operations(self, file: FileDescriptor) -> Iterator[Finding]:
        """Derive deleted/renamed/executed hints for a file."""
        if (
            not self.filesystem.exists(file.path)
            and file.created < self.clock() - self.deleted_age
        ):
            yield Finding(tag=Tag.DELETED, subject=file.path, created=file.created)

        if self.classifier.is_suspicious(file.name, file.path):
            yield Finding(tag=Tag.RENAME, subject=file.path, detail=RENAME_NOTE)

        if file.extension.lower() == EXECUTABLE_EXTENSION:
            yield Finding(
                tag=Tag.EXECUTED,
                subject=file.path,
                last_accessed=file.last_accessed,
            )

    @staticmethod
    def _timestamped(tag: Tag, file: FileDescriptor) -> Finding:
        return Finding(
            tag=tag,
            subject=file.path,
            last_accessed=file.last_accessed,
            created=file.created,
        )
