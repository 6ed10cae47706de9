"""Recycle Bin scanner.

Looks for keyword matches among the files still held in each drive's
trash container. Trash contents are never treated as trusted.
"""

import os
from collections.abc import Iterator
from typing import ClassVar

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.models.finding import Finding, ScanFailure, ScanItem, Tag
from hostsweep.scanners.base import BaseScanner
from hostsweep.sources.filesystem import FileSystem

TRASH_SUBJECT = "Recycle Bin"


class TrashScanner(BaseScanner):
    """Scanner for deleted files pending removal."""

    name: ClassVar[str] = "trash"
    description: ClassVar[str] = "Recycle Bin contents on every drive"

    def __init__(
        self,
        classifier: HeuristicClassifier,
        filesystem: FileSystem,
        trash_dirname: str = "$Recycle.Bin",
    ) -> None:
        super().__init__(classifier)
        self.filesystem = filesystem
        self.trash_dirname = trash_dirname

    def scan(self) -> Iterator[ScanItem]:
        yield from self.guarded(TRASH_SUBJECT, self._scan_drives())

    def _scan_drives(self) -> Iterator[ScanItem]:
        for drive in self.filesystem.drives():
            trash_path = os.path.join(drive, self.trash_dirname)
            if not self.filesystem.is_dir(trash_path):
                continue

            for item in self.filesystem.walk_files(trash_path):
                if isinstance(item, ScanFailure):
                    yield item
                elif self.classifier.is_suspicious(item.name, item.path):
                    yield Finding(tag=Tag.DELETED, subject=item.path, created=item.created)
