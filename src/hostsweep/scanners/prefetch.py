"""Prefetch (execution-cache) scanner.

Every program launched on the host leaves a record in the prefetch
directory; a record whose name matches a keyword is a weak signal that
the program ran.
"""

from collections.abc import Iterator
from typing import ClassVar

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.models.finding import Finding, ScanFailure, ScanItem, Tag
from hostsweep.scanners.base import BaseScanner
from hostsweep.sources.filesystem import FileSystem

PREFETCH_SUBJECT = "Prefetch"


class PrefetchScanner(BaseScanner):
    """Scanner for execution-cache records."""

    name: ClassVar[str] = "prefetch"
    description: ClassVar[str] = "Execution-cache records"

    def __init__(
        self,
        classifier: HeuristicClassifier,
        filesystem: FileSystem,
        prefetch_dir: str,
        suffix: str = ".pf",
    ) -> None:
        super().__init__(classifier)
        self.filesystem = filesystem
        self.prefetch_dir = prefetch_dir
        self.suffix = suffix

    def scan(self) -> Iterator[ScanItem]:
        if not self.prefetch_dir or not self.filesystem.is_dir(self.prefetch_dir):
            return
        yield from self.guarded(PREFETCH_SUBJECT, self._scan_records())

    def _scan_records(self) -> Iterator[ScanItem]:
        for item in self.filesystem.list_files(self.prefetch_dir, self.suffix):
            if isinstance(item, ScanFailure):
                yield item
            elif self.classifier.is_suspicious(item.name, item.path):
                yield Finding(
                    tag=Tag.PREFETCH,
                    subject=item.path,
                    last_accessed=item.last_accessed,
                    created=item.created,
                )
