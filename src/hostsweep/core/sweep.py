"""Sweep orchestration for hostsweep.

Runs the scanner passes strictly in order (registry, directories,
trash, prefetch) and streams their output into the report sink. A
ScanFailure becomes an ERROR line; nothing that goes wrong inside one
pass stops the next one.
"""

import time
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.core.errors import UnsupportedPlatformError
from hostsweep.core.logging import ProgressReporter, debug, info, warning
from hostsweep.core.report import REPORT_TITLE, ReportSink
from hostsweep.core.sysinfo import last_boot_time, last_reset_time
from hostsweep.models.config import SweepConfig
from hostsweep.models.finding import ScanFailure, ScanItem
from hostsweep.models.summary import SweepSummary
from hostsweep.scanners import ConfigTreeScanner, DirectoryScanner, PrefetchScanner, TrashScanner
from hostsweep.scanners.prefetch import PREFETCH_SUBJECT
from hostsweep.scanners.trash import TRASH_SUBJECT
from hostsweep.sources.configstore import ConfigStore, WinRegStore
from hostsweep.sources.filesystem import FileSystem, LocalFileSystem


def default_config_store() -> ConfigStore | None:
    """Open the live registry, or return None where there is none."""
    try:
        return WinRegStore()
    except UnsupportedPlatformError as e:
        warning(f"{e}; skipping registry scan")
        return None


class SweepEngine:
    """Runs one complete sweep into a report sink."""

    def __init__(
        self,
        config: SweepConfig,
        store: ConfigStore | None = None,
        filesystem: FileSystem | None = None,
        clock: Callable[[], datetime] = datetime.now,
        system_info: Callable[[], tuple[str, str]] | None = None,
    ) -> None:
        self.config = config
        self.classifier = HeuristicClassifier.from_config(config)
        self.store = store
        self.filesystem = filesystem or LocalFileSystem()
        self.clock = clock
        self.system_info = system_info or (lambda: (last_boot_time(), last_reset_time()))

    def run(self, sink: ReportSink) -> SweepSummary:
        """Execute every pass and return a summary of what was written."""
        run_id = uuid4()
        started_at = datetime.now(UTC)
        start = time.perf_counter()
        debug(f"Sweep {run_id} started", run_id=str(run_id))

        sink.heading(REPORT_TITLE)
        sink.blank()
        self._write_system_info(sink)

        self._scan_registry(sink)
        files_examined = self._scan_directories(sink)

        sink.blank()
        sink.heading("Scanning Recycle Bin for deleted files...")
        trash = TrashScanner(self.classifier, self.filesystem, self.config.trash_dirname)
        self._drain(sink, TRASH_SUBJECT, trash.scan())

        sink.blank()
        sink.heading("Scanning Prefetch for suspicious files...")
        prefetch = PrefetchScanner(
            self.classifier,
            self.filesystem,
            self.config.prefetch_directory,
            self.config.prefetch_suffix,
        )
        self._drain(sink, PREFETCH_SUBJECT, prefetch.scan())

        sink.blank()
        sink.heading("Scan completed.")

        summary = SweepSummary(
            run_id=run_id,
            report_path=sink.path,
            started_at=started_at,
            completed_at=datetime.now(UTC),
            duration_ms=int((time.perf_counter() - start) * 1000),
            files_examined=files_examined,
            findings={tag.value: count for tag, count in sink.counts.items()},
            errors=sink.error_count,
        )
        info(f"Sweep complete: {sum(sink.counts.values())} findings, {summary.errors} errors")
        return summary

    def _write_system_info(self, sink: ReportSink) -> None:
        try:
            boot_time, reset_time = self.system_info()
        except Exception as e:
            self._emit(sink, ScanFailure.from_exception("System info", e))
            return
        sink.write_metadata(boot_time, reset_time)

    def _scan_registry(self, sink: ReportSink) -> None:
        if not self.config.registry_roots:
            return
        store = self.store if self.store is not None else default_config_store()
        if store is None:
            return

        scanner = ConfigTreeScanner(self.classifier, store)
        for root in self.config.registry_roots:
            sink.heading(f"Scanning: {root}")
            self._drain(sink, root, scanner.scan(root))

    def _scan_directories(self, sink: ReportSink) -> int:
        progress = ProgressReporter(description="Scanning files")
        scanner = DirectoryScanner(
            self.classifier,
            self.filesystem,
            clock=self.clock,
            deleted_age=timedelta(hours=self.config.deleted_age_hours),
            on_file=lambda _file: progress.update(),
        )
        for directory in self.config.scan_directories:
            if not directory:
                continue
            sink.heading(f"Scanning directory: {directory}")
            progress.start_root(directory)
            self._drain(sink, directory, scanner.scan(directory))
        progress.finish()
        return scanner.files_examined

    def _drain(self, sink: ReportSink, subject: str, items: Iterator[ScanItem]) -> None:
        """Write every item of one pass, isolating unexpected OS failures."""
        try:
            for item in items:
                self._emit(sink, item)
        except OSError as e:
            self._emit(sink, ScanFailure.from_exception(subject, e))

    @staticmethod
    def _emit(sink: ReportSink, item: ScanItem) -> None:
        finding = item.to_finding() if isinstance(item, ScanFailure) else item
        sink.write_finding(finding)
