"""Base scanner interface for hostsweep."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any, ClassVar

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.models.finding import ScanFailure, ScanItem


class BaseScanner(ABC):
    """Base class for all artifact scanners.

    Scanners never raise for problems with the data they inspect.
    They yield a ScanFailure in place of the findings they could not
    produce and carry on with the next item.
    """

    # Scanner metadata (must be set by subclasses)
    name: ClassVar[str]
    description: ClassVar[str]

    def __init__(self, classifier: HeuristicClassifier) -> None:
        self.classifier = classifier

    @abstractmethod
    def scan(self, *args: Any) -> Iterator[ScanItem]:
        """Scan the source and yield findings in discovery order."""
        ...

    def guarded(self, subject: str, items: Iterator[ScanItem]) -> Iterator[ScanItem]:
        """Turn an OSError that escapes items into one ScanFailure.

        Args:
            subject: Subject reported if the scan fails
            items: Scan items to pass through

        Yields:
            The scan items, followed by at most one ScanFailure
        """
        try:
            yield from items
        except OSError as e:
            yield ScanFailure.from_exception(subject, e)
