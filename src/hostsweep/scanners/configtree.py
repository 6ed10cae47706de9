"""Configuration-tree (registry) scanner.

Inspects the values stored directly under a configured key and
reports the ones whose name or data matches a keyword. Subkeys are
not descended into.
"""

from collections.abc import Iterator
from typing import ClassVar

from hostsweep.core.classifier import HeuristicClassifier
from hostsweep.models.finding import Finding, ScanItem, Tag
from hostsweep.scanners.base import BaseScanner
from hostsweep.sources.configstore import ConfigStore, RootStore, split_root_path


class ConfigTreeScanner(BaseScanner):
    """Scanner for registry value entries."""

    name: ClassVar[str] = "configtree"
    description: ClassVar[str] = "Registry values under configured keys"

    def __init__(self, classifier: HeuristicClassifier, store: ConfigStore) -> None:
        super().__init__(classifier)
        self.store = store

    def scan(self, root_path: str) -> Iterator[ScanItem]:
        """Scan one "<ROOT_STORE>\\subkey" path.

        Unsupported root stores and missing keys yield nothing. An
        access failure ends the root with a single ScanFailure.
        """
        split = split_root_path(root_path)
        if split is None:
            return
        store, subkey = split
        yield from self.guarded(root_path, self._scan_key(root_path, store, subkey))

    def _scan_key(
        self, root_path: str, store: RootStore, subkey: str
    ) -> Iterator[ScanItem]:
        handle = self.store.open_subkey(store, subkey)
        if handle is None:
            return

        try:
            for value_name in self.store.list_value_names(handle):
                value = self.store.get_value(handle, value_name).display()
                if self.classifier.is_suspicious(value_name, value):
                    yield Finding(
                        tag=Tag.SUSPICIOUS,
                        subject=f"{root_path}\\{value_name}",
                        detail=value if value is not None else "",
                    )
        finally:
            self.store.close(handle)
