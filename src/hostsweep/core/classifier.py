"""Keyword heuristic and trusted-path filter for hostsweep."""

import ntpath
from collections.abc import Iterable

from hostsweep.models.config import SweepConfig


class HeuristicClassifier:
    """Decides whether a name/value pair looks suspicious.

    Matching is a plain case-insensitive substring test, so short
    keywords such as "red" also hit unrelated names like
    "vc_redist.x64.exe".
    """

    def __init__(
        self,
        keywords: Iterable[str],
        trusted_directories: Iterable[str] = (),
        trusted_names: Iterable[str] = (),
    ) -> None:
        self.keywords = tuple(k.casefold() for k in keywords)
        # Unresolved special folders arrive as "" and would prefix-match everything
        self.trusted_directories = tuple(d.casefold() for d in trusted_directories if d)
        self.trusted_names = frozenset(n.casefold() for n in trusted_names)

    @classmethod
    def from_config(cls, config: SweepConfig) -> "HeuristicClassifier":
        return cls(
            keywords=config.keywords,
            trusted_directories=config.trusted_directories,
            trusted_names=config.trusted_names,
        )

    def is_suspicious(self, name: str | None, value: str | None = None) -> bool:
        """Check whether any keyword occurs in name or value.

        Args:
            name: Value name, file name, etc. (may be None or empty)
            value: Value data, full path, etc. (may be None or empty)

        Returns:
            True if at least one keyword is a substring of either argument
        """
        haystacks = [s.casefold() for s in (name, value) if s]
        if not haystacks:
            return False
        return any(keyword in text for keyword in self.keywords for text in haystacks)

    def is_trusted_path(self, path: str) -> bool:
        """Check whether a file belongs to a well-known OS location.

        Directory matching is a string prefix test without separator
        boundaries: a trusted "C:\\Windows" also covers "C:\\WindowsApps".
        """
        folded = path.casefold()
        if any(folded.startswith(prefix) for prefix in self.trusted_directories):
            return True
        return ntpath.basename(folded) in self.trusted_names
