"""Artifact scanners for hostsweep."""

from hostsweep.scanners.base import BaseScanner
from hostsweep.scanners.configtree import ConfigTreeScanner
from hostsweep.scanners.directory import DirectoryScanner
from hostsweep.scanners.prefetch import PrefetchScanner
from hostsweep.scanners.trash import TrashScanner

__all__ = [
    "BaseScanner",
    "ConfigTreeScanner",
    "DirectoryScanner",
    "PrefetchScanner",
    "TrashScanner",
]
