"""Read-only data sources inspected by the sweep."""

from hostsweep.sources.configstore import ConfigStore, RegistryValue, RootStore, WinRegStore
from hostsweep.sources.filesystem import FileDescriptor, FileSystem, LocalFileSystem

__all__ = [
    "ConfigStore",
    "FileDescriptor",
    "FileSystem",
    "LocalFileSystem",
    "RegistryValue",
    "RootStore",
    "WinRegStore",
]
