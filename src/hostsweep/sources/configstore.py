"""Read-only access to the registry-like configuration store."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from hostsweep.core.errors import UnsupportedPlatformError
from hostsweep.core.values import coerce_value, type_name


class RootStore(str, Enum):
    """The two addressable root stores."""

    MACHINE = "HKEY_LOCAL_MACHINE"
    USER = "HKEY_CURRENT_USER"


def split_root_path(path: str) -> tuple[RootStore, str] | None:
    """Split "<ROOT_STORE>\\sub\\key" into its store and subkey path.

    Returns:
        (store, subkey) or None when the prefix names an unsupported store
    """
    head, _, subkey = path.partition("\\")
    for store in RootStore:
        if head.upper() == store.value:
            return store, subkey
    return None


@dataclass(frozen=True)
class RegistryValue:
    """A value read from the store, before display coercion."""

    name: str
    data: Any
    data_type: int

    @property
    def type_name(self) -> str:
        return type_name(self.data_type)

    def display(self) -> str | None:
        return coerce_value(self.data, self.data_type)


class ConfigStore(ABC):
    """Abstract configuration-tree store.

    Implementations never write to the underlying store.
    """

    @abstractmethod
    def open_subkey(self, store: RootStore, path: str) -> Any | None:
        """Open a subkey read-only.

        Returns:
            Opaque handle, or None if the key does not exist
        """
        ...

    @abstractmethod
    def list_value_names(self, handle: Any) -> list[str]:
        """Names of the values stored directly under the key."""
        ...

    @abstractmethod
    def get_value(self, handle: Any, name: str) -> RegistryValue:
        ...

    def close(self, handle: Any) -> None:
        """Release a handle returned by open_subkey."""
        return None


class WinRegStore(ConfigStore):
    """Live Windows registry, backed by the standard winreg module."""

    def __init__(self) -> None:
        if sys.platform != "win32":
            raise UnsupportedPlatformError("Windows registry", sys.platform)

        import winreg

        self._winreg = winreg
        self._roots = {
            RootStore.MACHINE: winreg.HKEY_LOCAL_MACHINE,
            RootStore.USER: winreg.HKEY_CURRENT_USER,
        }

    def open_subkey(self, store: RootStore, path: str) -> Any | None:
        try:
            return self._winreg.OpenKey(
                self._roots[store], path, 0, self._winreg.KEY_READ
            )
        except FileNotFoundError:
            return None

    def list_value_names(self, handle: Any) -> list[str]:
        _, value_count, _ = self._winreg.QueryInfoKey(handle)
        names = []
        for index in range(value_count):
            try:
                name, _, _ = self._winreg.EnumValue(handle, index)
            except OSError:
                # Values removed while enumerating
                break
            names.append(name)
        return names

    def get_value(self, handle: Any, name: str) -> RegistryValue:
        data, data_type = self._winreg.QueryValueEx(handle, name)
        return RegistryValue(name=name, data=data, data_type=data_type)

    def close(self, handle: Any) -> None:
        self._winreg.CloseKey(handle)
