"""Registry value to display-string coercion.

Every value kind has a defined rendering; kinds without one become an
opaque placeholder instead of failing the scan.
"""

from typing import Any

# Registry data types
REG_NONE = 0x00000000
REG_SZ = 0x00000001
REG_EXPAND_SZ = 0x00000002
REG_BINARY = 0x00000003
REG_DWORD = 0x00000004
REG_DWORD_BIG_ENDIAN = 0x00000005
REG_LINK = 0x00000006
REG_MULTI_SZ = 0x00000007
REG_RESOURCE_LIST = 0x00000008
REG_FULL_RESOURCE_DESCRIPTOR = 0x00000009
REG_RESOURCE_REQUIREMENTS_LIST = 0x0000000A
REG_QWORD = 0x0000000B

REG_TYPE_NAMES = {
    REG_NONE: "REG_NONE",
    REG_SZ: "REG_SZ",
    REG_EXPAND_SZ: "REG_EXPAND_SZ",
    REG_BINARY: "REG_BINARY",
    REG_DWORD: "REG_DWORD",
    REG_DWORD_BIG_ENDIAN: "REG_DWORD_BIG_ENDIAN",
    REG_LINK: "REG_LINK",
    REG_MULTI_SZ: "REG_MULTI_SZ",
    REG_RESOURCE_LIST: "REG_RESOURCE_LIST",
    REG_FULL_RESOURCE_DESCRIPTOR: "REG_FULL_RESOURCE_DESCRIPTOR",
    REG_RESOURCE_REQUIREMENTS_LIST: "REG_RESOURCE_REQUIREMENTS_LIST",
    REG_QWORD: "REG_QWORD",
}

TEXT_TYPES = frozenset({REG_SZ, REG_EXPAND_SZ, REG_LINK})
NUMBER_TYPES = frozenset({REG_DWORD, REG_DWORD_BIG_ENDIAN, REG_QWORD})


def type_name(data_type: int) -> str:
    return REG_TYPE_NAMES.get(data_type, f"UNKNOWN({data_type})")


def _text(data: Any) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-16-le", errors="replace").rstrip("\x00")
    return str(data)


def coerce_value(data: Any, data_type: int) -> str | None:
    """Convert raw value data into the string shown in the report.

    Args:
        data: Value data as returned by the store
        data_type: Registry data type

    Returns:
        Display string, or None when the value has no data
    """
    if data is None:
        return None

    if data_type in TEXT_TYPES:
        return _text(data)

    if data_type in NUMBER_TYPES:
        if isinstance(data, int):
            return str(data)
        return _text(data)

    if data_type == REG_BINARY:
        if isinstance(data, (bytes, bytearray)):
            return bytes(data).hex()
        return str(data)

    if data_type == REG_MULTI_SZ:
        if isinstance(data, (list, tuple)):
            return ", ".join(str(item) for item in data)
        return _text(data)

    # Opaque kinds: keep raw bytes inspectable, otherwise just name the type
    if isinstance(data, (bytes, bytearray)) and data:
        return bytes(data).hex()
    return f"<{type_name(data_type)}>"
