"""Byte units and human readable sizes."""

import re
from enum import Enum
from typing import Union

KB = 10 ** 3
MB = 10 ** 6
GB = 10 ** 9
TB = 10 ** 12
PB = 10 ** 15
EB = 10 ** 18


class ByteUnit(Enum):
    """Binary units of information. The value is the unit's size in bytes."""

    KiB = 1024 ** 1
    MiB = 1024 ** 2
    GiB = 1024 ** 3
    TiB = 1024 ** 4
    PiB = 1024 ** 5
    EiB = 1024 ** 6

    @property
    def suffix(self) -> str:
        return self.name

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.name


# Indexed by the number of base-1024 digits of a byte count, minus one
_BUCKETS = (None,) + tuple(ByteUnit)

_SUFFIXES = {
    "": 1,
    "B": 1,
    "K": ByteUnit.KiB.value, "KIB": ByteUnit.KiB.value, "KB": KB,
    "M": ByteUnit.MiB.value, "MIB": ByteUnit.MiB.value, "MB": MB,
    "G": ByteUnit.GiB.value, "GIB": ByteUnit.GiB.value, "GB": GB,
    "T": ByteUnit.TiB.value, "TIB": ByteUnit.TiB.value, "TB": TB,
    "P": ByteUnit.PiB.value, "PIB": ByteUnit.PiB.value, "PB": PB,
    "E": ByteUnit.EiB.value, "EIB": ByteUnit.EiB.value, "EB": EB,
}


def _check_count(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Byte count must be an integer, got {type(n).__name__}.")
    if n < 0:
        raise ValueError(f"Byte count must be non-negative, got {n}.")


def unit_for(n: int) -> Union[ByteUnit, None]:
    """
    Pick the unit a byte count is displayed in.

    Counts are bucketed by how many base-1024 digits they have: 1 digit is
    plain bytes, 2 digits KiB, 3 digits MiB and so on up to EiB. KiB starts
    at 1024, so 1000..1023 are still plain bytes.

    Parameters:
    - n (int): Byte count.

    Returns:
    - ByteUnit or None: None when the count is shown as bare bytes.
    """
    _check_count(n)
    digits = max(1, -(-n.bit_length() // 10))
    if digits > len(_BUCKETS):
        return None
    return _BUCKETS[digits - 1]


def convert(n: int, unit: ByteUnit) -> float:
    """
    Convert a byte count to whole units of `unit`.

    Parameters:
    - n (int): Byte count.
    - unit (ByteUnit): Target unit.

    Returns:
    - float: ``n // unit``, e.g. ``convert(1024 ** 3, ByteUnit.MiB) == 1024.0``.
    """
    _check_count(n)
    return float(n // unit.value)


def format_size(n: int) -> str:
    """
    Render a byte count as a compact string such as ``17MiB`` or ``512B``.

    The count is divided by the unit with integer division before it is
    rounded, so ``1048575`` bytes shows as ``1023KiB`` rather than ``1024KiB``.
    Anything below 1024, including 1000..1023, shows as ``<n>B``.

    Parameters:
    - n (int): Byte count.

    Returns:
    - str: The magnitude followed by the unit suffix.

    Raises:
    - TypeError: If `n` is not an integer.
    - ValueError: If `n` is negative.
    """
    unit = unit_for(n)
    if unit is None:
        return f"{n}B"
    return f"{round(convert(n, unit))}{unit.suffix}"


def parse_size(text: Union[str, int]) -> int:
    """
    Convert a human readable size to bytes.

    IEC suffixes (``KiB``) and bare letters (``K``) are powers of 1024,
    SI suffixes (``KB``) are powers of 1000. Case is ignored.

    Parameters:
    - text (str or int): Size string (e.g., '1KiB', '5MB', '2G') or integer bytes.

    Returns:
    - int: Size in bytes.

    Raises:
    - ValueError: If the format is invalid.
    - TypeError: If the input type is not supported.
    """
    if isinstance(text, int) and not isinstance(text, bool):
        _check_count(text)
        return text
    if not isinstance(text, str):
        raise TypeError("parse_size expects a string or integer.")
    match = re.fullmatch(r"\s*(\d+)\s*([A-Za-z]*)\s*", text)
    if not match or match.group(2).upper() not in _SUFFIXES:
        raise ValueError(f"Invalid size format: {text}")
    num, unit = match.groups()
    return int(num) * _SUFFIXES[unit.upper()]
