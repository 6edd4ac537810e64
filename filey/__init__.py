"""Convenience layer over the filesystem: one path value, many operations."""

import logging

from filey.batch import catenate, create_all, remove_all
from filey.config import lookup_home
from filey.errors import (
    AlreadyExists,
    FilesystemError,
    HomeDirUnavailable,
    NotADirectory,
    NotFound,
    PermissionDenied,
)
from filey.handle import FileHandle
from filey.kinds import FileKind, classify
from filey.paths import PathNormalizer
from filey.permissions import Permission, Permissions, symbolic_to_octal
from filey.units import ByteUnit, convert, format_size, parse_size

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AlreadyExists",
    "ByteUnit",
    "FileHandle",
    "FileKind",
    "FilesystemError",
    "HomeDirUnavailable",
    "NotADirectory",
    "NotFound",
    "PathNormalizer",
    "Permission",
    "PermissionDenied",
    "Permissions",
    "catenate",
    "classify",
    "convert",
    "create_all",
    "format_size",
    "lookup_home",
    "parse_size",
    "remove_all",
    "symbolic_to_octal",
]
