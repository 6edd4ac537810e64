"""Classification of filesystem entries."""

import os
import stat
from enum import Enum

from filey.errors import PathLike, translate_os_errors


class FileKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


def kind_of_mode(mode: int) -> FileKind:
    """Map an ``st_mode`` value to a FileKind."""
    if stat.S_ISLNK(mode):
        return FileKind.SYMLINK
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    if stat.S_ISREG(mode):
        return FileKind.FILE
    return FileKind.UNKNOWN


def classify(path: PathLike) -> FileKind:
    """
    Determine what kind of entry lives at `path`.

    Symbolic links are reported as links, not as their targets, and a
    dangling link is still a SYMLINK. The result is never cached.

    Parameters:
    - path (str or Path): The path to classify.

    Returns:
    - FileKind: The kind of the entry.

    Raises:
    - NotFound: If nothing exists at `path`.
    """
    with translate_os_errors(path):
        return kind_of_mode(os.lstat(path).st_mode)
