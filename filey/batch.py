"""Operations over several paths at once."""

import logging
from typing import List

from filey.errors import PathLike
from filey.handle import FileHandle
from filey.kinds import FileKind

logger = logging.getLogger(__name__)


def create_all(kind: FileKind, *paths: PathLike) -> List[FileHandle]:
    """
    Create every path that does not exist yet.

    Parameters:
    - kind (FileKind): FILE or DIRECTORY.
    - *paths (str or Path): Paths to create.

    Returns:
    - List[FileHandle]: Handles for all of `paths`, in order.
    """
    handles = []
    for path in paths:
        handle = FileHandle(path)
        if handle.exists():
            logger.debug("skipping existing %s", handle)
        else:
            handle.create(kind)
        handles.append(handle)
    return handles


def remove_all(*paths: PathLike) -> List[FileHandle]:
    """
    Remove every path that exists; missing paths are skipped.

    Returns:
    - List[FileHandle]: Handles for the paths that were removed.
    """
    removed = []
    for path in paths:
        handle = FileHandle(path)
        if handle.exists():
            handle.remove()
            removed.append(handle)
    return removed


def catenate(*paths: PathLike, encoding: str = "utf-8") -> str:
    """
    Concatenate the text of regular files, each followed by a newline.

    Paths that are not regular files are skipped.

    Parameters:
    - *paths (str or Path): Files to read, in order.
    - encoding (str): Text encoding of the files.

    Returns:
    - str: The combined text.
    """
    parts = []
    for path in paths:
        handle = FileHandle(path)
        if not handle.is_file():
            continue
        parts.append(handle.read_text(encoding=encoding))
        parts.append("\n")
    return "".join(parts)
