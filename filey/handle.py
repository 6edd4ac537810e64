"""FileHandle: a path value with filesystem operations attached."""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Optional, Union

from filey.errors import (
    AlreadyExists,
    FilesystemError,
    NotADirectory,
    NotFound,
    PathLike,
    os_errors,
    translate_os_errors,
)
from filey.kinds import FileKind, classify
from filey.paths import PathNormalizer
from filey.permissions import Permissions, chmod
from filey.units import format_size

logger = logging.getLogger(__name__)


_DEFAULT_NORMALIZER = PathNormalizer()


@dataclass(frozen=True, order=True)
class FileHandle:
    """
    A path, plus the operations that act on it.

    Handles compare, hash and sort by their exact path string. They are
    immutable: every transform returns a new handle and leaves this one
    alone. Nothing about the filesystem is cached; each call asks the OS.

    Parameters:
    - path (str or Path): Any path-like value.
    - normalizer (PathNormalizer, optional): Supplies the home and working
      directories used by the normalization methods.

    Example:
        >>> f = FileHandle("notes/todo.txt").create(FileKind.FILE)
        >>> f.move_to("archive").path
        'archive/todo.txt'
    """

    path: str
    normalizer: PathNormalizer = field(
        default=_DEFAULT_NORMALIZER, compare=False, repr=False
    )

    def __post_init__(self):
        object.__setattr__(self, "path", os.fspath(self.path))

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path

    def _with_path(self, path: PathLike) -> "FileHandle":
        return FileHandle(path, normalizer=self.normalizer)

    # ------------------------------
    # Path Components
    # ------------------------------

    @property
    def name(self) -> Optional[str]:
        """The final component, or None for a root or a path ending in '..'."""
        name = PurePath(self.path).name
        if not name or name == "..":
            return None
        return name

    @property
    def stem(self) -> Optional[str]:
        """The final component without its suffix."""
        if self.name is None:
            return None
        return PurePath(self.path).stem

    @property
    def parent(self) -> Optional["FileHandle"]:
        """
        The parent directory, or None for a root or an empty path.

        A single relative component has "." as its parent: ``FileHandle("src").parent``
        is ``FileHandle(".")``.
        """
        pure = PurePath(self.path)
        if self.path in ("", ".") or pure.parent == pure:
            return None
        return self._with_path(str(pure.parent))

    # ------------------------------
    # Classification
    # ------------------------------

    def classify(self) -> FileKind:
        """
        Return the kind of entry at this path.

        Raises:
        - NotFound: If the path does not exist.
        """
        return classify(self.path)

    def exists(self) -> bool:
        """True if anything, including a dangling symlink, exists here."""
        return os.path.lexists(self.path)

    def is_file(self) -> bool:
        return os.path.isfile(self.path)

    def is_dir(self) -> bool:
        return os.path.isdir(self.path)

    def is_symlink(self) -> bool:
        return os.path.islink(self.path)

    # ------------------------------
    # Metadata
    # ------------------------------

    @os_errors
    def size(self) -> int:
        """
        Return the size in bytes, or the number of entries for a directory.

        Symbolic links are followed.

        Raises:
        - NotFound: If the path, or a link's target, does not exist.
        - PermissionDenied: If the user lacks permissions.
        """
        if os.path.isdir(self.path):
            return len(os.listdir(self.path))
        return os.stat(self.path).st_size

    def human_size(self) -> str:
        """
        Return the size with a unit, e.g. ``17MiB``.

        For a directory this is the bare number of entries.
        """
        n = self.size()
        if os.path.isdir(self.path):
            return str(n)
        return format_size(n)

    def permissions(self) -> Permissions:
        return Permissions.from_path(self.path)

    def chmod(self, mode: Union[str, int]) -> "FileHandle":
        """
        Change permissions, e.g. ``chmod("u+x")`` or ``chmod(0o644)``.

        Returns:
        - FileHandle: This handle.
        """
        chmod(self.path, mode)
        return self

    @os_errors
    def list(self) -> List["FileHandle"]:
        """
        Return the direct entries of this directory, sorted by path.

        Raises:
        - NotFound: If the path does not exist.
        - NotADirectory: If the path is not a directory.
        """
        if not os.path.isdir(self.path):
            if not os.path.lexists(self.path):
                raise NotFound(self.path)
            raise NotADirectory(self.path)
        return sorted(self._with_path(os.path.join(self.path, n)) for n in os.listdir(self.path))

    # ------------------------------
    # Normalization
    # ------------------------------

    def absolutize(self, expand: bool = False) -> "FileHandle":
        """
        Return an absolute handle, resolving '.' and '..' without touching the filesystem.

        Raises:
        - HomeDirUnavailable: Only when `expand` is set and home cannot be read.
        """
        return self._with_path(self.normalizer.absolutize(self.path, expand=expand))

    def canonicalize(self) -> "FileHandle":
        """
        Return the real path with every symbolic link resolved.

        Raises:
        - NotFound: If any component is missing.
        - NotADirectory: If a non-final component is not a directory.
        """
        return self._with_path(self.normalizer.canonicalize(self.path))

    def expand_user(self) -> "FileHandle":
        """Return a handle with a leading '~' replaced by the home directory."""
        return self._with_path(self.normalizer.expand_user(self.path))

    def contract_user(self) -> str:
        """Return the path with a leading home directory replaced by '~'."""
        return self.normalizer.contract_user(self.path)

    # ------------------------------
    # Create and Remove
    # ------------------------------

    @os_errors
    def create(self, kind: FileKind) -> "FileHandle":
        """
        Create a file or a directory tree at this path.

        An existing file keeps its contents; existing directories are fine.

        Parameters:
        - kind (FileKind): FILE or DIRECTORY.

        Returns:
        - FileHandle: This handle.

        Raises:
        - ValueError: For other kinds; links are made with ``symlink``.
        """
        if kind is FileKind.FILE:
            with open(self.path, "a"):
                pass
        elif kind is FileKind.DIRECTORY:
            os.makedirs(self.path, exist_ok=True)
        else:
            raise ValueError(f"Cannot create a {kind}; use symlink() for links.")
        logger.debug("created %s %s", kind, self.path)
        return self

    @os_errors
    def remove(self) -> None:
        """
        Remove the entry at this path.

        Directories are removed with their contents. A symbolic link is
        removed itself, never its target.

        Raises:
        - NotFound: If the path does not exist.
        """
        if classify(self.path) is FileKind.DIRECTORY:
            shutil.rmtree(self.path)
        else:
            os.unlink(self.path)
        logger.debug("removed %s", self.path)

    # ------------------------------
    # Move, Copy and Link
    # ------------------------------

    def _destination(self, destination: PathLike) -> str:
        """
        Work out where an entry moved, copied or linked to `destination` lands.

        An existing directory receives the entry under its own name;
        anything else is used verbatim. The result must not exist yet.
        """
        destination = os.fspath(destination)
        if os.path.isdir(destination):
            if self.name is None:
                raise FilesystemError(self.path, "cannot determine the file name")
            target = os.path.join(destination, self.name)
        else:
            target = destination
        if os.path.lexists(target):
            raise AlreadyExists(target)
        return target

    def _require_source(self) -> None:
        if not os.path.lexists(self.path):
            raise NotFound(self.path)

    def move_to(self, destination: PathLike) -> "FileHandle":
        """
        Move or rename this entry.

        Parameters:
        - destination (str or Path): An existing directory to move into,
          or the exact new path.

        Returns:
        - FileHandle: A handle on the new location. This handle still
          names the old path, which no longer exists.

        Raises:
        - NotFound: If this path does not exist.
        - AlreadyExists: If the resolved destination exists.
        - FilesystemError: If the destination is on another device.
        """
        self._require_source()
        target = self._destination(destination)
        with translate_os_errors(self.path):
            os.rename(self.path, target)
        logger.debug("moved %s -> %s", self.path, target)
        return self._with_path(target)

    def copy(self, destination: PathLike) -> "FileHandle":
        """
        Copy this file, or this directory tree, to `destination`.

        Returns:
        - FileHandle: A handle on the copy.

        Raises:
        - NotFound: If this path does not exist.
        - AlreadyExists: If the resolved destination exists.
        """
        self._require_source()
        target = self._destination(destination)
        with translate_os_errors(self.path):
            if os.path.isdir(self.path):
                shutil.copytree(self.path, target, symlinks=True)
            else:
                shutil.copy2(self.path, target)
        logger.debug("copied %s -> %s", self.path, target)
        return self._with_path(target)

    def symlink(self, destination: PathLike) -> "FileHandle":
        """
        Create a symbolic link at `destination` pointing to this path.

        The link stores the absolutized source so it resolves from anywhere.

        Returns:
        - FileHandle: A handle on the link.

        Raises:
        - AlreadyExists: If the resolved destination exists.
        """
        target = self._destination(destination)
        source = self.normalizer.absolutize(self.path)
        with translate_os_errors(target):
            os.symlink(source, target, target_is_directory=os.path.isdir(source))
        logger.debug("linked %s -> %s", target, source)
        return self._with_path(target)

    def hard_link(self, destination: PathLike) -> "FileHandle":
        """
        Create a hard link to this file at `destination`.

        Returns:
        - FileHandle: A handle on the new link.

        Raises:
        - NotFound: If this path does not exist.
        - AlreadyExists: If the resolved destination exists.
        - PermissionDenied: If this path is a directory.
        """
        self._require_source()
        target = self._destination(destination)
        with translate_os_errors(self.path):
            os.link(self.path, target)
        logger.debug("hard linked %s -> %s", target, self.path)
        return self._with_path(target)

    # ------------------------------
    # Contents
    # ------------------------------

    @os_errors
    def read_bytes(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    @os_errors
    def read_text(self, encoding: str = "utf-8") -> str:
        with open(self.path, "r", encoding=encoding) as f:
            return f.read()

    @os_errors
    def write_bytes(self, data: bytes) -> "FileHandle":
        """Replace the file's contents, creating it if needed."""
        with open(self.path, "wb") as f:
            f.write(data)
        return self

    @os_errors
    def write_text(self, text: str, encoding: str = "utf-8") -> "FileHandle":
        """Replace the file's contents, creating it if needed."""
        with open(self.path, "w", encoding=encoding) as f:
            f.write(text)
        return self
