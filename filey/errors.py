"""Typed failures raised by filey.

Every class derives from the matching built-in exception, so callers that
already catch ``FileNotFoundError`` or ``PermissionError`` keep working.
"""

import errno
import os
from contextlib import contextmanager
from functools import wraps
from typing import Callable, Iterator, Optional, TypeVar, Union

PathLike = Union[str, "os.PathLike[str]"]

_R = TypeVar("_R")


class FilesystemError(OSError):
    """Catch-all for a failed filesystem call.

    Parameters:
    - path (str or PathLike): The path the operation failed on.
    - message (str, optional): Human readable reason.
    - code (int, optional): The errno of the underlying failure.
    """

    def __init__(self, path: PathLike, message: Optional[str] = None, code: Optional[int] = None):
        self.path = os.fspath(path)
        reason = message or (os.strerror(code) if code else "filesystem error")
        super().__init__(code or 0, reason, self.path)

    def __str__(self) -> str:
        return f"{self.path}: {self.strerror}"


class NotFound(FilesystemError, FileNotFoundError):
    """No such file or directory."""

    def __init__(self, path: PathLike, message: str = "No such file or directory"):
        super().__init__(path, message, errno.ENOENT)


class NotADirectory(FilesystemError, NotADirectoryError):
    """A directory was required."""

    def __init__(self, path: PathLike, message: str = "Not a directory"):
        super().__init__(path, message, errno.ENOTDIR)


class AlreadyExists(FilesystemError, FileExistsError):
    """The destination is already taken."""

    def __init__(self, path: PathLike, message: str = "File exists"):
        super().__init__(path, message, errno.EEXIST)


class PermissionDenied(FilesystemError, PermissionError):
    def __init__(self, path: PathLike, message: str = "Permission denied"):
        super().__init__(path, message, errno.EACCES)


class HomeDirUnavailable(FilesystemError):
    """The home directory could not be read from the environment."""

    def __init__(self, variable: str, message: str):
        self.variable = variable
        super().__init__(f"${variable}", message)


_BY_ERRNO = {
    errno.ENOENT: NotFound,
    errno.ENOTDIR: NotADirectory,
    errno.EEXIST: AlreadyExists,
    errno.ENOTEMPTY: AlreadyExists,
    errno.EACCES: PermissionDenied,
    errno.EPERM: PermissionDenied,
}


def from_os_error(exc: OSError, path: PathLike) -> FilesystemError:
    """Map an ``OSError`` to the matching typed failure."""
    if isinstance(exc, FilesystemError):
        return exc
    failing = exc.filename if exc.filename is not None else path
    cls = _BY_ERRNO.get(exc.errno)
    if cls is None:
        return FilesystemError(failing, exc.strerror or str(exc), exc.errno)
    translated = cls(failing, exc.strerror) if exc.strerror else cls(failing)
    translated.errno = exc.errno
    return translated


@contextmanager
def translate_os_errors(path: PathLike) -> Iterator[None]:
    """Re-raise any ``OSError`` in the block as a typed failure naming `path`."""
    try:
        yield
    except FilesystemError:
        raise
    except OSError as e:
        raise from_os_error(e, path) from e


def os_errors(func: Callable[..., _R]) -> Callable[..., _R]:
    """Wrap a ``FileHandle`` method so OS failures name the handle's path."""

    @wraps(func)
    def wrapper(self, *args, **kwargs) -> _R:
        with translate_os_errors(self.path):
            return func(self, *args, **kwargs)

    return wrapper
