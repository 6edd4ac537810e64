"""Path normalization: absolutize, canonicalize and tilde expansion."""

import logging
import os
from typing import Callable, Mapping, Optional, Union

from filey.config import lookup_home
from filey.errors import PathLike, translate_os_errors

logger = logging.getLogger(__name__)


TILDE = "~"


class PathNormalizer:
    """
    Pure path-string transforms relative to a home directory and a working directory.

    Parameters:
    - home (str, optional): Home directory. When omitted it is read from
      `environ` each time a tilde operation needs it.
    - environ (Mapping, optional): Environment used for the home lookup.
      Defaults to ``os.environ``.
    - cwd (str or callable, optional): Working directory for relative paths,
      or a callable returning it. Defaults to ``os.getcwd``.
    """

    def __init__(
        self,
        home: Optional[PathLike] = None,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Union[PathLike, Callable[[], str], None] = None,
    ):
        self._home = os.fspath(home) if home is not None else None
        self._environ = environ
        self._cwd = cwd

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(home={self._home!r}, cwd={self._cwd!r})"

    def home_dir(self) -> str:
        """
        Return the home directory.

        Raises:
        - HomeDirUnavailable: If it was not injected and cannot be read.
        """
        if self._home is not None:
            return self._home.rstrip(os.sep) or os.sep
        return lookup_home(self._environ)

    def cwd(self) -> str:
        if self._cwd is None:
            return os.getcwd()
        if callable(self._cwd):
            return os.fspath(self._cwd())
        return os.fspath(self._cwd)

    def absolutize(self, path: PathLike, expand: bool = False) -> str:
        """
        Make a path absolute without touching the filesystem.

        '.' and '..' segments are resolved lexically, so the path does not
        need to exist.

        Parameters:
        - path (str or Path): The path.
        - expand (bool): Expand a leading tilde first.

        Returns:
        - str: The absolute path.

        Raises:
        - HomeDirUnavailable: Only when `expand` is set and the home
          directory cannot be read.
        """
        path = self.expand_user(path) if expand else os.fspath(path)
        if not os.path.isabs(path):
            path = os.path.join(self.cwd(), path)
        return os.path.normpath(path)

    def canonicalize(self, path: PathLike) -> str:
        """
        Resolve a path against the filesystem, following symbolic links.

        Parameters:
        - path (str or Path): The path.

        Returns:
        - str: The real, absolute path.

        Raises:
        - NotFound: If any component does not exist.
        - NotADirectory: If a non-final component is not a directory.
        """
        path = os.fspath(path)
        if not os.path.isabs(path):
            path = os.path.join(self.cwd(), path)
        with translate_os_errors(path):
            # realpath folds '.' and '..' lexically; "file/.." must still be ENOTDIR
            os.stat(path)
            return os.path.realpath(path, strict=True)

    def expand_user(self, path: PathLike) -> str:
        """
        Replace a leading tilde with the home directory.

        Only the first tilde is replaced; paths not starting with one are
        returned unchanged.

        Raises:
        - HomeDirUnavailable: If the home directory cannot be read.
        """
        path = os.fspath(path)
        if not path.startswith(TILDE):
            return path
        home = self.home_dir()
        expanded = path.replace(TILDE, home, 1)
        if home == os.sep and expanded.startswith(os.sep * 2):
            expanded = expanded[1:]
        logger.debug("expanded %s -> %s", path, expanded)
        return expanded

    def contract_user(self, path: PathLike) -> str:
        """
        Replace a leading home directory with a tilde.

        The home directory only matches on a segment boundary, so with a
        home of ``/home/meg`` the path ``/home/megan`` is left alone.

        Raises:
        - HomeDirUnavailable: If the home directory cannot be read.
        """
        path = os.fspath(path)
        home = self.home_dir()
        if home == os.sep:
            return TILDE + path if path.startswith(os.sep) else path
        if path == home or path.startswith(home + os.sep):
            return path.replace(home, TILDE, 1)
        return path
