"""Unix permission bits."""

import logging
import os
import re
import stat
from dataclasses import dataclass, field
from typing import Union

from filey.errors import PathLike, translate_os_errors

logger = logging.getLogger(__name__)


_PERM_BITS = {
    'u': {'r': stat.S_IRUSR, 'w': stat.S_IWUSR, 'x': stat.S_IXUSR},
    'g': {'r': stat.S_IRGRP, 'w': stat.S_IWGRP, 'x': stat.S_IXGRP},
    'o': {'r': stat.S_IROTH, 'w': stat.S_IWOTH, 'x': stat.S_IXOTH},
}


@dataclass(frozen=True)
class Permission:
    """One rwx triplet."""

    read: bool = False
    write: bool = False
    execute: bool = False

    @classmethod
    def from_digit(cls, digit: int) -> "Permission":
        """Build from an octal digit, e.g. 5 -> r-x."""
        if not 0 <= digit <= 7:
            raise ValueError(f"Invalid permission digit: {digit}")
        return cls(read=bool(digit & 4), write=bool(digit & 2), execute=bool(digit & 1))

    def to_digit(self) -> int:
        return (4 if self.read else 0) | (2 if self.write else 0) | (1 if self.execute else 0)

    def __str__(self) -> str:
        return ("r" if self.read else "-") + ("w" if self.write else "-") + ("x" if self.execute else "-")


@dataclass(frozen=True)
class Permissions:
    """User, group and others triplets of a file mode."""

    user: Permission = field(default_factory=Permission)
    group: Permission = field(default_factory=Permission)
    others: Permission = field(default_factory=Permission)

    @classmethod
    def from_mode(cls, mode: int) -> "Permissions":
        """Build from a mode; file type and special bits are ignored."""
        mode = stat.S_IMODE(mode)
        return cls(
            user=Permission.from_digit((mode >> 6) & 7),
            group=Permission.from_digit((mode >> 3) & 7),
            others=Permission.from_digit(mode & 7),
        )

    @classmethod
    def from_path(cls, path: PathLike, follow: bool = True) -> "Permissions":
        """
        Read the permissions of `path`.

        Raises:
        - NotFound: If the path does not exist.
        """
        with translate_os_errors(path):
            st = os.stat(path) if follow else os.lstat(path)
        return cls.from_mode(st.st_mode)

    def to_mode(self) -> int:
        return (self.user.to_digit() << 6) | (self.group.to_digit() << 3) | self.others.to_digit()

    def __str__(self) -> str:
        return f"{self.user}{self.group}{self.others}"


def symbolic_to_octal(symbolic: str, base: int = 0) -> int:
    """
    Convert symbolic permission string to octal.

    Parameters:
    - symbolic (str): Symbolic permission string (e.g., 'u+rwx,g+rx,o+r').
    - base (int): Mode the operations are applied to.

    Returns:
    - int: Octal representation of permissions.

    Raises:
    - ValueError: If the symbolic string is invalid.
    """
    perm = stat.S_IMODE(base)
    for op in symbolic.split(','):
        match = re.fullmatch(r'([ugoa]*)([+=-])([rwx]*)', op.strip())
        if not match:
            raise ValueError(f"Invalid symbolic permission: {op}")
        who, action, perms = match.groups()
        if not who or 'a' in who:
            who = 'ugo'
        for w in who:
            bits = 0
            for p in perms:
                bits |= _PERM_BITS[w][p]
            if action == '+':
                perm |= bits
            elif action == '-':
                perm &= ~bits
            else:
                for bit in _PERM_BITS[w].values():
                    perm &= ~bit
                perm |= bits
    return perm


def chmod(path: PathLike, mode: Union[str, int]) -> int:
    """
    Change the permissions of a file or directory.

    Symbolic modes are applied to the current mode, like chmod(1).

    Parameters:
    - path (str or Path): The file or directory path.
    - mode (str or int): Permissions in symbolic (e.g., 'u+rwx,g+rx,o+r') or octal form (e.g., 0o755).

    Returns:
    - int: The mode that was set.

    Raises:
    - ValueError: If the symbolic permission string is invalid.
    - NotFound: If the path does not exist.
    """
    with translate_os_errors(path):
        if isinstance(mode, str):
            mode = symbolic_to_octal(mode, os.stat(path).st_mode)
        os.chmod(path, mode)
    logger.debug("chmod %s %o", os.fspath(path), mode)
    return mode
