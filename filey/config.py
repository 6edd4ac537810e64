"""Environment lookups.

filey reads no configuration files. The only ambient inputs are the home
directory variable and the working directory, both of which can be
injected instead of read from the process.
"""

import os
from typing import Mapping, Optional

from filey.errors import HomeDirUnavailable

# Default name of the variable holding the home directory
HOME_VAR = "HOME"

# Names a different variable to read the home directory from
HOME_VAR_OVERRIDE = "FILEY_HOME_VAR"


def home_var(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the name of the variable that holds the home directory.

    Parameters:
    - environ (Mapping, optional): Environment to read. Defaults to ``os.environ``.

    Returns:
    - str: ``$FILEY_HOME_VAR`` when set and non-empty, otherwise ``HOME``.
    """
    env = os.environ if environ is None else environ
    return env.get(HOME_VAR_OVERRIDE) or HOME_VAR


def lookup_home(environ: Optional[Mapping[str, str]] = None, name: Optional[str] = None) -> str:
    """
    Read the home directory from the environment.

    Parameters:
    - environ (Mapping, optional): Environment to read. Defaults to ``os.environ``.
    - name (str, optional): Variable name. Defaults to ``home_var(environ)``.

    Returns:
    - str: The home directory, with any trailing separator removed.

    Raises:
    - HomeDirUnavailable: If the name is malformed, or the variable is unset,
      empty, or not valid text.
    """
    env = os.environ if environ is None else environ
    name = home_var(env) if name is None else name
    if not name or "=" in name or "\0" in name:
        raise HomeDirUnavailable(name, "invalid environment variable name")
    value = env.get(name)
    if value is None:
        raise HomeDirUnavailable(name, "environment variable not set")
    if not isinstance(value, str):
        raise HomeDirUnavailable(name, "environment variable is not text")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise HomeDirUnavailable(name, "environment variable is not valid unicode")
    if not value:
        raise HomeDirUnavailable(name, "environment variable is empty")
    # "/" must survive as the root
    return value.rstrip(os.sep) or os.sep
