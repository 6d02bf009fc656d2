"""Utility functions for working with file paths."""

from __future__ import annotations

import os
from pathlib import Path

from take.utils.exceptions import InvalidPathError, TakeIOError


def expand_path(path: str) -> Path:
    """Expand a leading ``~`` and normalise ``path`` without touching the filesystem.

    Parameters
    ----------
    path : str
        The user-supplied path.

    Returns
    -------
    Path
        The expanded path. Relative paths stay relative, with redundant separators and ``.``
        segments collapsed.

    Raises
    ------
    InvalidPathError
        If ``path`` is empty.
    TakeIOError
        If the home directory of the current user cannot be resolved.

    """
    if not path:
        raise InvalidPathError

    if path.startswith("~"):
        try:
            home = Path.home()
        except RuntimeError as exc:
            msg = f"Could not resolve home directory: {exc}"
            raise TakeIOError(msg) from exc
        path = os.path.join(home, path[1:].lstrip("/\\"))

    if not os.path.isabs(path):
        path = os.path.normpath(path)

    return Path(path)
