"""Utility functions for interacting with Git repositories."""

from __future__ import annotations

import sys
from pathlib import Path

import git

from take.config import GIT_METADATA_DIR, GIT_URL_PATTERN
from take.utils.exceptions import GitCloneFailedError
from take.utils.logging_config import get_logger

logger = get_logger(__name__)


def ensure_git_installed() -> None:
    """Ensure Git is installed and accessible on the system.

    On Windows, this also checks whether Git is configured to support long file paths.

    Raises
    ------
    GitCloneFailedError
        If Git is not installed or not accessible.

    """
    try:
        git_cmd = git.Git()
        git_cmd.version()
    except (git.GitCommandError, git.GitCommandNotFound) as exc:
        msg = "git is not installed or not accessible. Please install Git first."
        raise GitCloneFailedError(msg) from exc

    if sys.platform == "win32":
        try:
            longpaths_value = git_cmd.config("core.longpaths")
            if longpaths_value.lower() != "true":
                logger.warning(
                    "Git clone may fail on Windows due to long file paths. "
                    "Consider enabling long path support with: 'git config --global core.longpaths true'.",
                    extra={"platform": "windows", "longpaths_enabled": False},
                )
        except git.GitCommandError:
            # Unset 'core.longpaths' makes git exit non-zero
            pass


def is_git_repo(path: str | Path) -> bool:
    """Return ``True`` if ``path`` is a directory holding a ``.git`` metadata directory.

    Parameters
    ----------
    path : str | Path
        The directory to inspect.

    Returns
    -------
    bool
        Whether ``path`` is the root of a local git repository.

    """
    try:
        return (Path(path) / GIT_METADATA_DIR).is_dir()
    except (OSError, ValueError):
        return False


def is_git_url(url: str) -> bool:
    """Check whether ``url`` has the shape of a cloneable git URL.

    Accepted forms start with ``<user>@`` or with one of the ``http(s)``, ``git``, ``ssh``,
    ``ftp(s)`` or ``rsync`` schemes, and end in ``.git`` (optionally followed by a slash).

    Parameters
    ----------
    url : str
        The string to check.

    Returns
    -------
    bool
        ``True`` if the string looks like a git URL.

    """
    return GIT_URL_PATTERN.match(url) is not None


def get_repo_name(url: str) -> str:
    """Derive the directory name ``git clone`` would create for ``url``.

    Examples
    --------
    >>> get_repo_name("git@github.com:owner/repo.git")
    'repo'
    >>> get_repo_name("https://github.com/owner/repo.git/")
    'repo'

    Parameters
    ----------
    url : str
        A git URL, SSH reference or local repository path.

    Returns
    -------
    str
        The repository name, or an empty string if none can be derived.

    """
    name = url.rstrip("/\\").removesuffix(".git").rstrip("/\\")

    # SSH references (user@host:owner/repo) keep the path after the last colon
    if "@" in name and "://" not in name and ":" in name:
        name = name.rsplit(":", 1)[1]

    return name.replace("\\", "/").rsplit("/", 1)[-1]
