"""Module containing functions for cloning a Git repository into the working directory."""

from __future__ import annotations

from pathlib import Path

import git

from take.utils.exceptions import GitCloneFailedError
from take.utils.git_utils import ensure_git_installed, get_repo_name, is_git_repo
from take.utils.logging_config import get_logger
from take.utils.os_utils import current_directory, remove_tree

logger = get_logger(__name__)


def clone_repository(url: str, *, depth: int = 0, force: bool = False, dest_dir: Path | None = None) -> Path:
    """Clone ``url`` into a directory named after the repository.

    Parameters
    ----------
    url : str
        A git URL, an SSH reference or the path of a local repository.
    depth : int
        Create a shallow clone with this many commits; ``0`` clones the full history (default: ``0``).
    force : bool
        Remove an existing directory with the target name before cloning (default: ``False``).
    dest_dir : Path | None
        Directory to clone into (default: the current working directory).

    Returns
    -------
    Path
        The absolute path of the cloned repository.

    Raises
    ------
    GitCloneFailedError
        If git is missing, the target is or overlaps the source repository, the target already exists
        without ``force``, or ``git clone`` fails.

    """
    target = (dest_dir or current_directory()) / _target_name(url)

    logger.info(
        "Starting git clone operation",
        extra={"url": url, "target": str(target), "depth": depth, "force": force},
    )

    ensure_git_installed()

    if is_git_repo(url) and _overlaps(Path(url), target):
        msg = f"destination is the source repository: {target}"
        raise GitCloneFailedError(msg)

    if target.exists():
        if not force:
            msg = f"destination already exists: {target} (use --force to replace it)"
            raise GitCloneFailedError(msg)
        logger.info("Removing existing destination", extra={"target": str(target)})
        try:
            if target.is_dir() and not target.is_symlink():
                remove_tree(target)
            else:
                target.unlink()
        except OSError as exc:
            msg = f"failed to remove existing destination {target}: {exc}"
            raise GitCloneFailedError(msg) from exc

    clone_kwargs = {}
    if depth > 0:
        clone_kwargs["depth"] = depth

    try:
        git.Repo.clone_from(url, str(target), **clone_kwargs)
    except git.GitCommandError as exc:
        output = (exc.stderr or exc.stdout or "").strip()
        msg = f"git clone failed: {output}" if output else f"git clone failed: {exc}"
        raise GitCloneFailedError(msg) from exc

    logger.info("Git clone completed successfully", extra={"target": str(target)})
    return target.absolute()


def _overlaps(source: Path, target: Path) -> bool:
    """Return ``True`` if ``target`` is ``source`` or one of the two contains the other."""
    source, target = source.resolve(), target.resolve()
    return source == target or source in target.parents or target in source.parents


def _target_name(url: str) -> str:
    """Return the directory name a clone of ``url`` should use.

    Parameters
    ----------
    url : str
        A git URL, an SSH reference or the path of a local repository.

    Returns
    -------
    str
        The directory name.

    Raises
    ------
    GitCloneFailedError
        If no name can be derived from ``url``.

    """
    name = Path(url).resolve().name if is_git_repo(url) else get_repo_name(url)
    if not name or name in {".", ".."}:
        msg = f"cannot derive a directory name from {url!r}"
        raise GitCloneFailedError(msg)
    return name
