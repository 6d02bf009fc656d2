"""Utility functions for working with the operating system."""

from __future__ import annotations

import errno
import shutil
import stat
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Generator

from take.config import SCRATCH_DIR_PREFIX
from take.utils.exceptions import ExtractionFailedError, PermissionDeniedError, TakeIOError
from take.utils.logging_config import get_logger

if TYPE_CHECKING:
    from types import TracebackType

logger = get_logger(__name__)


def ensure_directory_exists_or_create(path: Path) -> None:
    """Ensure the directory exists, creating it and any missing parents if necessary.

    Parameters
    ----------
    path : Path
        The path to ensure exists.

    Raises
    ------
    PermissionDeniedError
        If the operating system denies the creation.
    TakeIOError
        If the directory cannot be created for any other reason.

    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        msg = f"permission denied: cannot create {path}"
        raise PermissionDeniedError(msg) from exc
    except OSError as exc:
        msg = f"Failed to create directory {path}: {exc}"
        raise TakeIOError(msg) from exc


def current_directory() -> Path:
    """Return the absolute working directory.

    Raises
    ------
    TakeIOError
        If the working directory no longer exists or cannot be read.

    """
    try:
        return Path.cwd()
    except OSError as exc:
        msg = f"Could not determine the working directory: {exc}"
        raise TakeIOError(msg) from exc


def remove_tree(path: Path) -> None:
    """Remove ``path`` recursively, clearing read-only bits that block deletion.

    Parameters
    ----------
    path : Path
        The directory to delete.

    """
    kwargs = {}
    if sys.version_info >= (3, 12):
        kwargs["onexc"] = _handle_remove_readonly
    else:
        kwargs["onerror"] = _handle_remove_readonly

    shutil.rmtree(path, **kwargs)


@contextmanager
def scratch_directory() -> Generator[Path, None, None]:
    """Context manager that yields a private temporary directory and always removes it.

    Yields
    ------
    Path
        The scratch directory, exclusively owned by the caller.

    Raises
    ------
    TakeIOError
        If the scratch directory cannot be created.

    """
    try:
        path = Path(tempfile.mkdtemp(prefix=SCRATCH_DIR_PREFIX))
    except OSError as exc:
        msg = f"Failed to create scratch directory: {exc}"
        raise TakeIOError(msg) from exc

    logger.debug("Created scratch directory", extra={"path": str(path)})
    try:
        yield path
    finally:
        try:
            remove_tree(path)
        except OSError as exc:
            # Cleanup failures never replace the handler's outcome
            logger.warning("Failed to remove scratch directory", extra={"path": str(path), "error": str(exc)})
        else:
            logger.debug("Removed scratch directory", extra={"path": str(path)})


def move_into_place(source: Path, destination: Path, *, force: bool = False) -> Path:
    """Move an extracted directory to its final location.

    Parameters
    ----------
    source : Path
        The extracted directory inside a scratch directory.
    destination : Path
        Where the directory should end up.
    force : bool
        Replace ``destination`` if it already exists (default: ``False``).

    Returns
    -------
    Path
        The absolute path of the moved directory.

    Raises
    ------
    ExtractionFailedError
        If ``destination`` exists and ``force`` is not set, or if the move itself fails.

    """
    destination = destination.absolute()
    if destination.exists() or destination.is_symlink():
        if not force:
            msg = f"destination already exists: {destination} (use --force to replace it)"
            raise ExtractionFailedError(msg)
        logger.info("Replacing existing destination", extra={"destination": str(destination)})
        try:
            if destination.is_dir() and not destination.is_symlink():
                remove_tree(destination)
            else:
                destination.unlink()
        except OSError as exc:
            msg = f"failed to remove existing destination {destination}: {exc}"
            raise ExtractionFailedError(msg) from exc

    try:
        shutil.move(str(source), str(destination))
    except OSError as exc:
        msg = f"failed to move directory: {exc}"
        raise ExtractionFailedError(msg) from exc

    return destination


def _handle_remove_readonly(
    func: Callable,
    path: str,
    exc_info: BaseException | tuple[type[BaseException], BaseException, TracebackType],
) -> None:
    """Handle permission errors raised by ``shutil.rmtree()``.

    * Makes the target and its parent directory writable (removes the read-only attribute).
    * Retries the original operation (``func``) once.

    """
    # 'onerror' passes a (type, value, tb) tuple; 'onexc' passes the exception
    if isinstance(exc_info, tuple):  # 'onerror' (Python <3.12)
        exc: BaseException = exc_info[1]
    else:  # 'onexc' (Python 3.12+)
        exc = exc_info

    # Handle only 'Permission denied' and 'Operation not permitted'
    if not isinstance(exc, OSError) or exc.errno not in {errno.EACCES, errno.EPERM}:
        raise exc

    for target in (Path(path).parent, Path(path)):
        if target.exists() and not target.is_symlink():
            target.chmod(target.stat().st_mode | stat.S_IWRITE | stat.S_IREAD | stat.S_IEXEC)
    func(path)
