"""Main entry point: create a directory, clone a repository, or fetch an archive."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from take.clone import clone_repository
from take.extraction import fetch_and_extract_tar, fetch_and_extract_zip
from take.schemas import TakeOptions, TakeResult
from take.source_parser import SourceKind, classify_source
from take.utils.exceptions import InvalidPathError, InvalidURLError, TakeError, TakeIOError
from take.utils.logging_config import get_logger
from take.utils.os_utils import current_directory, ensure_directory_exists_or_create
from take.utils.path_utils import expand_path

if TYPE_CHECKING:
    import httpx

logger = get_logger(__name__)


def take(options: TakeOptions, *, client: httpx.Client | None = None) -> TakeResult:
    """Resolve ``options.path`` into a directory the caller can change into.

    Depending on the shape of ``options.path`` this either creates a local directory tree, clones
    a git repository, or downloads and unpacks a tarball or zip archive into the working directory.
    Failures never propagate: they are reported through ``TakeResult.error``.

    Parameters
    ----------
    options : TakeOptions
        The path or URL to take, plus clone depth and overwrite behaviour.
    client : httpx.Client | None
        HTTP client used for archive downloads. A short-lived client is created when omitted.

    Returns
    -------
    TakeResult
        The absolute path of the resulting directory and which action produced it, or the kind of
        failure.

    """
    logger.info(
        "Starting take operation",
        extra={"path": options.path, "clone_depth": options.clone_depth, "force": options.force},
    )

    try:
        result = _dispatch(options, client=client)
    except TakeError as exc:
        logger.debug("Take operation failed", extra={"kind": str(exc.kind), "error": str(exc)})
        return TakeResult.from_error(exc)

    logger.info("Take operation completed", extra={"final_path": str(result.final_path)})
    return result


def take_path(
    path: str,
    *,
    clone_depth: int = 0,
    force: bool = False,
    client: httpx.Client | None = None,
) -> TakeResult:
    """Provide a keyword-argument wrapper around ``take``.

    Parameters
    ----------
    path : str
        A local directory path, a git URL or an archive URL.
    clone_depth : int
        History depth for git clones; ``0`` clones the full history (default: ``0``).
    force : bool
        Replace an existing destination directory (default: ``False``).
    client : httpx.Client | None
        HTTP client used for archive downloads.

    Returns
    -------
    TakeResult
        See ``take``.

    """
    return take(TakeOptions(path=path, clone_depth=clone_depth, force=force), client=client)


def _dispatch(options: TakeOptions, *, client: httpx.Client | None) -> TakeResult:
    if not options.path:
        raise InvalidPathError

    kind = classify_source(options.path)

    if kind is SourceKind.LOCAL:
        return TakeResult(final_path=_create_directory(options.path), was_created=True)

    if kind is SourceKind.GIT:
        path = clone_repository(options.path, depth=options.clone_depth, force=options.force)
        return TakeResult(final_path=path, was_cloned=True)

    if kind is SourceKind.TARBALL:
        path = fetch_and_extract_tar(options.path, force=options.force, client=client)
        return TakeResult(final_path=path, was_downloaded=True)

    if kind is SourceKind.ZIP:
        path = fetch_and_extract_zip(options.path, force=options.force, client=client)
        return TakeResult(final_path=path, was_downloaded=True)

    msg = f"invalid URL format: {options.path}"
    raise InvalidURLError(msg)


def _create_directory(raw_path: str) -> Path:
    """Create ``raw_path`` and its parents, returning its absolute path.

    Raises
    ------
    PermissionDeniedError
        If the operating system denies the creation.
    TakeIOError
        If the path exists but is not a directory, or cannot be created.

    """
    path = expand_path(raw_path)
    ensure_directory_exists_or_create(path)
    if not path.is_dir():
        msg = f"not a directory: {path}"
        raise TakeIOError(msg)
    if not path.is_absolute():
        path = current_directory() / path
    return Path(os.path.normpath(path))
