"""Module containing functions for downloading archives into a scratch directory."""

from __future__ import annotations

import shutil
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import urlparse

import httpx

from take.config import (
    ARCHIVE_FILE_STEM,
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_TIMEOUT,
    TAR_EXTENSIONS,
    USER_AGENT,
)
from take.utils.exceptions import DownloadFailedError
from take.utils.logging_config import get_logger

logger = get_logger(__name__)


def archive_extension(url: str, default: str) -> str:
    """Return the archive extension recognised at the end of ``url``'s path.

    Parameters
    ----------
    url : str
        The archive URL.
    default : str
        Extension to fall back to when none of the known ones matches.

    Returns
    -------
    str
        One of ``.tar.gz``, ``.tar.bz2``, ``.tar.xz``, ``.tgz``, ``.zip``, or ``default``.

    """
    path = urlparse(url).path.lower()
    for ext in (*TAR_EXTENSIONS, ".zip"):
        if path.endswith(ext):
            return ext
    return default


def download_archive(url: str, directory: Path, *, default_ext: str, client: httpx.Client | None = None) -> Path:
    """Download ``url`` into ``directory``, keeping its archive extension.

    Parameters
    ----------
    url : str
        The archive URL (``http``, ``https`` or ``ftp``).
    directory : Path
        The scratch directory to write into.
    default_ext : str
        Extension used when ``url`` does not end with a known one.
    client : httpx.Client | None
        HTTP client to use. A short-lived client is created when omitted.

    Returns
    -------
    Path
        The path of the downloaded file.

    Raises
    ------
    DownloadFailedError
        If the transfer fails or the server answers with a non-2xx status.

    """
    target = directory / f"{ARCHIVE_FILE_STEM}{archive_extension(url, default_ext)}"
    logger.info("Downloading archive", extra={"url": url, "target": str(target)})

    if urlparse(url).scheme == "ftp":
        _download_ftp(url, target)
    elif client is None:
        with httpx.Client(headers={"User-Agent": USER_AGENT}) as own_client:
            _download_http(url, target, own_client)
    else:
        _download_http(url, target, client)

    logger.debug("Download completed", extra={"bytes": target.stat().st_size})
    return target


def _download_http(url: str, target: Path, client: httpx.Client) -> None:
    try:
        with client.stream("GET", url, timeout=DOWNLOAD_TIMEOUT, follow_redirects=True) as response:
            if not response.is_success:
                msg = f"failed to download file: {url} returned HTTP {response.status_code}"
                raise DownloadFailedError(msg)
            with target.open("wb") as f:
                for chunk in response.iter_bytes(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
    except httpx.HTTPError as exc:
        msg = f"failed to download file: {exc}"
        raise DownloadFailedError(msg) from exc
    except OSError as exc:
        msg = f"failed to write download to {target}: {exc}"
        raise DownloadFailedError(msg) from exc


def _download_ftp(url: str, target: Path) -> None:
    # httpx has no FTP transport
    try:
        with urllib.request.urlopen(url, timeout=DOWNLOAD_TIMEOUT) as response, target.open("wb") as f:  # noqa: S310
            shutil.copyfileobj(response, f, DOWNLOAD_CHUNK_SIZE)
    except (urllib.error.URLError, OSError) as exc:
        msg = f"failed to download file: {exc}"
        raise DownloadFailedError(msg) from exc
