"""Module containing the archive handlers: download, unpack, and move the archive root into place.

Both handlers assume an archive unpacks into a single top-level directory. A tarball without any
top-level directory is rejected; a zip without a single common root is unpacked into a directory
named after the archive file instead.
"""

from __future__ import annotations

import shutil
import tarfile
import zipfile
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Iterable
from urllib.parse import unquote, urlparse

from take.config import ARCHIVE_FILE_STEM, DEFAULT_TAR_EXTENSION, DEFAULT_ZIP_EXTENSION
from take.download import download_archive
from take.utils.exceptions import ExtractionFailedError
from take.utils.logging_config import get_logger
from take.utils.os_utils import current_directory, move_into_place, scratch_directory

if TYPE_CHECKING:
    from pathlib import Path

    import httpx

logger = get_logger(__name__)

_CONTENTS_DIR = "contents"
_NOISE_PREFIXES = (".", "_")  # e.g. __MACOSX/, .git/


def fetch_and_extract_tar(
    url: str,
    *,
    force: bool = False,
    dest_dir: Path | None = None,
    client: httpx.Client | None = None,
) -> Path:
    """Download a ``.tar.gz``, ``.tgz``, ``.tar.bz2`` or ``.tar.xz`` archive and unpack its root directory.

    Parameters
    ----------
    url : str
        The archive URL.
    force : bool
        Replace an existing directory with the same name as the archive root (default: ``False``).
    dest_dir : Path | None
        Directory that receives the archive root (default: the current working directory).
    client : httpx.Client | None
        HTTP client used for the download.

    Returns
    -------
    Path
        The absolute path of the unpacked root directory.

    Raises
    ------
    DownloadFailedError
        If the archive cannot be downloaded.
    ExtractionFailedError
        If the archive is corrupt, contains no directory, or cannot be moved into place.

    """
    with scratch_directory() as scratch:
        archive = download_archive(url, scratch, default_ext=DEFAULT_TAR_EXTENSION, client=client)
        contents = _make_contents_dir(scratch)

        logger.info("Extracting tarball", extra={"archive": archive.name})
        try:
            with tarfile.open(archive, "r:*") as tar:
                if hasattr(tarfile, "data_filter"):
                    tar.extractall(contents, filter="data")
                else:
                    tar.extractall(contents)  # noqa: S202
        except (tarfile.TarError, OSError) as exc:
            msg = f"tar extraction failed: {exc}"
            raise ExtractionFailedError(msg) from exc

        root = _first_directory(contents)
        if root is None:
            msg = "no directory found in archive"
            raise ExtractionFailedError(msg)

        return move_into_place(root, (dest_dir or current_directory()) / root.name, force=force)


def fetch_and_extract_zip(
    url: str,
    *,
    force: bool = False,
    dest_dir: Path | None = None,
    client: httpx.Client | None = None,
) -> Path:
    """Download a ``.zip`` archive and unpack it into a single directory.

    Parameters
    ----------
    url : str
        The archive URL.
    force : bool
        Replace an existing directory with the same name as the archive root (default: ``False``).
    dest_dir : Path | None
        Directory that receives the archive root (default: the current working directory).
    client : httpx.Client | None
        HTTP client used for the download.

    Returns
    -------
    Path
        The absolute path of the unpacked root directory.

    Raises
    ------
    DownloadFailedError
        If the archive cannot be downloaded.
    ExtractionFailedError
        If the archive is corrupt, has unsafe entry names, or cannot be moved into place.

    """
    with scratch_directory() as scratch:
        archive = download_archive(url, scratch, default_ext=DEFAULT_ZIP_EXTENSION, client=client)
        contents = _make_contents_dir(scratch)

        logger.info("Extracting zip archive", extra={"archive": archive.name})
        try:
            with zipfile.ZipFile(archive) as zf:
                members = zf.infolist()
                root_name = find_zip_root(info.filename for info in members)
                if root_name is None:
                    root_name = _archive_name(url)
                    logger.debug("No common root directory in zip", extra={"fallback": root_name})
                    base = contents / root_name
                    base.mkdir()
                else:
                    base = contents

                for info in members:
                    _extract_zip_member(zf, info, base)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, RuntimeError, OSError) as exc:
            # RuntimeError: encrypted entry, NotImplementedError: unsupported compression
            msg = f"failed to extract zip: {exc}"
            raise ExtractionFailedError(msg) from exc

        root = contents / root_name
        if not root.is_dir():
            msg = f"no directory found in archive: {root_name}"
            raise ExtractionFailedError(msg)

        return move_into_place(root, (dest_dir or current_directory()) / root_name, force=force)


def find_zip_root(names: Iterable[str]) -> str | None:
    """Return the top-level directory shared by every meaningful zip entry.

    Entries whose first path segment starts with ``.`` or ``_`` are ignored.

    Parameters
    ----------
    names : Iterable[str]
        Entry names as stored in the zip central directory.

    Returns
    -------
    str | None
        The common top-level directory name, or ``None`` if entries disagree, a file sits at the
        top level, or there are no meaningful entries.

    """
    root: str | None = None
    for name in names:
        parts = name.replace("\\", "/").split("/")
        top = parts[0]
        if top.startswith(_NOISE_PREFIXES):
            continue
        # A top-level file (no "/") or an absolute name (empty first segment) means no shared root
        if len(parts) == 1 or not top:
            return None
        if root is None:
            root = top
        elif top != root:
            return None
    return root


def _extract_zip_member(zf: zipfile.ZipFile, info: zipfile.ZipInfo, base: Path) -> None:
    """Write one zip entry below ``base``, preserving its recorded unix file mode.

    Raises
    ------
    ExtractionFailedError
        If the entry name is absolute or climbs out of ``base``.

    """
    name = PurePosixPath(info.filename.replace("\\", "/"))
    if name.is_absolute() or ".." in name.parts:
        msg = f"unsafe path in archive: {info.filename!r}"
        raise ExtractionFailedError(msg)
    if not name.parts or name.parts[0].startswith(_NOISE_PREFIXES):
        return

    target = base.joinpath(*name.parts)
    if info.is_dir():
        target.mkdir(parents=True, exist_ok=True)
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    with zf.open(info) as src, target.open("wb") as dst:
        shutil.copyfileobj(src, dst)

    mode = (info.external_attr >> 16) & 0o777
    if mode:
        target.chmod(mode)


def _first_directory(path: Path) -> Path | None:
    for entry in sorted(path.iterdir()):
        if entry.is_dir() and not entry.is_symlink():
            return entry
    return None


def _make_contents_dir(scratch: Path) -> Path:
    contents = scratch / _CONTENTS_DIR
    try:
        contents.mkdir()
    except OSError as exc:
        msg = f"failed to prepare extraction directory: {exc}"
        raise ExtractionFailedError(msg) from exc
    return contents


def _archive_name(url: str) -> str:
    """Name for a zip without a common root: the URL's file name with ``.zip`` stripped."""
    name = PurePosixPath(unquote(urlparse(url).path)).name
    stem = name[: -len(".zip")] if name.lower().endswith(".zip") else name
    if stem in {"", ".", ".."}:
        return ARCHIVE_FILE_STEM
    return stem
