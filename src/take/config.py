"""Configuration for the take package."""

from __future__ import annotations

import os
import re
from importlib.metadata import PackageNotFoundError, version
from typing import Final

try:
    _PACKAGE_VERSION = version("take-cli")
except PackageNotFoundError:
    _PACKAGE_VERSION = "dev"

# Version triple printed by ``take --version`` (overridden by release builds)
APP_VERSION: Final[str] = os.getenv("TAKE_VERSION", _PACKAGE_VERSION)
APP_COMMIT: Final[str] = os.getenv("TAKE_COMMIT", "none")
APP_BUILD_DATE: Final[str] = os.getenv("TAKE_BUILD_DATE", "unknown")

LOG_LEVEL_ENV_VAR: Final[str] = "TAKE_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# Download settings
DOWNLOAD_TIMEOUT: Final[float] = 60.0  # seconds
DOWNLOAD_CHUNK_SIZE: Final[int] = 64 * 1024
USER_AGENT: Final[str] = f"take/{APP_VERSION}"

SCRATCH_DIR_PREFIX: Final[str] = "take-"
ARCHIVE_FILE_STEM: Final[str] = "archive"
DEFAULT_TAR_EXTENSION: Final[str] = ".tar.gz"
DEFAULT_ZIP_EXTENSION: Final[str] = ".zip"
TAR_EXTENSIONS: Final[tuple[str, ...]] = (".tar.gz", ".tar.bz2", ".tar.xz", ".tgz")

GIT_METADATA_DIR: Final[str] = ".git"

# Classification patterns, matched against the raw source string
GIT_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^([A-Za-z0-9]+@|https?|git|ssh|ftps?|rsync).*\.git/?$")
TARBALL_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(https?|ftp).*\.(tar\.(gz|bz2|xz)|tgz)$")
ZIP_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(https?|ftp).*\.zip$")
