"""Custom exceptions for the take package."""

from __future__ import annotations

from take.utils.compat_typing import StrEnum


class ErrorKind(StrEnum):
    """Kinds of failure a take operation can report."""

    INVALID_PATH = "invalid_path"
    PERMISSION_DENIED = "permission_denied"
    INVALID_URL = "invalid_url"
    GIT_CLONE_FAILED = "git_clone_failed"
    DOWNLOAD_FAILED = "download_failed"
    EXTRACTION_FAILED = "extraction_failed"
    IO_ERROR = "io_error"


class TakeError(Exception):
    """Base class for every failure raised by a take handler.

    Subclasses pin ``kind`` so the dispatcher can report a uniform ``ErrorKind``
    without inspecting exception types.
    """

    kind: ErrorKind = ErrorKind.IO_ERROR
    default_message: str = "I/O error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidPathError(TakeError):
    """Exception raised when the requested path is empty or unusable."""

    kind = ErrorKind.INVALID_PATH
    default_message = "invalid path specified"


class PermissionDeniedError(TakeError):
    """Exception raised when the operating system refuses to create a directory."""

    kind = ErrorKind.PERMISSION_DENIED
    default_message = "permission denied"


class InvalidURLError(TakeError):
    """Exception raised when a URL matches none of the git, tarball or zip shapes."""

    kind = ErrorKind.INVALID_URL
    default_message = "invalid URL format"


class GitCloneFailedError(TakeError):
    """Exception raised when ``git clone`` fails.

    The message carries git's own output so the user can see why.
    """

    kind = ErrorKind.GIT_CLONE_FAILED
    default_message = "git clone failed"


class DownloadFailedError(TakeError):
    """Exception raised on a transport failure or a non-2xx response."""

    kind = ErrorKind.DOWNLOAD_FAILED
    default_message = "failed to download file"


class ExtractionFailedError(TakeError):
    """Exception raised when an archive cannot be unpacked or relocated."""

    kind = ErrorKind.EXTRACTION_FAILED
    default_message = "failed to extract archive"


class TakeIOError(TakeError):
    """Exception raised for any other operating-system error."""
