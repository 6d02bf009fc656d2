"""Module containing the models describing one take operation."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 (typing-only-standard-library-import) needed for type checking (pydantic)

from pydantic import BaseModel, ConfigDict, Field, model_validator

from take.utils.exceptions import ErrorKind, TakeError


class TakeOptions(BaseModel):
    """Input to a single take operation.

    Attributes
    ----------
    path : str
        A local directory path, a git URL or an archive URL.
    clone_depth : int
        History depth for git clones; ``0`` clones the full history (default: ``0``).
    force : bool
        Replace an existing destination directory (default: ``False``).

    """

    model_config = ConfigDict(frozen=True)

    path: str
    clone_depth: int = Field(default=0, ge=0)
    force: bool = Field(default=False)


class TakeResult(BaseModel):
    """Outcome of a single take operation.

    On success ``final_path`` is an absolute directory and exactly one of ``was_created``,
    ``was_cloned`` and ``was_downloaded`` is set. On failure every flag is unset and ``error``
    names the kind of failure.

    Attributes
    ----------
    final_path : Path | None
        The absolute path of the created, cloned or extracted directory.
    was_created : bool
        A local directory tree was created (or already existed).
    was_cloned : bool
        A git repository was cloned.
    was_downloaded : bool
        An archive was downloaded and extracted.
    error : ErrorKind | None
        The kind of failure, if any.
    error_message : str | None
        A human-readable description of the failure.

    """

    final_path: Path | None = None
    was_created: bool = False
    was_cloned: bool = False
    was_downloaded: bool = False
    error: ErrorKind | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> TakeResult:
        flags = sum((self.was_created, self.was_cloned, self.was_downloaded))
        if flags > 1:
            msg = "at most one of was_created, was_cloned and was_downloaded may be set"
            raise ValueError(msg)
        if self.error is None and (flags != 1 or self.final_path is None):
            msg = "a successful result needs a final_path and exactly one was_* flag"
            raise ValueError(msg)
        if self.error is not None and (flags or self.final_path is not None):
            msg = "a failed result cannot carry a final_path or a was_* flag"
            raise ValueError(msg)
        return self

    @property
    def succeeded(self) -> bool:
        """Return ``True`` if the operation produced a directory."""
        return self.error is None

    @classmethod
    def from_error(cls, exc: TakeError) -> TakeResult:
        """Build a failed result from a handler exception.

        Parameters
        ----------
        exc : TakeError
            The exception raised by a handler.

        Returns
        -------
        TakeResult
            A result with every flag unset and ``error`` populated.

        """
        return cls(error=exc.kind, error_message=str(exc))
