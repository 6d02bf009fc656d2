"""take: create a directory, clone a repository, or fetch an archive, and print where it landed."""

from take.entrypoint import take, take_path
from take.schemas import TakeOptions, TakeResult
from take.utils.exceptions import ErrorKind

__all__ = ["ErrorKind", "TakeOptions", "TakeResult", "take", "take_path"]
