"""Module containing functions to classify the source passed to ``take``."""

from __future__ import annotations

from take.config import TARBALL_URL_PATTERN, ZIP_URL_PATTERN
from take.utils.compat_typing import StrEnum
from take.utils.git_utils import is_git_repo, is_git_url
from take.utils.logging_config import get_logger

logger = get_logger(__name__)


class SourceKind(StrEnum):
    """What a source string denotes."""

    LOCAL = "local"
    GIT = "git"
    TARBALL = "tarball"
    ZIP = "zip"
    INVALID = "invalid"


def looks_remote(source: str) -> bool:
    """Return ``True`` if ``source`` must be handled as a URL or repository rather than a plain path.

    A source is remote-looking when it carries a scheme separator (``://``), contains an ``@``
    (SSH references such as ``git@host:owner/repo.git``), or names an existing local git repository.

    Parameters
    ----------
    source : str
        The raw source string.

    Returns
    -------
    bool
        Whether ``source`` should go through URL classification.

    """
    return "://" in source or "@" in source or is_git_repo(source)


def classify_source(source: str) -> SourceKind:
    """Classify ``source`` by its shape alone.

    No network request is made: git URLs are recognised by their ``.git`` suffix, archives by
    their extension. The only filesystem access is the check for an existing local repository.

    Parameters
    ----------
    source : str
        The raw source string.

    Returns
    -------
    SourceKind
        ``GIT``, ``TARBALL`` or ``ZIP`` for recognised sources, ``INVALID`` for URL-like strings
        that match none of them, ``LOCAL`` for everything else.

    """
    if not looks_remote(source):
        kind = SourceKind.LOCAL
    elif is_git_repo(source) or is_git_url(source):
        kind = SourceKind.GIT
    elif TARBALL_URL_PATTERN.match(source):
        kind = SourceKind.TARBALL
    elif ZIP_URL_PATTERN.match(source):
        kind = SourceKind.ZIP
    else:
        kind = SourceKind.INVALID

    logger.debug("Classified source", extra={"source": source, "kind": str(kind)})
    return kind
