"""Tests for the ``source_parser`` module.

These tests check how raw sources are classified as local paths, git repositories, tarballs, zips, or invalid URLs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from take.source_parser import SourceKind, classify_source, looks_remote

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("https://host/x.tar.gz", SourceKind.TARBALL),
        ("http://host/releases/x-1.0.tgz", SourceKind.TARBALL),
        ("https://host/x.tar.bz2", SourceKind.TARBALL),
        ("ftp://host/pub/x.tar.xz", SourceKind.TARBALL),
        ("https://host/x.zip", SourceKind.ZIP),
        ("ftp://host/x.zip", SourceKind.ZIP),
        ("git@host:owner/repo.git", SourceKind.GIT),
        ("https://host/owner/repo.git", SourceKind.GIT),
        ("https://host/owner/repo.git/", SourceKind.GIT),
        ("ssh://git@host/owner/repo.git", SourceKind.GIT),
        ("git://host/owner/repo.git", SourceKind.GIT),
        ("rsync://host/owner/repo.git", SourceKind.GIT),
        ("https://host/x.xyz", SourceKind.INVALID),
        ("https://host/owner/repo", SourceKind.INVALID),
        ("user@host", SourceKind.INVALID),
        ("sftp://host/x.tar.gz", SourceKind.INVALID),
        ("projects/new", SourceKind.LOCAL),
        ("~/code/thing", SourceKind.LOCAL),
        ("archive.tar.gz", SourceKind.LOCAL),
    ],
)
def test_classify_source(source: str, expected: SourceKind) -> None:
    """Sources are classified by prefix and suffix alone."""
    assert classify_source(source) is expected


def test_classify_source_local_repository(tmp_path: Path) -> None:
    """A directory holding a ``.git`` directory is classified as a git source."""
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)

    assert looks_remote(str(repo))
    assert classify_source(str(repo)) is SourceKind.GIT


def test_classify_source_plain_directory(tmp_path: Path) -> None:
    """An existing directory without git metadata stays a local path."""
    plain = tmp_path / "plain"
    plain.mkdir()

    assert not looks_remote(str(plain))
    assert classify_source(str(plain)) is SourceKind.LOCAL


def test_classify_source_git_file_is_not_a_repository(tmp_path: Path) -> None:
    """A ``.git`` *file* (e.g. a worktree pointer) is not treated as repository metadata."""
    worktree = tmp_path / "worktree"
    worktree.mkdir()
    (worktree / ".git").write_text("gitdir: /elsewhere")

    assert classify_source(str(worktree)) is SourceKind.LOCAL
