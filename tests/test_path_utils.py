"""Tests for the ``path_utils`` module."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from take.utils.exceptions import ErrorKind, InvalidPathError, TakeIOError
from take.utils.path_utils import expand_path


def test_expand_path_home() -> None:
    """``~/sub`` expands to the home directory joined with ``sub``."""
    assert expand_path("~/sub") == Path.home() / "sub"


def test_expand_path_bare_tilde() -> None:
    """A lone ``~`` expands to the home directory itself."""
    assert expand_path("~") == Path.home()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("a//b/./c", os.path.join("a", "b", "c")),
        ("./a/", "a"),
        ("a/b/../c", os.path.join("a", "c")),
        (".", "."),
    ],
)
def test_expand_path_normalises_relative_paths(raw: str, expected: str) -> None:
    """Relative paths are normalised lexically and stay relative."""
    result = expand_path(raw)

    assert str(result) == expected
    assert not result.is_absolute()


def test_expand_path_keeps_absolute_paths(tmp_path: Path) -> None:
    """Absolute paths are returned as given."""
    assert expand_path(str(tmp_path)) == tmp_path


def test_expand_path_does_not_touch_filesystem(tmp_path: Path) -> None:
    """Expanding a path never creates it."""
    target = tmp_path / "missing" / "deeper"

    expand_path(str(target))

    assert not target.exists()


def test_expand_path_empty() -> None:
    """An empty path is rejected with ``InvalidPathError``."""
    with pytest.raises(InvalidPathError) as exc_info:
        expand_path("")

    assert exc_info.value.kind is ErrorKind.INVALID_PATH


def test_expand_path_home_unresolvable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Failing to resolve the home directory surfaces as an I/O error."""

    def _no_home() -> Path:
        msg = "Could not determine home directory."
        raise RuntimeError(msg)

    monkeypatch.setattr(Path, "home", staticmethod(_no_home))

    with pytest.raises(TakeIOError, match="home directory"):
        expand_path("~/sub")
