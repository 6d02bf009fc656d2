"""Fixtures for tests.

This file provides shared fixtures for running take inside an isolated working directory, building small tar and zip
archives in memory, serving them through an offline ``httpx`` transport, and mocking GitPython.
"""

from __future__ import annotations

import io
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict
from unittest.mock import MagicMock

import httpx
import pytest

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

MockClientFactory = Callable[[Dict[str, bytes]], httpx.Client]

ARCHIVE_HOST = "https://downloads.example.com"
ROOT_DIR_NAME = "testdir"
FILE_NAME = "test.txt"
FILE_CONTENT = b"test content\n"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change into an empty working directory for the duration of the test.

    Parameters
    ----------
    tmp_path : Path
        The temporary directory path provided by the ``tmp_path`` fixture.
    monkeypatch : pytest.MonkeyPatch
        Used to change the working directory and restore it afterwards.

    Returns
    -------
    Path
        The working directory.

    """
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def scratch_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect ``tempfile`` to a dedicated directory so tests can assert scratch cleanup."""
    path = tmp_path / "scratch"
    path.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(path))
    return path


@pytest.fixture
def tarball_bytes() -> bytes:
    """Return a ``.tar.gz`` archive holding ``testdir/test.txt``."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        dir_info = tarfile.TarInfo(ROOT_DIR_NAME)
        dir_info.type = tarfile.DIRTYPE
        dir_info.mode = 0o755
        tar.addfile(dir_info)

        file_info = tarfile.TarInfo(f"{ROOT_DIR_NAME}/{FILE_NAME}")
        file_info.size = len(FILE_CONTENT)
        file_info.mode = 0o644
        tar.addfile(file_info, io.BytesIO(FILE_CONTENT))
    return buffer.getvalue()


@pytest.fixture
def zip_bytes() -> bytes:
    """Return a ``.zip`` archive holding ``testdir/test.txt`` plus ``__MACOSX`` noise."""
    return build_zip(
        {
            f"{ROOT_DIR_NAME}/": b"",
            f"{ROOT_DIR_NAME}/{FILE_NAME}": FILE_CONTENT,
            f"__MACOSX/{ROOT_DIR_NAME}/._{FILE_NAME}": b"resource fork",
        },
    )


def build_zip(entries: dict[str, bytes], modes: dict[str, int] | None = None) -> bytes:
    """Build a zip archive in memory.

    Parameters
    ----------
    entries : dict[str, bytes]
        Entry names mapped to their content. Names ending with ``/`` become directory entries.
    modes : dict[str, int] | None
        Optional unix permission bits per entry name.

    Returns
    -------
    bytes
        The zip archive.

    """
    modes = modes or {}
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            info = zipfile.ZipInfo(name)
            if name in modes:
                info.external_attr = modes[name] << 16
            zf.writestr(info, content)
    return buffer.getvalue()


@pytest.fixture
def mock_client() -> MockClientFactory:
    """Return a factory for ``httpx.Client`` objects that serve fixed paths and answer 404 otherwise."""

    def _factory(routes: dict[str, bytes]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path in routes:
                return httpx.Response(200, content=routes[request.url.path])
            return httpx.Response(404, text="not found")

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def gitpython_mocks(mocker: MockerFixture) -> dict[str, MagicMock]:
    """Provide GitPython mocks so clone tests never touch the network."""
    mock_git_cmd = MagicMock()
    mock_git_cmd.version.return_value = "git version 2.43.0"
    mock_git_cmd.config.return_value = "true"

    def _fake_clone(_url: str, to_path: str, **_kwargs: object) -> MagicMock:
        Path(to_path).mkdir(parents=True)
        return MagicMock()

    mock_clone_from = MagicMock(side_effect=_fake_clone)

    mocker.patch("take.utils.git_utils.git.Git", return_value=mock_git_cmd)
    mocker.patch("take.clone.git.Repo.clone_from", mock_clone_from)

    return {"git_cmd": mock_git_cmd, "clone_from": mock_clone_from}


@pytest.fixture
def local_git_repo(tmp_path: Path) -> Path:
    """Create a local git repository with one commit.

    Returns
    -------
    Path
        The repository root, named ``source-repo``.

    """
    import git  # noqa: PLC0415

    repo_dir = tmp_path / "source-repo"
    repo = git.Repo.init(repo_dir)
    (repo_dir / FILE_NAME).write_bytes(FILE_CONTENT)
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test User")
        cw.set_value("user", "email", "test@example.com")
    repo.index.add([FILE_NAME])
    repo.index.commit("Initial commit")
    return repo_dir
