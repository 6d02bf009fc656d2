"""Shell integration: the wrapper functions that call ``take`` and change into the printed path.

``take --init-shell`` prints ``ShellSpec.setup_script``. The wrappers change directory with the path
held in a shell variable, so they need no quoting. ``ShellSpec.change_dir`` and ``shell_quote`` are
library API for callers that render a ``cd`` command for a literal path, for example to show it to a
user or write it into a script.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping

from take.utils.compat_typing import StrEnum


class ShellName(StrEnum):
    """Shells ``take`` can generate a wrapper for."""

    ZSH = "zsh"
    BASH = "bash"
    POWERSHELL = "powershell"
    CMD = "cmd"


@dataclass(frozen=True)
class ShellSpec:
    """How one shell changes directory and which wrapper it sources."""

    name: ShellName
    cd_template: str
    setup_script: str
    windows_quoting: bool = False

    def change_dir(self, path: str) -> str:
        """Return the command that changes into ``path``."""
        return self.cd_template.format(path=shell_quote(path, windows=self.windows_quoting))


_POSIX_FUNCTION = """take() {
	if [ -z "$1" ]; then
		echo "Usage: take <directory|git-url|archive-url>" >&2
		return 1
	fi
	take_result=$(command take "$@")
	if [ $? -eq 0 ]; then
		cd "$take_result"
	else
		return 1
	fi
}"""

_POWERSHELL_FUNCTION = """function Take {
	param([Parameter(ValueFromRemainingArguments = $true)][string[]]$Arguments)
	if (-not $Arguments) {
		Write-Error "Usage: Take <directory|git-url|archive-url>"
		return
	}
	$result = & take.exe @Arguments
	if ($LASTEXITCODE -eq 0) {
		Set-Location $result
	}
}"""

_CMD_MACRO = """@echo off
doskey take=for /f "tokens=*" %%i in ('take.exe $*') do cd /d %%i"""

SHELLS: dict[ShellName, ShellSpec] = {
    ShellName.ZSH: ShellSpec(ShellName.ZSH, "cd {path}", _POSIX_FUNCTION),
    ShellName.BASH: ShellSpec(ShellName.BASH, "cd {path}", _POSIX_FUNCTION),
    ShellName.POWERSHELL: ShellSpec(
        ShellName.POWERSHELL,
        "Set-Location {path}",
        _POWERSHELL_FUNCTION,
        windows_quoting=True,
    ),
    ShellName.CMD: ShellSpec(ShellName.CMD, "cd /d {path}", _CMD_MACRO, windows_quoting=True),
}


def detect_shell(environ: Mapping[str, str] | None = None, platform: str | None = None) -> ShellSpec:
    """Detect the shell ``take`` is running under.

    PowerShell is recognised by ``PSModulePath``; other Windows sessions default to ``cmd``.
    Elsewhere ``$SHELL`` decides between zsh and bash, with bash as the fallback.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to inspect (default: ``os.environ``).
    platform : str | None
        Platform identifier as in ``sys.platform`` (default: the running platform).

    Returns
    -------
    ShellSpec
        The detected shell.

    """
    environ = os.environ if environ is None else environ
    platform = platform or sys.platform

    if "PSModulePath" in environ:
        return SHELLS[ShellName.POWERSHELL]
    if platform == "win32":
        return SHELLS[ShellName.CMD]
    if environ.get("SHELL", "").endswith("zsh"):
        return SHELLS[ShellName.ZSH]
    return SHELLS[ShellName.BASH]


def shell_quote(value: str, *, windows: bool | None = None) -> str:
    """Quote ``value`` for the current platform's shells.

    Parameters
    ----------
    value : str
        The string to quote.
    windows : bool | None
        Use Windows (double-quote) rules instead of POSIX single quotes
        (default: decided by the running platform).

    Returns
    -------
    str
        The quoted string.

    """
    if windows is None:
        windows = sys.platform == "win32"
    if windows:
        return '"' + value.replace('"', '""') + '"'
    return "'" + value.replace("'", "'\\''") + "'"


def get_shell(name: str) -> ShellSpec:
    """Return the shell registered under ``name``.

    Raises
    ------
    ValueError
        If ``name`` is not a supported shell.

    """
    return SHELLS[ShellName(name.lower())]
