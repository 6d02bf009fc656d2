"""Command-line interface (CLI) for take."""

# pylint: disable=no-value-for-parameter
from __future__ import annotations

from typing import TypedDict

import click
from typing_extensions import Unpack

from take.config import APP_BUILD_DATE, APP_COMMIT, APP_VERSION
from take.entrypoint import take
from take.schemas import TakeOptions
from take.shell import ShellName, detect_shell, get_shell

from take.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

_AUTO_SHELL = "auto"


class _CLIArgs(TypedDict):
    source: str
    depth: int
    force: bool
    verbose: bool


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:  # noqa: FBT001
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"take version {APP_VERSION} ({APP_COMMIT}) built on {APP_BUILD_DATE}")
    ctx.exit(0)


def _print_shell_init(ctx: click.Context, _param: click.Parameter, value: str | None) -> None:
    if value is None or ctx.resilient_parsing:
        return
    shell = detect_shell() if value == _AUTO_SHELL else get_shell(value)
    click.echo(shell.setup_script)
    ctx.exit(0)


@click.command()
@click.argument("source", type=str)
@click.option(
    "--depth",
    "-d",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    envvar="TAKE_CLONE_DEPTH",
    help="Git clone depth (0 clones the full history)",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Replace the destination directory if it already exists",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr")
@click.option(
    "--init-shell",
    type=click.Choice([_AUTO_SHELL, *(str(name) for name in ShellName)]),
    is_flag=False,
    flag_value=_AUTO_SHELL,
    expose_value=False,
    is_eager=True,
    callback=_print_shell_init,
    help="Print the shell function that changes into the printed path, then exit",
)
@click.option(
    "--version",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_version,
    help="Show version information and exit",
)
def main(**cli_kwargs: Unpack[_CLIArgs]) -> None:
    """Create a directory, clone a repository, or fetch an archive, then print its absolute path.

    Parameters
    ----------
    **cli_kwargs : Unpack[_CLIArgs]
        The parsed command-line arguments.

    Examples
    --------
    Create a nested directory:
        $ take projects/new/thing

    Clone a repository (optionally shallow):
        $ take git@github.com:user/repo.git
        $ take https://github.com/user/repo.git --depth 1

    Download and unpack an archive:
        $ take https://example.com/release-1.0.tar.gz
        $ take https://example.com/release-1.0.zip --force

    Install the shell wrapper:
        $ eval "$(take --init-shell)"

    """
    _run(**cli_kwargs)


def _run(source: str, *, depth: int = 0, force: bool = False, verbose: bool = False) -> None:
    """Execute one take operation and report its outcome.

    The absolute path goes to ``stdout`` so that a shell wrapper can ``cd`` into it; errors go to
    ``stderr`` with exit status ``1``.

    Parameters
    ----------
    source : str
        A directory path, a git URL or an archive URL.
    depth : int
        Git clone depth; ``0`` clones the full history.
    force : bool
        Replace the destination directory if it already exists.
    verbose : bool
        Log progress at ``DEBUG`` level.

    Raises
    ------
    click.exceptions.Exit
        With status ``1`` if the operation fails.

    """
    if verbose:
        configure_logging("DEBUG")

    result = take(TakeOptions(path=source, clone_depth=depth, force=force))

    if not result.succeeded:
        click.echo(f"Error: {result.error_message}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(str(result.final_path))


if __name__ == "__main__":
    main()
