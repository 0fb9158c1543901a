"""Command-line entry point.

Examples::

    changelog-py                     # print the changelog
    changelog-py -f CHANGELOG.md -a  # write it, including all commit types
    changelog-py -b --prefix v       # suggest the next version
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from changelog_py import __version__
from changelog_py.cli.commands.bump import run_bump
from changelog_py.cli.commands.generate import run_generate
from changelog_py.config import BumpConfig, load_config
from changelog_py.exceptions import ConfigError, NotAGitRepositoryError
from changelog_py.vcs.git import GitRepository

console = Console()
err_console = Console(stderr=True)


def configure_logging(debug: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=debug)],
        force=True,
    )


@click.command(
    name="changelog-py",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Generate changelogs from git tags using Conventional Commits.",
)
@click.option(
    "-f",
    "--file",
    "output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (defaults to stdout).",
)
@click.option(
    "-a",
    "--all",
    "include_all",
    is_flag=True,
    help="Include all commit types (not just feat/fix/perf/revert).",
)
@click.option(
    "-b", "--bump", is_flag=True, help="Suggest the next version from unreleased commits."
)
@click.option("--prefix", default=None, help="Prefix for bump output (e.g. 'v' for v1.2.3).")
@click.option("--suffix", default=None, help="Pre-release suffix for bump output (e.g. '-rc').")
@click.option(
    "-C",
    "--path",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository directory (defaults to the current directory).",
)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, "-v", "--version", prog_name="changelog-py")
def cli(
    output: Path | None,
    include_all: bool,
    bump: bool,
    prefix: str | None,
    suffix: str | None,
    repo_path: Path | None,
    debug: bool,
) -> None:
    configure_logging(debug)
    project_path = repo_path or Path.cwd()

    try:
        config = load_config(project_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        repo = GitRepository(project_path)
    except NotAGitRepositoryError as e:
        err_console.print("[red]Error:[/] Current directory is not a Git repository")
        raise SystemExit(1) from e

    if bump:
        try:
            bump_config = BumpConfig(
                prefix=config.bump.prefix if prefix is None else prefix,
                suffix=config.bump.suffix if suffix is None else suffix,
            )
        except ValidationError as e:
            err_console.print("[red]Error:[/] --suffix must contain a pre-release label")
            raise SystemExit(1) from e
        run_bump(repo, prefix=bump_config.prefix, suffix=bump_config.suffix)
        return

    if output is None and config.changelog.path is not None:
        output = project_path / config.changelog.path

    run_generate(
        repo,
        output=output,
        verbose=include_all or config.changelog.include_all_types,
        console=console,
        err_console=err_console,
    )


def main() -> None:
    """Console script entry point."""
    cli()
