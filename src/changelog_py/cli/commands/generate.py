"""Implementation of the default changelog command.

Reads the full tag history, assembles release groups and writes the
Markdown changelog to a file or stdout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from changelog_py.core.changelog import generate_changelog, write_changelog
from changelog_py.exceptions import ChangelogError

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from changelog_py.vcs.git import GitRepository


def run_generate(
    repo: GitRepository,
    output: Path | None,
    verbose: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        repo: Repository to document
        output: File to write to; stdout when None
        verbose: Include every commit type
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        markdown = generate_changelog(repo, verbose=verbose)
    except ChangelogError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    try:
        write_changelog(markdown, output)
    except ChangelogError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    if output is not None:
        console.print(f"[green]✓[/] Changelog generated: [cyan]{output}[/]")
