"""Implementation of the version suggestion flow (``--bump``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changelog_py.core.bump import suggest_release_version

if TYPE_CHECKING:
    from changelog_py.vcs.git import GitRepository


def run_bump(repo: GitRepository, prefix: str, suffix: str) -> str:
    """Suggest the next version and print it on its own line.

    The version is written with ``print`` rather than through rich so
    scripts can capture it verbatim.

    Args:
        repo: Repository to inspect
        prefix: Prepended to the version (e.g. "v")
        suffix: Pre-release label (e.g. "-rc"); empty for a stable version

    Returns:
        The printed version string
    """
    version = suggest_release_version(repo, prefix=prefix, suffix=suffix)
    print(version)
    return version
