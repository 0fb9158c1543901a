"""Markdown changelog rendering and output.

Turns the release groups produced by the assembler into a Markdown
document, newest release first, and writes it to a file or stdout.
Hyperlinks to commits, issues and tag comparisons are added when the
repository has a recognizable hosted remote.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Protocol

from changelog_py.core.assembler import assemble_releases
from changelog_py.core.commits import get_breaking_changes, group_commits_by_type, is_visible_type
from changelog_py.core.dedup import DeduplicationSet
from changelog_py.core.tags import normalize_tags
from changelog_py.exceptions import ChangelogError, NoVersionTagsError
from changelog_py.vcs.remote import (
    build_commit_url,
    build_compare_url,
    build_issue_url,
    build_release_tag_url,
    parse_remote_url,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from changelog_py.core.assembler import TagChangelog
    from changelog_py.core.commits import ConventionalCommit
    from changelog_py.vcs.git import RawCommit
    from changelog_py.vcs.remote import RemoteInfo

logger = logging.getLogger(__name__)

TYPE_LABELS: dict[str, str] = {
    "feat": "Features",
    "fix": "Bug Fixes",
    "docs": "Documentation",
    "style": "Styles",
    "refactor": "Code Refactoring",
    "perf": "Performance Improvements",
    "test": "Tests",
    "build": "Build System",
    "ci": "Continuous Integration",
    "chore": "Chores",
    "revert": "Reverts",
}

TYPE_ORDER: tuple[str, ...] = (
    "feat",
    "fix",
    "perf",
    "refactor",
    "docs",
    "style",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

BREAKING_HEADER = "### ⚠ BREAKING CHANGES"

_ISSUE_REFERENCE = re.compile(r"#(\d+)")


class ChangelogSource(Protocol):
    """Repository queries needed to generate a changelog."""

    def get_tags(self) -> list[str]: ...

    def get_tag_date(self, tag: str) -> str: ...

    def get_commits(self, ref: str) -> list[RawCommit]: ...

    def get_remote_url(self) -> str | None: ...


def _linkify_references(text: str, remote: RemoteInfo | None) -> str:
    if remote is None:
        return text
    return _ISSUE_REFERENCE.sub(
        lambda m: f"[#{m.group(1)}]({build_issue_url(remote, m.group(1))})",
        text,
    )


def _format_commit(commit: ConventionalCommit, remote: RemoteInfo | None) -> str:
    scope = f"**{commit.scope}**: " if commit.scope else ""
    subject = _linkify_references(commit.subject, remote)
    if remote is not None:
        sha = f"([{commit.short_sha}]({build_commit_url(remote, commit.sha)}))"
    else:
        sha = f"({commit.short_sha})"
    return f"- {scope}{subject} {sha}"


def _header_url(
    entries: Sequence[TagChangelog],
    index: int,
    remote: RemoteInfo | None,
) -> str | None:
    # entries are newest first; the previous release is the next entry
    if remote is None:
        return None
    current = entries[index]
    if index + 1 >= len(entries):
        return build_release_tag_url(remote, current.original_tag)
    return build_compare_url(remote, entries[index + 1].original_tag, current.original_tag)


def _format_header(display_tag: str, date: str, url: str | None) -> str:
    suffix = f" ({date})" if date else ""
    if url:
        return f"## [{display_tag.removeprefix('v')}]({url}){suffix}"
    return f"## {display_tag}{suffix}"


def format_changelog(
    changelogs: Sequence[TagChangelog],
    remote: RemoteInfo | None = None,
    *,
    verbose: bool = False,
) -> str:
    """Render release groups as a Markdown changelog.

    Args:
        changelogs: Release groups, oldest first (as assembled)
        remote: Hosted remote used for links, if known
        verbose: Include every commit type, not only feat/fix/perf/revert

    Returns:
        Markdown document ending in a single newline
    """
    lines = ["# Changelog", ""]
    entries = list(reversed(changelogs))

    for index, entry in enumerate(entries):
        commits = [c for c in entry.commits if is_visible_type(c.commit_type, verbose)]
        if not commits:
            continue

        url = _header_url(entries, index, remote)
        lines.extend([_format_header(entry.display_tag, entry.date, url), ""])

        # Breaking changes first
        breaking = get_breaking_changes(commits)
        if breaking:
            lines.extend([BREAKING_HEADER, ""])
            lines.extend(_format_commit(c, remote) for c in breaking)
            lines.append("")

        grouped = group_commits_by_type(commits)
        for commit_type in [*TYPE_ORDER, *sorted(set(grouped) - set(TYPE_ORDER))]:
            commits_of_type = grouped.get(commit_type)
            if not commits_of_type:
                continue
            lines.extend([f"### {TYPE_LABELS.get(commit_type, commit_type)}", ""])
            lines.extend(_format_commit(c, remote) for c in commits_of_type)
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def write_changelog(content: str, path: Path | None = None) -> None:
    """Write changelog content to ``path``, or to stdout when no path is given.

    Raises:
        ChangelogError: If the file cannot be written
    """
    if path is None:
        sys.stdout.write(content)
        return
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogError(f"Cannot write changelog to {path}: {e}") from e
    logger.debug("Wrote %d bytes to %s", len(content), path)


def generate_changelog(repo: ChangelogSource, *, verbose: bool = False) -> str:
    """Generate the full changelog of a repository.

    Args:
        repo: Repository to read tags and commits from
        verbose: Include every commit type

    Returns:
        Markdown changelog

    Raises:
        NoVersionTagsError: If no tag carries a valid semantic version
    """
    remote_url = repo.get_remote_url()
    remote = parse_remote_url(remote_url) if remote_url else None

    tag_map = normalize_tags(repo.get_tags())
    if not tag_map.versions:
        raise NoVersionTagsError("No valid semver tags found in repository")

    changelogs = assemble_releases(tag_map, repo, DeduplicationSet())
    return format_changelog(changelogs, remote, verbose=verbose)
