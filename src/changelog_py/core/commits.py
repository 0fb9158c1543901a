"""Conventional commit parsing.

Parses commit subjects of the form ``type(scope)!: description`` with
``type`` drawn from the fixed Conventional Commits vocabulary. Commits
that do not follow the convention yield ``None`` and are excluded from
every changelog and version calculation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_py.vcs.git import RawCommit

logger = logging.getLogger(__name__)

ALL_TYPES: tuple[str, ...] = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

# Types shown in the changelog unless all types are requested
VISIBLE_TYPES: frozenset[str] = frozenset({"feat", "fix", "perf", "revert"})

CONVENTIONAL_COMMIT_PATTERN = re.compile(
    r"^(?P<type>" + "|".join(ALL_TYPES) + r")"
    r"(?:\((?P<scope>[\w-]+)\))?"
    r"(?P<breaking>!)?"
    r":\s*(?P<description>.+)$",
    re.IGNORECASE,
)

BREAKING_CHANGE_PATTERN = re.compile(r"^BREAKING[ -]CHANGE:", re.IGNORECASE | re.MULTILINE)


@dataclass(frozen=True, slots=True)
class ConventionalCommit:
    """A commit whose subject follows the Conventional Commits format."""

    sha: str
    commit_type: str
    scope: str | None
    subject: str
    raw: str
    is_breaking: bool = False

    @classmethod
    def from_raw(cls, commit: RawCommit) -> ConventionalCommit | None:
        """Parse a raw commit.

        Args:
            commit: Commit as read from git

        Returns:
            ConventionalCommit, or None if the subject does not follow
            the convention
        """
        match = CONVENTIONAL_COMMIT_PATTERN.match(commit.subject)
        if not match:
            return None

        is_breaking = bool(match.group("breaking")) or bool(
            BREAKING_CHANGE_PATTERN.search(commit.body)
        )

        return cls(
            sha=commit.sha,
            commit_type=match.group("type").lower(),
            scope=match.group("scope"),
            subject=match.group("description").strip(),
            raw=commit.subject,
            is_breaking=is_breaking,
        )

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


def parse_conventional_commit(commit: RawCommit) -> ConventionalCommit | None:
    """Parse a raw commit, returning None for non-conventional subjects."""
    return ConventionalCommit.from_raw(commit)


def parse_commits(commits: Iterable[RawCommit]) -> list[ConventionalCommit]:
    """Parse raw commits, dropping those outside the convention.

    Order is preserved.
    """
    parsed: list[ConventionalCommit] = []
    for commit in commits:
        conventional = ConventionalCommit.from_raw(commit)
        if conventional is None:
            logger.debug("Skipping non-conventional commit %s: %s", commit.sha[:7], commit.subject)
            continue
        parsed.append(conventional)
    return parsed


def normalize_commit(commit: ConventionalCommit) -> str:
    """Render ``type(scope): subject`` in lowercase, for display and debugging."""
    scope = f"({commit.scope})" if commit.scope else ""
    return f"{commit.commit_type}{scope}: {commit.subject}".lower().strip()


def is_visible_type(commit_type: str, verbose: bool) -> bool:
    """Return True if commits of ``commit_type`` belong in the changelog.

    In verbose mode every type is visible, including types outside the
    known vocabulary.
    """
    if verbose:
        return True
    return commit_type in VISIBLE_TYPES


def group_commits_by_type(
    commits: Iterable[ConventionalCommit],
) -> dict[str, list[ConventionalCommit]]:
    """Group commits by their type, preserving order within each group."""
    grouped: dict[str, list[ConventionalCommit]] = {}
    for commit in commits:
        grouped.setdefault(commit.commit_type, []).append(commit)
    return grouped


def get_breaking_changes(commits: Iterable[ConventionalCommit]) -> list[ConventionalCommit]:
    """Return only the breaking commits."""
    return [commit for commit in commits if commit.is_breaking]
