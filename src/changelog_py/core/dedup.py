"""Cross-release commit de-duplication.

A cherry-picked or rebased change shows up under a new hash but with the
same description. Commits are therefore identified by their lowercased
``type:scope:subject`` key, and one :class:`DeduplicationSet` is shared by
every release processed during a run so a change is listed only once, in
the earliest release that contains it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changelog_py.core.commits import ConventionalCommit

logger = logging.getLogger(__name__)


def commit_key(commit: ConventionalCommit) -> str:
    """Identity of a commit for de-duplication purposes."""
    return f"{commit.commit_type}:{commit.scope or ''}:{commit.subject}".lower()


class DeduplicationSet:
    """Keys of every commit accepted so far during one run.

    The set only grows. Create one per run and pass it to each
    per-release step.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def has(self, commit: ConventionalCommit) -> bool:
        return commit_key(commit) in self._seen

    def add(self, commit: ConventionalCommit) -> None:
        self._seen.add(commit_key(commit))

    def __contains__(self, commit: object) -> bool:
        return self.has(commit)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._seen)


def dedupe_commits(
    commits: Iterable[ConventionalCommit],
    seen: DeduplicationSet,
) -> list[ConventionalCommit]:
    """Drop commits already recorded in ``seen`` and record the rest.

    Duplicates within ``commits`` itself are dropped too, keeping the
    first occurrence. Relative order is preserved.

    Args:
        commits: Commits of one release group
        seen: The run-wide de-duplication set, updated in place

    Returns:
        Commits not seen before
    """
    unique: list[ConventionalCommit] = []
    for commit in commits:
        if seen.has(commit):
            logger.debug("Dropping duplicate commit %s: %s", commit.short_sha, commit.raw)
            continue
        seen.add(commit)
        unique.append(commit)
    return unique
