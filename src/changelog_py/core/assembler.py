"""Release assembly with pre-release rollup.

Walks the normalized versions oldest first and turns each tag's commits
into release groups. Pre-release tags (``1.0.0-rc.1``, ``1.0.0-rc.2``)
do not get entries of their own: their commits are held back and
published under the next stable tag. If the history ends in pre-releases
with no stable tag after them, the held-back commits are published
under the first pre-release of that trailing chain.

Versions must be processed in ascending order. ``git log <tag>`` is
cumulative, so a stable tag's log also contains every older release;
those commits are filtered out only because the shared
:class:`~changelog_py.core.dedup.DeduplicationSet` already recorded them
while the older tags were processed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from changelog_py.core.commits import parse_commits
from changelog_py.core.dedup import DeduplicationSet, dedupe_commits
from changelog_py.core.tags import is_pre_release

if TYPE_CHECKING:
    from collections.abc import Iterable

    from changelog_py.core.commits import ConventionalCommit
    from changelog_py.core.tags import TagMap
    from changelog_py.vcs.git import RawCommit

logger = logging.getLogger(__name__)


class TagHistory(Protocol):
    """Source of per-tag history. :class:`~changelog_py.vcs.git.GitRepository` satisfies it."""

    def get_tag_date(self, tag: str) -> str: ...

    def get_commits(self, ref: str) -> list[RawCommit]: ...


@dataclass(frozen=True, slots=True)
class TagChangelog:
    """One release entry of the changelog."""

    tag: str
    display_tag: str
    original_tag: str
    date: str
    commits: tuple[ConventionalCommit, ...] = ()


@dataclass(frozen=True, slots=True)
class ReleaseIdentity:
    """Where a release group points: its display tag, real tag and date."""

    display_tag: str
    original_tag: str
    date: str


@dataclass(frozen=True, slots=True)
class Rollup:
    """Commits held back from pre-release tags.

    Either idle (no identity, no commits) or accumulating. Every
    transition returns a new value, so identity and commits are always
    reset together.
    """

    identity: ReleaseIdentity | None = None
    commits: tuple[ConventionalCommit, ...] = ()

    @property
    def is_idle(self) -> bool:
        return self.identity is None

    def accumulate(
        self,
        identity: ReleaseIdentity,
        commits: Iterable[ConventionalCommit],
    ) -> Rollup:
        """Add a pre-release's commits. The first pre-release names the rollup."""
        return Rollup(
            identity=self.identity or identity,
            commits=self.commits + tuple(commits),
        )

    def release(
        self,
        version: str,
        identity: ReleaseIdentity,
        commits: Iterable[ConventionalCommit],
    ) -> TagChangelog:
        """Publish everything held back, plus ``commits``, under a stable tag."""
        return TagChangelog(
            tag=version,
            display_tag=identity.display_tag,
            original_tag=identity.original_tag,
            date=identity.date,
            commits=self.commits + tuple(commits),
        )

    def flush(self) -> TagChangelog | None:
        """Publish a trailing pre-release chain under its provisional identity."""
        if self.identity is None or not self.commits:
            return None
        return TagChangelog(
            tag=self.identity.display_tag.removeprefix("v"),
            display_tag=self.identity.display_tag,
            original_tag=self.identity.original_tag,
            date=self.identity.date,
            commits=self.commits,
        )


IDLE = Rollup()


def assemble_releases(
    tag_map: TagMap,
    history: TagHistory,
    seen: DeduplicationSet | None = None,
) -> list[TagChangelog]:
    """Build the release groups for every version in ``tag_map``.

    Args:
        tag_map: Normalized versions, ascending
        history: Provides tag dates and per-tag commit logs
        seen: Run-wide de-duplication set; a fresh one is used if omitted

    Returns:
        Release groups, oldest first
    """
    if seen is None:
        seen = DeduplicationSet()

    changelogs: list[TagChangelog] = []
    rollup = IDLE

    for version in tag_map.versions:
        tag_info = tag_map[version]
        identity = ReleaseIdentity(
            display_tag=tag_info.display,
            original_tag=tag_info.original,
            date=history.get_tag_date(tag_info.original),
        )

        commits = dedupe_commits(parse_commits(history.get_commits(tag_info.original)), seen)

        if is_pre_release(version):
            rollup = rollup.accumulate(identity, commits)
            logger.debug(
                "Holding %d commit(s) from pre-release %s (%d pending)",
                len(commits),
                tag_info.original,
                len(rollup.commits),
            )
            continue

        changelog = rollup.release(version, identity, commits)
        logger.debug("Release %s: %d commit(s)", tag_info.original, len(changelog.commits))
        changelogs.append(changelog)
        rollup = IDLE

    trailing = rollup.flush()
    if trailing is not None:
        logger.debug(
            "Publishing %d commit(s) from trailing pre-releases as %s",
            len(trailing.commits),
            trailing.display_tag,
        )
        changelogs.append(trailing)

    return changelogs
