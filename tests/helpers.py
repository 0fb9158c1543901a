"""Test doubles shared across test modules."""

from __future__ import annotations

from dataclasses import dataclass, field

from changelog_py.vcs.git import RawCommit


@dataclass
class FakeRepository:
    """In-memory stand-in for GitRepository.

    ``logs`` maps a ref to the commits ``git log <ref>`` would return;
    ``since`` maps a ref to the commits of ``<ref>..HEAD``.
    """

    tags: list[str] = field(default_factory=list)
    logs: dict[str, list[RawCommit]] = field(default_factory=dict)
    since: dict[str, list[RawCommit]] = field(default_factory=dict)
    dates: dict[str, str] = field(default_factory=dict)
    last_tag: str | None = None
    remote_url: str | None = None
    requested: list[str] = field(default_factory=list)

    def get_tags(self) -> list[str]:
        return list(self.tags)

    def get_tag_date(self, tag: str) -> str:
        return self.dates.get(tag, "")

    def get_commits(self, ref: str) -> list[RawCommit]:
        self.requested.append(ref)
        return list(self.logs.get(ref, []))

    def get_commits_since(self, ref: str) -> list[RawCommit]:
        return list(self.since.get(ref, []))

    def get_last_tag(self) -> str | None:
        return self.last_tag

    def get_remote_url(self) -> str | None:
        return self.remote_url


def commit(subject: str, sha: str = "abc1234def5678", body: str = "") -> RawCommit:
    """Build a RawCommit with a default hash."""
    return RawCommit(sha=sha, subject=subject, body=body)
