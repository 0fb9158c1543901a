"""Version-control access for changelog-py."""

from __future__ import annotations

from changelog_py.vcs.git import GitRepository, RawCommit
from changelog_py.vcs.remote import RemoteInfo, parse_remote_url

__all__ = [
    "GitRepository",
    "RawCommit",
    "RemoteInfo",
    "parse_remote_url",
]
