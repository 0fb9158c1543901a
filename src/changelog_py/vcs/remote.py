"""Remote URL parsing and link construction.

Used only by the changelog renderer; the release pipeline itself works
with raw hashes and tag names and never builds URLs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, urlparse

_SSH_PATTERN = re.compile(r"^git@([^:]+):(.+?)(?:\.git)?$")


@dataclass(frozen=True, slots=True)
class RemoteInfo:
    """Host and repository coordinates of a hosted remote."""

    host: str
    owner: str
    repo: str

    @property
    def base_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.repo}"


def parse_remote_url(url: str) -> RemoteInfo | None:
    """Extract host, owner and repository from a remote URL.

    Supports the SSH shorthand (``git@github.com:owner/repo.git``) and
    HTTP(S) URLs. Nested groups are kept in ``repo``
    (``gitlab.com/group/sub/project`` gives owner ``group`` and repo
    ``sub/project``).

    Args:
        url: Remote URL as reported by git

    Returns:
        Parsed remote, or None for unsupported or incomplete URLs
    """
    url = url.strip()
    if url.startswith("git@"):
        match = _SSH_PATTERN.match(url)
        if not match:
            return None
        host, path = match.group(1), match.group(2)
    elif url.startswith(("https://", "http://")):
        parsed = urlparse(url)
        if not parsed.hostname:
            return None
        host = parsed.hostname
        path = parsed.path.lstrip("/").removesuffix("/").removesuffix(".git")
    else:
        return None

    owner, _, repo = path.partition("/")
    if not owner or not repo:
        return None
    return RemoteInfo(host=host, owner=owner, repo=repo)


def build_commit_url(remote: RemoteInfo, sha: str) -> str:
    return f"{remote.base_url}/commit/{sha}"


def build_issue_url(remote: RemoteInfo, issue: str) -> str:
    return f"{remote.base_url}/issues/{issue}"


def build_pull_request_url(remote: RemoteInfo, pr: str) -> str:
    return f"{remote.base_url}/pull/{pr}"


def build_release_tag_url(remote: RemoteInfo, tag: str) -> str:
    return f"{remote.base_url}/releases/tag/{quote(tag, safe='')}"


def build_compare_url(remote: RemoteInfo, base: str, head: str) -> str:
    """Link comparing two refs, ``base...head``."""
    return f"{remote.base_url}/compare/{quote(base, safe='')}...{quote(head, safe='')}"
