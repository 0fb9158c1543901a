"""Next-version suggestion from conventional commits.

Breaking changes bump the major version, features the minor version and
fixes or performance improvements the patch version. Two conventions
refine this:

- While the major version is ``0`` a breaking change only bumps the
  minor version.
- A fix made during a pre-release cycle (last tag ``1.0.0-rc.2``) is
  absorbed into the upcoming stable release, so the suggestion is
  ``1.0.0`` rather than ``1.0.1``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

import semver

from changelog_py.core.commits import parse_commits
from changelog_py.core.tags import extract_version, is_pre_release

if TYPE_CHECKING:
    from changelog_py.vcs.git import RawCommit

logger = logging.getLogger(__name__)

BASELINE_VERSION_PATTERN = re.compile(r"v?(\d+\.\d+\.\d+)")
INITIAL_VERSION = "0.0.0"


class BumpType(StrEnum):
    """Magnitude of a version increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class BumpResult:
    """Outcome of a version suggestion."""

    current_version: str
    next_version: str
    bump_type: BumpType
    has_breaking: bool = False
    has_features: bool = False
    has_fixes: bool = False


_BUMPERS = {
    BumpType.MAJOR: semver.Version.bump_major,
    BumpType.MINOR: semver.Version.bump_minor,
    BumpType.PATCH: semver.Version.bump_patch,
}


class BumpHistory(Protocol):
    """Repository queries needed to suggest a release version."""

    def get_last_tag(self) -> str | None: ...

    def get_tags(self) -> list[str]: ...

    def get_commits(self, ref: str) -> list[RawCommit]: ...

    def get_commits_since(self, ref: str) -> list[RawCommit]: ...


def _baseline_version(last_tag: str | None) -> str:
    if last_tag is None:
        return INITIAL_VERSION
    match = BASELINE_VERSION_PATTERN.search(last_tag)
    return match.group(1) if match else INITIAL_VERSION


def _is_pre_release_tag(tag: str | None) -> bool:
    if tag is None:
        return False
    version = extract_version(tag)
    return version is not None and is_pre_release(version)


def suggest_next_version(commits: Iterable[RawCommit], last_tag: str | None) -> BumpResult:
    """Suggest the version following ``last_tag``.

    Args:
        commits: Commits made since ``last_tag``
        last_tag: Most recent release tag, or None before the first release

    Returns:
        BumpResult with the current and suggested versions
    """
    current_version = _baseline_version(last_tag)
    parsed = parse_commits(commits)

    has_breaking = any(c.is_breaking for c in parsed)
    has_features = any(c.commit_type == "feat" for c in parsed)
    has_fixes = any(c.commit_type in ("fix", "perf") for c in parsed)

    try:
        current = semver.Version.parse(current_version)
    except ValueError:
        # Zero-padded parts (v1.02.0, 2024.01.15) match the baseline pattern
        # but are not SemVer; such a baseline is left unchanged.
        logger.debug("Cannot increment non-SemVer baseline %s", current_version)
        current = None

    if has_breaking:
        zero_major = current is not None and current.major == 0
        bump_type = BumpType.MINOR if zero_major else BumpType.MAJOR
    elif has_features:
        bump_type = BumpType.MINOR
    elif has_fixes:
        bump_type = BumpType.PATCH
    else:
        bump_type = BumpType.NONE

    if bump_type == BumpType.NONE or current is None:
        next_version = current_version
    elif bump_type == BumpType.PATCH and _is_pre_release_tag(last_tag):
        # The baseline already has the pre-release part stripped.
        next_version = current_version
    else:
        next_version = str(_BUMPERS[bump_type](current))

    logger.debug(
        "Bump %s -> %s (%s) from %d conventional commit(s)",
        current_version,
        next_version,
        bump_type,
        len(parsed),
    )

    return BumpResult(
        current_version=current_version,
        next_version=next_version,
        bump_type=bump_type,
        has_breaking=has_breaking,
        has_features=has_features,
        has_fixes=has_fixes,
    )


def get_next_prerelease_version(base_version: str, suffix: str, all_tags: Iterable[str]) -> str:
    """Return the next numbered pre-release of ``base_version``.

    The counter is scoped to the (base version, suffix) pair: only tags
    named exactly ``[v]<base_version>-<suffix>.<N>`` count.

    >>> get_next_prerelease_version("1.0.0", "-rc", ["v1.0.0-rc.1", "v1.0.0-rc.5"])
    '1.0.0-rc.6'
    >>> get_next_prerelease_version("1.1.0", "rc.3", ["v1.0.0-rc.9"])
    '1.1.0-rc.1'

    Args:
        base_version: Version the pre-release leads up to
        suffix: Pre-release label, with or without leading ``-`` or
            trailing ``.<N>``
        all_tags: Every tag in the repository

    Returns:
        ``<base_version>-<suffix>.<N+1>``
    """
    label = re.sub(r"\.\d+$", "", suffix.removeprefix("-"))
    pattern = re.compile(rf"^v?{re.escape(base_version)}-{re.escape(label)}\.(\d+)$")

    highest = 0
    for tag in all_tags:
        match = pattern.match(tag)
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{base_version}-{label}.{highest + 1}"


def suggest_release_version(repo: BumpHistory, prefix: str = "", suffix: str = "") -> str:
    """Suggest the next release version for a repository.

    Args:
        repo: Repository to inspect
        prefix: Prepended to the result (e.g. ``"v"``)
        suffix: Pre-release label; when set the result is the next
            numbered pre-release of the suggested version

    Returns:
        Version string ready to be used as a tag name
    """
    last_tag = repo.get_last_tag()
    commits = repo.get_commits_since(last_tag) if last_tag else repo.get_commits("HEAD")
    result = suggest_next_version(commits, last_tag)

    version = result.next_version
    if suffix:
        version = get_next_prerelease_version(version, suffix, repo.get_tags())

    return f"{prefix}{version}"
