"""Core business logic for changelog-py.

This module contains the fundamental building blocks:
- Tag normalization and SemVer ordering
- Conventional commit parsing
- Cross-release commit de-duplication
- Release assembly with pre-release rollup
- Next-version suggestion
- Markdown rendering
"""

from __future__ import annotations

from changelog_py.core.assembler import Rollup, TagChangelog, assemble_releases
from changelog_py.core.bump import (
    BumpResult,
    BumpType,
    get_next_prerelease_version,
    suggest_next_version,
    suggest_release_version,
)
from changelog_py.core.changelog import format_changelog, generate_changelog, write_changelog
from changelog_py.core.commits import (
    ConventionalCommit,
    is_visible_type,
    normalize_commit,
    parse_commits,
    parse_conventional_commit,
)
from changelog_py.core.dedup import DeduplicationSet, dedupe_commits
from changelog_py.core.tags import (
    TagInfo,
    TagMap,
    extract_version,
    is_pre_release,
    is_valid_version,
    normalize_tags,
    sort_tags_by_semver,
)

__all__ = [
    # Bump
    "BumpResult",
    "BumpType",
    # Commits
    "ConventionalCommit",
    # Dedup
    "DeduplicationSet",
    # Assembly
    "Rollup",
    "TagChangelog",
    # Tags
    "TagInfo",
    "TagMap",
    "assemble_releases",
    "dedupe_commits",
    "extract_version",
    # Changelog
    "format_changelog",
    "generate_changelog",
    "get_next_prerelease_version",
    "is_pre_release",
    "is_valid_version",
    "is_visible_type",
    "normalize_commit",
    "normalize_tags",
    "parse_commits",
    "parse_conventional_commit",
    "sort_tags_by_semver",
    "suggest_next_version",
    "suggest_release_version",
    "write_changelog",
]
