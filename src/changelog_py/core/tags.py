"""Version tag normalization.

Tags in real repositories are inconsistent: ``v1.0.0``, ``1.0.0``,
``release-v1.0.0`` and ``old-prefix-v1.0.0`` may all name the same
release. This module extracts the semantic version from each tag,
collapses tags that share a version onto one canonical tag, and orders
the distinct versions by SemVer precedence.

Tags without a valid semantic version are dropped silently.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

import semver

logger = logging.getLogger(__name__)

# Optional "<anything>-" decoration, optional "v", then MAJOR.MINOR.PATCH
# with an optional pre-release suffix.
VERSION_EXTRACT_PATTERN = re.compile(r"(?:.*-)?v?(\d+\.\d+\.\d+(?:-[\w.]+)?)", re.ASCII)

_BARE_V_PATTERN = re.compile(r"^v\d")


@dataclass(frozen=True, slots=True)
class TagInfo:
    """A tag as found in git together with its normalized version."""

    original: str
    clean: str

    @property
    def display(self) -> str:
        return f"v{self.clean}"


@dataclass(frozen=True)
class TagMap:
    """Distinct versions in ascending SemVer order with their canonical tags."""

    versions: tuple[str, ...] = ()
    tags: dict[str, TagInfo] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.versions)

    def __iter__(self):
        return iter(self.versions)

    def __getitem__(self, version: str) -> TagInfo:
        return self.tags[version]


def extract_version(tag: str) -> str | None:
    """Extract the embedded semantic version from a tag name.

    >>> extract_version("old-prefix-v1.0.0")
    '1.0.0'
    >>> extract_version("v2.1.0-rc.1")
    '2.1.0-rc.1'
    >>> extract_version("latest") is None
    True
    """
    match = VERSION_EXTRACT_PATTERN.search(tag)
    return match.group(1) if match else None


def is_valid_version(tag: str) -> bool:
    """Return True if ``tag`` embeds a syntactically valid semantic version."""
    extracted = extract_version(tag)
    return extracted is not None and semver.Version.is_valid(extracted)


def is_pre_release(version: str) -> bool:
    """Return True if ``version`` carries a pre-release component."""
    try:
        parsed = semver.Version.parse(version)
    except ValueError:
        return False
    return bool(parsed.prerelease)


def _canonical_rank(info: TagInfo) -> tuple[int, int, str]:
    # Bare "v<digit>" tags first, then the least decorated, then name order.
    return (
        0 if _BARE_V_PATTERN.match(info.original) else 1,
        len(info.original),
        info.original,
    )


def normalize_tags(tags: Iterable[str]) -> TagMap:
    """Normalize raw tag names into an ordered, de-duplicated version map.

    When several tags map to the same version, the canonical one is the
    tag starting with a bare ``v`` followed by a digit, otherwise the
    shortest tag.

    Args:
        tags: Tag names in any order

    Returns:
        TagMap with versions sorted ascending by SemVer precedence
        (``1.0.0-alpha < 1.0.0-beta < 1.0.0``)
    """
    candidates: dict[str, list[TagInfo]] = {}

    for tag in tags:
        clean = extract_version(tag)
        if clean is None or not semver.Version.is_valid(clean):
            logger.debug("Ignoring tag without a semantic version: %s", tag)
            continue
        candidates.setdefault(clean, []).append(TagInfo(original=tag, clean=clean))

    canonical = {clean: min(infos, key=_canonical_rank) for clean, infos in candidates.items()}
    versions = tuple(sorted(canonical, key=semver.Version.parse))

    return TagMap(versions=versions, tags={v: canonical[v] for v in versions})


def sort_tags_by_semver(tags: Iterable[str]) -> list[str]:
    """Return the canonical original tags in ascending SemVer order.

    The input is left untouched.
    """
    tag_map = normalize_tags(tags)
    return [tag_map[version].original for version in tag_map]
