"""Exception hierarchy for changelog-py.

Only a handful of conditions are errors at all. Malformed tags,
non-conventional commit subjects and unresolvable dates are expected
noise in real histories and are dropped or defaulted instead of raised.
"""

from __future__ import annotations


class ChangelogPyError(Exception):
    """Base class for all changelog-py errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ChangelogPyError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """A configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration values are invalid."""


# =============================================================================
# Git
# =============================================================================


class GitError(ChangelogPyError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class NotAGitRepositoryError(GitError):
    """The target directory is not inside a git working tree."""


# =============================================================================
# Changelog
# =============================================================================


class ChangelogError(ChangelogPyError):
    """Changelog generation or output failed."""


class NoVersionTagsError(ChangelogError):
    """The repository has no tag carrying a valid semantic version."""
