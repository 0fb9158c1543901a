"""Git backend.

Thin wrapper around the ``git`` executable providing the read-only
queries the changelog pipeline needs. Nothing here mutates repository
state.

Every accessor is fallible-to-empty: a failing git command (no remote
configured, a tag without reachable history, ...) is logged and turned
into an absence value (``[]``, ``""`` or ``None``) instead of raising.
The only error that escapes is :class:`NotAGitRepositoryError`, raised
on construction.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from changelog_py.exceptions import GitError, NotAGitRepositoryError

logger = logging.getLogger(__name__)

# Unit and record separators keep subjects and bodies containing "|" or
# newlines unambiguous.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"--format=%H{_FIELD_SEP}%s{_FIELD_SEP}%b{_RECORD_SEP}"


@dataclass(frozen=True, slots=True)
class RawCommit:
    """A commit as read from git, before any interpretation."""

    sha: str
    subject: str
    body: str = ""


def parse_log_output(output: str) -> list[RawCommit]:
    """Parse ``git log`` output produced with the record-separated format.

    Args:
        output: Raw stdout of ``git log`` using ``_LOG_FORMAT``

    Returns:
        Commits in the order git printed them
    """
    commits: list[RawCommit] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record.strip():
            continue
        sha, _, rest = record.partition(_FIELD_SEP)
        subject, _, body = rest.partition(_FIELD_SEP)
        commits.append(RawCommit(sha=sha.strip(), subject=subject, body=body.strip()))
    return commits


class GitRepository:
    """Read-only view of a git working tree."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else Path.cwd()
        if not self.is_git_repository(self.path):
            raise NotAGitRepositoryError(f"{self.path} is not a git repository")

    @staticmethod
    def is_git_repository(path: Path) -> bool:
        """Return True if ``path`` is inside a git working tree."""
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--is-inside-work-tree"],
                cwd=path,
                capture_output=True,
                text=True,
                check=True,
            )
        except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
            return False
        return result.stdout.strip() == "true"

    def _run(self, *args: str) -> str:
        """Run a git command in the repository and return its stdout.

        Raises:
            GitError: If git is missing or the command exits non-zero
        """
        cmd = ["git", *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def get_tags(self) -> list[str]:
        """List all tag names, in no particular order."""
        try:
            output = self._run("tag")
        except GitError as e:
            logger.debug("Could not list tags: %s", e)
            return []
        return [line.strip() for line in output.splitlines() if line.strip()]

    def get_last_tag(self) -> str | None:
        """Return the most recent tag reachable from HEAD, if any."""
        try:
            output = self._run("describe", "--tags", "--abbrev=0")
        except GitError as e:
            logger.debug("No reachable tag: %s", e)
            return None
        return output.strip() or None

    def get_tag_date(self, tag: str) -> str:
        """Return the commit date of ``tag`` as ``YYYY-MM-DD``, or ``""``."""
        try:
            output = self._run("log", "-1", "--format=%as", tag, "--")
        except GitError as e:
            logger.debug("Could not resolve date of %s: %s", tag, e)
            return ""
        return output.strip()

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def get_commits(self, ref: str) -> list[RawCommit]:
        """Return all non-merge commits reachable from ``ref``, newest first."""
        try:
            output = self._run("log", ref, _LOG_FORMAT, "--no-merges", "--")
        except GitError as e:
            logger.debug("Could not read log of %s: %s", ref, e)
            return []
        return parse_log_output(output)

    def get_commits_since(self, ref: str) -> list[RawCommit]:
        """Return non-merge commits in ``ref..HEAD``, newest first."""
        try:
            output = self._run("log", f"{ref}..HEAD", _LOG_FORMAT, "--no-merges", "--")
        except GitError as e:
            logger.debug("Could not read log since %s: %s", ref, e)
            return []
        return parse_log_output(output)

    # ------------------------------------------------------------------
    # Remote
    # ------------------------------------------------------------------

    def get_remote_url(self) -> str | None:
        """Return the URL of the ``origin`` remote, if configured."""
        try:
            output = self._run("remote", "get-url", "origin")
        except GitError as e:
            logger.debug("No origin remote: %s", e)
            return None
        return output.strip() or None
