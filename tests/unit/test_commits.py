"""Tests for conventional commit parsing."""

from __future__ import annotations

import pytest

from changelog_py.core.commits import (
    ALL_TYPES,
    ConventionalCommit,
    get_breaking_changes,
    group_commits_by_type,
    is_visible_type,
    normalize_commit,
    parse_commits,
    parse_conventional_commit,
)
from changelog_py.vcs.git import RawCommit
from tests.helpers import commit


class TestParseConventionalCommit:
    """Tests for parse_conventional_commit()."""

    def test_parse_simple_feat(self):
        """Parse a simple feat commit."""
        pc = parse_conventional_commit(commit("feat: add new feature", sha="abc123"))

        assert pc is not None
        assert pc.sha == "abc123"
        assert pc.commit_type == "feat"
        assert pc.scope is None
        assert pc.subject == "add new feature"
        assert pc.raw == "feat: add new feature"
        assert not pc.is_breaking

    def test_parse_with_scope(self):
        """Parse commit with scope."""
        pc = parse_conventional_commit(commit("fix(api): handle null response"))

        assert pc is not None
        assert pc.commit_type == "fix"
        assert pc.scope == "api"
        assert pc.subject == "handle null response"

    def test_scope_with_hyphen(self):
        """Scopes may contain hyphens."""
        pc = parse_conventional_commit(commit("fix(date-picker): off by one"))

        assert pc is not None
        assert pc.scope == "date-picker"

    def test_parse_breaking_with_exclamation(self):
        """Parse breaking change with ! indicator."""
        pc = parse_conventional_commit(commit("feat!: redesign API"))

        assert pc is not None
        assert pc.is_breaking
        assert pc.commit_type == "feat"

    def test_parse_breaking_with_scope_and_exclamation(self):
        """Parse breaking change with scope and ! indicator."""
        pc = parse_conventional_commit(commit("feat(core)!: change config format"))

        assert pc is not None
        assert pc.is_breaking
        assert pc.scope == "core"

    @pytest.mark.parametrize(
        "body",
        [
            "BREAKING CHANGE: old API removed",
            "Some details.\n\nBREAKING-CHANGE: old API removed",
            "breaking change: lower case footer",
        ],
    )
    def test_parse_breaking_in_body(self, body: str):
        """A BREAKING CHANGE footer at the start of a body line marks the commit breaking."""
        pc = parse_conventional_commit(commit("feat: new feature", body=body))

        assert pc is not None
        assert pc.is_breaking

    def test_breaking_footer_must_start_line(self):
        """The footer is only recognized at the start of a line."""
        pc = parse_conventional_commit(
            commit("fix: typo", body="This is not a BREAKING CHANGE: really")
        )

        assert pc is not None
        assert not pc.is_breaking

    def test_exclamation_in_description_is_not_breaking(self):
        """Only a '!' right before the colon counts."""
        pc = parse_conventional_commit(commit("fix: handle 'wow!: x' strings"))

        assert pc is not None
        assert not pc.is_breaking

    def test_case_insensitive_type(self):
        """Commit types are case-insensitive and normalized to lowercase."""
        pc = parse_conventional_commit(commit("FEAT(UI): Upper Case"))

        assert pc is not None
        assert pc.commit_type == "feat"
        assert pc.scope == "UI"
        assert pc.subject == "Upper Case"

    def test_subject_trimmed(self):
        """Surrounding whitespace is removed from the description."""
        pc = parse_conventional_commit(commit("fix:    padded subject   "))

        assert pc is not None
        assert pc.subject == "padded subject"

    @pytest.mark.parametrize(
        "subject",
        [
            "Updated the readme file",
            "Merge branch 'main'",
            "feature: not a known type",
            "unknown: some change",
            "feat add missing colon",
            "feat(): empty scope",
        ],
    )
    def test_parse_non_conventional(self, subject: str):
        """Non-conventional subjects yield None."""
        assert parse_conventional_commit(commit(subject)) is None

    @pytest.mark.parametrize("commit_type", ALL_TYPES)
    def test_all_types_recognized(self, commit_type: str):
        """Every type of the vocabulary is recognized."""
        pc = parse_conventional_commit(commit(f"{commit_type}: some change"))

        assert pc is not None
        assert pc.commit_type == commit_type

    def test_from_raw_matches_function(self):
        """ConventionalCommit.from_raw() is the same parser."""
        raw = RawCommit("deadbeef", "perf(db): faster query")

        assert ConventionalCommit.from_raw(raw) == parse_conventional_commit(raw)

    def test_short_sha(self):
        """short_sha is the first seven characters."""
        pc = parse_conventional_commit(commit("fix: x", sha="abcdef1234567"))

        assert pc is not None
        assert pc.short_sha == "abcdef1"


class TestParseCommits:
    """Tests for parse_commits()."""

    def test_drops_non_conventional(self, sample_commits: list[RawCommit]):
        """Only conventional commits survive, in order."""
        parsed = parse_commits(sample_commits)

        assert [pc.commit_type for pc in parsed] == ["feat", "fix", "docs", "chore", "refactor"]

    def test_empty(self):
        """No commits yields an empty list."""
        assert parse_commits([]) == []


class TestNormalizeCommit:
    """Tests for normalize_commit()."""

    def test_with_scope(self):
        """Scope is rendered in parentheses, everything lowercased."""
        pc = parse_conventional_commit(commit("Fix(UI): Align Buttons"))

        assert pc is not None
        assert normalize_commit(pc) == "fix(ui): align buttons"

    def test_without_scope(self):
        """Parentheses are omitted without a scope."""
        pc = parse_conventional_commit(commit("feat: Add Login"))

        assert pc is not None
        assert normalize_commit(pc) == "feat: add login"


class TestIsVisibleType:
    """Tests for is_visible_type()."""

    @pytest.mark.parametrize("commit_type", ["feat", "fix", "perf", "revert"])
    def test_visible_by_default(self, commit_type: str):
        """User-facing types are visible by default."""
        assert is_visible_type(commit_type, verbose=False)

    @pytest.mark.parametrize("commit_type", ["docs", "chore", "ci", "style", "refactor"])
    def test_hidden_by_default(self, commit_type: str):
        """Maintenance types are hidden by default."""
        assert not is_visible_type(commit_type, verbose=False)

    def test_verbose_shows_everything(self):
        """Verbose mode shows every type, even unknown ones."""
        assert is_visible_type("chore", verbose=True)
        assert is_visible_type("wip", verbose=True)


class TestGrouping:
    """Tests for group_commits_by_type() and get_breaking_changes()."""

    def test_group_by_type(self, sample_commits: list[RawCommit]):
        """Group commits by their type."""
        grouped = group_commits_by_type(parse_commits(sample_commits))

        assert set(grouped) == {"feat", "fix", "docs", "chore", "refactor"}
        assert grouped["fix"][0].scope == "ui"

    def test_get_breaking_changes(self, sample_commits: list[RawCommit]):
        """Get only breaking change commits."""
        breaking = get_breaking_changes(parse_commits(sample_commits))

        assert len(breaking) == 1
        assert breaking[0].commit_type == "refactor"
