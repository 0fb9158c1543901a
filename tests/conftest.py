"""Shared fixtures for changelog-py tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from changelog_py.vcs.git import RawCommit
from tests.helpers import FakeRepository

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def feat_commit() -> RawCommit:
    return RawCommit("feat1234567890", "feat: add user authentication")


@pytest.fixture
def fix_commit() -> RawCommit:
    return RawCommit("fix12345678901", "fix(core): handle empty config")


@pytest.fixture
def breaking_commit() -> RawCommit:
    return RawCommit(
        "brk12345678901",
        "feat(api)!: drop v1 endpoints",
        "BREAKING CHANGE: /v1 routes are gone",
    )


@pytest.fixture
def sample_commits() -> list[RawCommit]:
    """A mixed history: conventional, breaking and free-form commits."""
    return [
        RawCommit("a000000000001", "feat: add login"),
        RawCommit("a000000000002", "fix(ui): align buttons"),
        RawCommit("a000000000003", "docs: update readme"),
        RawCommit("a000000000004", "chore: bump deps"),
        RawCommit("a000000000005", "refactor!: rename config keys"),
        RawCommit("a000000000006", "Merge branch 'main' into dev"),
        RawCommit("a000000000007", "WIP"),
    ]


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def temp_pyproject(tmp_path: Path) -> Path:
    """A project directory with a [tool.changelog-py] section."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[project]
name = "test-project"
version = "1.0.0"

[tool.changelog-py.changelog]
path = "CHANGES.md"
include_all_types = true

[tool.changelog-py.bump]
prefix = "v"
suffix = "-rc"
"""
    )
    return tmp_path
