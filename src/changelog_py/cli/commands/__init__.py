"""CLI command implementations."""

from __future__ import annotations

from changelog_py.cli.commands.bump import run_bump
from changelog_py.cli.commands.generate import run_generate

__all__ = ["run_bump", "run_generate"]
