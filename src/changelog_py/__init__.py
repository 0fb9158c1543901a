"""changelog-py: changelogs from git tags and Conventional Commits."""

from __future__ import annotations

__version__ = "0.3.0"

__all__ = ["__version__"]
