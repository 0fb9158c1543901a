"""Allow running as ``python -m changelog_py``."""

from __future__ import annotations

from changelog_py.cli.app import main

if __name__ == "__main__":
    main()
