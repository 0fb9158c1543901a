"""GitHub Actions entry point.

Inputs arrive as ``INPUT_<NAME>`` environment variables and results are
appended to the file named by ``GITHUB_OUTPUT``:

- ``bump: true`` -> ``version=<suggested version>``
- otherwise      -> the changelog is written to ``file`` and
  ``changelog=<file>`` is emitted
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.console import Console

from changelog_py.cli.app import configure_logging
from changelog_py.cli.commands.bump import run_bump
from changelog_py.config.models import validate_suffix
from changelog_py.core.changelog import generate_changelog, write_changelog
from changelog_py.exceptions import ChangelogPyError
from changelog_py.vcs.git import GitRepository

logger = logging.getLogger(__name__)

console = Console()


class ActionInputs(BaseModel):
    """Inputs declared by the action."""

    model_config = ConfigDict(extra="ignore")

    bump: bool = False
    prefix: str = ""
    suffix: str = ""
    file: Path = Path("CHANGELOG.md")
    verbose: bool = False
    working_directory: Path = Path(".")

    @field_validator("suffix")
    @classmethod
    def _suffix_label(cls, value: str) -> str:
        return validate_suffix(value)

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> ActionInputs:
        """Read inputs from the environment; empty inputs fall back to defaults.

        Raises:
            ValidationError: If an input has an invalid value
        """
        values: dict[str, str] = {}
        for name in cls.model_fields:
            # The runner keeps hyphens from the input name, e.g. INPUT_WORKING-DIRECTORY
            for key in (f"INPUT_{name.upper()}", f"INPUT_{name.upper().replace('_', '-')}"):
                value = env.get(key, "").strip()
                if value:
                    values[name] = value
                    break
        return cls.model_validate(values)


def set_output(name: str, value: str, env: Mapping[str, str]) -> None:
    """Append ``name=value`` to the step outputs file, if the runner provides one."""
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        logger.debug("GITHUB_OUTPUT not set; skipping output %s", name)
        return
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def run_action(inputs: ActionInputs, env: Mapping[str, str]) -> str:
    """Run the action and return the value written as its output.

    Raises:
        ChangelogPyError: On fatal preconditions or output failures
    """
    cwd = inputs.working_directory.resolve()
    repo = GitRepository(cwd)

    if inputs.bump:
        version = run_bump(repo, prefix=inputs.prefix, suffix=inputs.suffix)
        set_output("version", version, env)
        return version

    target = inputs.file if inputs.file.is_absolute() else cwd / inputs.file
    write_changelog(generate_changelog(repo, verbose=inputs.verbose), target)
    console.print(f"[green]✓[/] Changelog generated: [cyan]{inputs.file}[/]")
    set_output("changelog", str(inputs.file), env)
    return str(inputs.file)


def main(env: Mapping[str, str] | None = None) -> None:
    """Console script entry point for the action."""
    env = os.environ if env is None else env
    configure_logging(debug=env.get("RUNNER_DEBUG") == "1")

    try:
        inputs = ActionInputs.from_env(env)
    except ValidationError as e:
        print(f"::error::Invalid action inputs: {e}")
        raise SystemExit(1) from e

    try:
        run_action(inputs, env)
    except ChangelogPyError as e:
        print(f"::error::{e}")
        raise SystemExit(1) from e
