"""Configuration models.

Configuration lives in ``pyproject.toml`` under ``[tool.changelog-py]``.
Every field has a default, so an absent section yields a usable
configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


def validate_suffix(value: str) -> str:
    """Strip a pre-release suffix and reject one without a label.

    Raises:
        ValueError: If nothing but a separator remains
    """
    label = value.strip()
    if label in ("-", "."):
        raise ValueError("suffix must contain a pre-release label")
    return label


class ChangelogConfig(BaseModel):
    """Changelog output settings."""

    model_config = ConfigDict(extra="forbid")

    path: Path | None = Field(
        default=None,
        description="File to write the changelog to; stdout when unset",
    )
    include_all_types: bool = Field(
        default=False,
        description="Include docs, chore, ci, ... sections, not only feat/fix/perf/revert",
    )


class BumpConfig(BaseModel):
    """Version suggestion settings."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = Field(default="", description="Prepended to the suggested version")
    suffix: str = Field(
        default="",
        description="Pre-release label (e.g. '-rc'); enables the pre-release counter",
    )

    @field_validator("suffix")
    @classmethod
    def _suffix_label(cls, value: str) -> str:
        return validate_suffix(value)


class ChangelogPyConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    bump: BumpConfig = Field(default_factory=BumpConfig)
